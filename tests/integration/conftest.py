"""Fixtures for integration tests."""

from collections.abc import Generator

import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr

from preview_test_step.config import BrowserUseConfig

API_BASE_URL = "http://browser-use.test/api/v2/"


@pytest.fixture
def aioresponses() -> Generator[aioresponses_cls, None, None]:
    """Intercept aiohttp requests."""
    with aioresponses_cls() as mocked:
        yield mocked


@pytest.fixture
def config() -> BrowserUseConfig:
    """Create test configuration with fast polling."""
    return BrowserUseConfig(
        api_key=SecretStr("bu-api-key-123"),
        api_base_url=API_BASE_URL,
        poll_interval=0.01,
        timeout=0.2,
    )
