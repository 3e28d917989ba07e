"""Configuration for the Browser Use task service."""

import os
from collections.abc import Mapping
from typing import Literal, Self

from pydantic import BaseModel, SecretStr

API_KEY_ENV_VAR = "BROWSER_USE_API_KEY"


class MissingApiKeyError(Exception):
    """Raised when no API key is available in the environment."""


class BrowserUseConfig(BaseModel):
    """Configuration for the Browser Use client and poll loop.

    Statuses the service reports outside the known vocabulary are either
    treated as in progress until the deadline ("wait") or fail the test
    case immediately ("fail").
    """

    api_key: SecretStr
    api_base_url: str = "https://api.browser-use.com/api/v2/"
    poll_interval: float = 2.0
    timeout: float = 300.0
    unknown_status: Literal["wait", "fail"] = "wait"

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] = os.environ, **overrides: object
    ) -> Self:
        """Build configuration with the API key read from the environment."""
        api_key = environ.get(API_KEY_ENV_VAR)
        if not api_key:
            raise MissingApiKeyError(f"{API_KEY_ENV_VAR} is not set")
        return cls.model_validate({"api_key": api_key, **overrides})
