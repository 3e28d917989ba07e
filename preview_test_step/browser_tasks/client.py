"""Browser Use task service client."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from preview_test_step.browser_tasks.models import Task
from preview_test_step.config import BrowserUseConfig

log = logging.getLogger(__name__)

CREATED_STATUSES = frozenset([200, 201, 202])


@dataclass(frozen=True, kw_only=True)
class BrowserUseClient:
    """Client for creating and inspecting Browser Use tasks.

    A single instance is shared by all concurrently running test cases.
    """

    config: BrowserUseConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: BrowserUseConfig
    ) -> AsyncGenerator["BrowserUseClient", None]:
        """Create client with managed session lifecycle."""
        headers = {
            "X-Browser-Use-API-Key": config.api_key.get_secret_value(),
            "Accept": "application/json",
        }
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def create_task(self, task: str) -> str:
        """Create a task from a free-text description and return its ID."""
        async with self.session.post("tasks", json={"task": task}) as response:
            if response.status not in CREATED_STATUSES:
                text = await response.text()
                raise RuntimeError(f"Failed to create task: {response.status} {text}")
            data = await response.json()

        task_id = data.get("id")
        if not isinstance(task_id, str):
            raise RuntimeError("Task ID not found in response")

        log.info("Created task %s", task_id)
        return task_id

    async def get_task(self, task_id: str) -> Task:
        """Get task by ID."""
        async with self.session.get(f"tasks/{task_id}") as response:
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(f"Failed to get task: {response.status} {text}")
            data = await response.json()

        return Task.model_validate(data)
