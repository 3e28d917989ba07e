"""Test executor dispatching test cases to the Browser Use task service."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from preview_test_step.browser_tasks.client import BrowserUseClient
from preview_test_step.browser_tasks.models import Task
from preview_test_step.config import BrowserUseConfig
from preview_test_step.models.plan import TestCase
from preview_test_step.models.result import TestExecutionOutput, TestExecutionResult

log = logging.getLogger(__name__)


def build_task_description(preview_url: str, test_case: TestCase) -> str:
    """Compose the free-text instruction sent to the browser agent."""
    return (
        f"Navigate to {preview_url} and execute this test case: "
        f"{test_case.title}. {test_case.description}"
    )


@dataclass(frozen=True, kw_only=True)
class TestExecutor:
    """Runs every test case as an independent remote task."""

    __test__ = False

    client: BrowserUseClient
    config: BrowserUseConfig

    async def execute(
        self,
        preview_url: str,
        test_cases: Sequence[TestCase],
        needs_testing: bool,
    ) -> TestExecutionOutput:
        """Execute all test cases against the preview environment.

        Args:
            preview_url: URL of the deployed preview environment
            test_cases: Test cases from the planning step
            needs_testing: Whether testing is required at all

        Returns:
            Output with exactly one result per test case when testing is
            needed, an empty output otherwise

        """
        if not needs_testing:
            log.info("Testing not needed, skipping execution")
            return TestExecutionOutput(needs_testing=False, test_cases=[])

        log.info("Dispatching %d test case(s) to %s", len(test_cases), preview_url)
        results = await asyncio.gather(
            *(self._run_test_case(preview_url, test_case) for test_case in test_cases)
        )
        log.info("Test execution completed")

        return TestExecutionOutput(needs_testing=True, test_cases=results)

    async def _run_test_case(
        self, preview_url: str, test_case: TestCase
    ) -> TestExecutionResult:
        """Submit and await a single test case, converting errors to failures."""
        loop = asyncio.get_event_loop()
        started_at = loop.time()
        task_id: str | None = None

        try:
            task_id = await self.client.create_task(
                build_task_description(preview_url, test_case)
            )
            task = await self.wait_for_task(task_id)
        except Exception as e:
            log.error("Test case %r failed: %s", test_case.title, e, exc_info=e)
            return TestExecutionResult(
                title=test_case.title,
                status="fail",
                task_id=task_id,
                duration=loop.time() - started_at,
                message=str(e),
            )

        return TestExecutionResult(
            title=test_case.title,
            status="success" if task.passed else "fail",
            task_id=task_id,
            duration=loop.time() - started_at,
            message=task.output,
        )

    async def wait_for_task(self, task_id: str) -> Task:
        """Poll a task until it reaches a terminal status.

        Raises:
            TimeoutError: If the task is still in progress after the timeout
            RuntimeError: If the task reports an unknown status and unknown
                statuses are configured to fail

        """
        timeout = self.config.timeout
        deadline = asyncio.get_event_loop().time() + timeout

        while True:
            task = await self.client.get_task(task_id)

            if task.is_terminal:
                log.info("Task %s completed with status=%s", task_id, task.status)
                return task

            if not task.is_known_status:
                if self.config.unknown_status == "fail":
                    raise RuntimeError(
                        f"Task {task_id} reported unknown status {task.status!r}"
                    )
                log.warning(
                    "Task %s reported unknown status=%s, treating as in progress",
                    task_id,
                    task.status,
                )

            if asyncio.get_event_loop().time() >= deadline:
                raise TimeoutError(f"Task {task_id} timed out after {timeout:g} seconds")

            await asyncio.sleep(self.config.poll_interval)
