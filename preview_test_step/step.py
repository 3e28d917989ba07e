"""Workflow step adapting the test executor to the pipeline runtime."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from preview_test_step.executor import TestExecutor
from preview_test_step.models.plan import PreviewEnvironment, TestPlan
from preview_test_step.models.result import TestExecutionOutput

log = logging.getLogger(__name__)

STEP_ID = "execute-tests"
TEST_PLAN_STEP_ID = "generate-test-plan"


class TestPlanNotFoundError(Exception):
    """Raised when the test plan step has not produced a result."""

    __test__ = False


class StepContext(Protocol):
    """Execution context handed to a step by the workflow runtime."""

    @property
    def input_data(self) -> Mapping[str, Any] | PreviewEnvironment:
        """Output of the preceding step."""

    def get_step_result(self, step_id: str) -> Any | None:
        """Return the result of an earlier step, or None if it has none."""


@dataclass(frozen=True, kw_only=True)
class WorkflowContext:
    """Immutable step context built from plain mappings."""

    input_data: Mapping[str, Any] | PreviewEnvironment
    step_results: Mapping[str, Any] = field(default_factory=dict)

    def get_step_result(self, step_id: str) -> Any | None:
        """Return the result of an earlier step, or None if it has none."""
        return self.step_results.get(step_id)


@dataclass(frozen=True, kw_only=True)
class ExecuteTestsStep:
    """Runs the planned test cases against the preview environment."""

    __test__ = False

    executor: TestExecutor
    id: str = STEP_ID

    async def execute(self, context: StepContext) -> TestExecutionOutput:
        """Execute the step.

        Raises:
            TestPlanNotFoundError: If the test plan step has no result

        """
        plan_result = context.get_step_result(TEST_PLAN_STEP_ID)
        if plan_result is None:
            raise TestPlanNotFoundError("Test plan step result not found")

        plan = TestPlan.model_validate(plan_result)
        preview = PreviewEnvironment.model_validate(context.input_data)

        log.info(
            "Running step %s: needs_testing=%s, test_cases=%d",
            self.id,
            plan.needs_testing,
            len(plan.test_cases),
        )
        return await self.executor.execute(
            preview.preview_url, plan.test_cases, plan.needs_testing
        )
