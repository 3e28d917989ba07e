"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True, kw_only=True)
class TestExecutionResult:
    """Outcome of a single test case.

    Only title and status are reported downstream, the remaining fields are
    diagnostics for logs.
    """

    __test__ = False

    title: str
    status: Literal["success", "fail"]
    task_id: str | None = None
    duration: float = 0.0
    message: str | None = None

    def to_output(self) -> dict[str, Any]:
        """Serialize to the downstream schema."""
        return {"title": self.title, "status": self.status}


@dataclass(frozen=True, kw_only=True)
class TestExecutionOutput:
    """Aggregated output of the test execution step."""

    __test__ = False

    needs_testing: bool
    test_cases: Sequence[TestExecutionResult]

    @property
    def has_failures(self) -> bool:
        """Whether any test case failed."""
        return any(result.status == "fail" for result in self.test_cases)

    def to_output(self) -> dict[str, Any]:
        """Serialize to the downstream schema."""
        return {
            "needsTesting": self.needs_testing,
            "testCases": [result.to_output() for result in self.test_cases],
        }
