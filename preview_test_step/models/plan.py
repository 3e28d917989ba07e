"""Models for the upstream test plan and preview environment."""

from collections.abc import Sequence

from pydantic import Field

from preview_test_step.models.base import Model


class TestCase(Model):
    """Single test case produced by the planning step."""

    __test__ = False

    title: str = Field(..., description="Short human-readable test title")
    description: str = Field(..., description="What the test should verify")


class TestPlan(Model):
    """Result of the test plan generation step."""

    __test__ = False

    needs_testing: bool = Field(..., description="Whether the change needs testing")
    test_cases: Sequence[TestCase] = Field(..., description="Test cases to execute")


class PreviewEnvironment(Model):
    """Result of the preview environment step."""

    preview_url: str = Field(..., description="URL of the deployed preview")
