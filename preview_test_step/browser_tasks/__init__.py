"""Browser Use task service module."""

from preview_test_step.browser_tasks.client import BrowserUseClient
from preview_test_step.browser_tasks.models import Task

__all__ = ["BrowserUseClient", "Task"]
