"""Pydantic models for Browser Use API responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator
from pydantic.alias_generators import to_camel

TERMINAL_STATUSES: frozenset[str] = frozenset(["finished", "stopped"])

IN_PROGRESS_STATUSES: frozenset[str] = frozenset(
    ["created", "started", "running", "paused"]
)


class Task(BaseModel):
    """A task from the Browser Use API.

    Status is kept as a plain string so that values outside the documented
    vocabulary still parse.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    status: str
    is_success: StrictBool | None = None
    session_id: str | None = None
    task: str | None = None
    output: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @field_validator("is_success", mode="before")
    @classmethod
    def _only_boolean_success(cls, value: Any) -> Any:
        """Treat non-boolean success flags as unknown."""
        return value if isinstance(value, bool) else None

    @property
    def is_terminal(self) -> bool:
        """Whether no further progress will happen."""
        return self.status in TERMINAL_STATUSES

    @property
    def is_known_status(self) -> bool:
        """Whether the status belongs to the documented vocabulary."""
        return self.status in TERMINAL_STATUSES or self.status in IN_PROGRESS_STATUSES

    @property
    def passed(self) -> bool:
        """Whether the task finished and reported success."""
        return self.is_terminal and self.is_success is True
