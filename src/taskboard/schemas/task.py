"""Task schemas."""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from taskboard.models import TaskStatus, TaskPriority, ensure_utc
from taskboard.schemas.base import BaseSchema


class TaskCreate(BaseSchema):
    """Schema for creating a task."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class TaskUpdate(BaseSchema):
    """Schema for updating a task.

    Only the keys present in the input are applied. A missing key keeps the
    stored value; an explicit null clears ``description`` or ``due_date``.
    ``title``, ``status`` and ``priority`` cannot be cleared.
    """

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    @field_validator("title", "status", "priority")
    @classmethod
    def reject_explicit_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("field cannot be null")
        return value

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    def changes(self) -> dict[str, Any]:
        """Return only the fields explicitly provided by the caller."""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseSchema):
    """Schema for task responses."""

    id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None
