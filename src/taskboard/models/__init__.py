"""SQLAlchemy models for Taskboard."""

from taskboard.models.base import Base, utcnow, ensure_utc
from taskboard.models.task import Task, TaskStatus, TaskPriority
from taskboard.models.attachment import Attachment

__all__ = [
    "Base",
    "utcnow",
    "ensure_utc",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Attachment",
]
