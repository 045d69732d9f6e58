"""Business logic services for Taskboard."""

from taskboard.services.errors import ServiceError, TaskNotFoundError
from taskboard.services.task_service import TaskService
from taskboard.services.attachment_service import AttachmentService

__all__ = ["ServiceError", "TaskNotFoundError", "TaskService", "AttachmentService"]
