"""Pydantic schemas for the Taskboard API."""

from taskboard.schemas.base import BaseSchema, HealthResponse
from taskboard.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
)
from taskboard.schemas.attachment import AttachmentCreate, AttachmentResponse

__all__ = [
    "BaseSchema",
    "HealthResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "AttachmentCreate",
    "AttachmentResponse",
]
