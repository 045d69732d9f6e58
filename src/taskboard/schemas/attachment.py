"""Attachment schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from taskboard.models import ensure_utc
from taskboard.schemas.base import BaseSchema


class AttachmentCreate(BaseSchema):
    """Schema for registering attachment metadata against a task."""

    task_id: int
    filename: str
    original_name: str
    file_size: int = Field(..., gt=0)
    mime_type: str


class AttachmentResponse(BaseSchema):
    """Schema for attachment responses."""

    id: int
    task_id: int
    filename: str
    original_name: str
    file_size: int
    mime_type: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)
