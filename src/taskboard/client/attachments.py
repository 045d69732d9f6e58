"""Attachment panel for a single selected task."""

import mimetypes
import time
from pathlib import Path

import httpx
from loguru import logger
from pydantic import ValidationError

from taskboard.client.api import TaskApiClient
from taskboard.schemas.attachment import AttachmentCreate, AttachmentResponse
from taskboard.services.errors import TaskNotFoundError

DEFAULT_MIME_TYPE = "application/octet-stream"


def storage_filename(original_name: str, now: float | None = None) -> str:
    """Server-side name for an upload: epoch milliseconds plus the original name."""
    millis = int((time.time() if now is None else now) * 1000)
    return f"{millis}_{original_name}"


def guess_mime_type(original_name: str) -> str:
    mime_type, _ = mimetypes.guess_type(original_name)
    return mime_type or DEFAULT_MIME_TYPE


class AttachmentPanel:
    """Lists and edits the attachments of one task.

    Uploads only register metadata. File contents are never read or sent.
    """

    def __init__(self, api: TaskApiClient, task_id: int):
        self.api = api
        self.task_id = task_id
        self.attachments: tuple[AttachmentResponse, ...] = ()
        self.is_loading = False

    async def refresh(self) -> tuple[AttachmentResponse, ...]:
        try:
            items = await self.api.get_attachments_by_task(self.task_id)
        except httpx.HTTPError:
            logger.exception("Failed to load attachments for task {}", self.task_id)
            return self.attachments
        self.attachments = tuple(items)
        return self.attachments

    async def show_task(self, task_id: int) -> tuple[AttachmentResponse, ...]:
        """Point the panel at another task, reloading only if it changed."""
        if task_id != self.task_id:
            self.task_id = task_id
            self.attachments = ()
            return await self.refresh()
        return self.attachments

    async def upload(
        self,
        original_name: str,
        file_size: int,
        mime_type: str | None = None,
    ) -> AttachmentResponse | None:
        self.is_loading = True
        try:
            data = AttachmentCreate(
                task_id=self.task_id,
                filename=storage_filename(original_name),
                original_name=original_name,
                file_size=file_size,
                mime_type=mime_type or guess_mime_type(original_name),
            )
            attachment = await self.api.create_attachment(data)
        except (ValidationError, TaskNotFoundError, httpx.HTTPError):
            logger.exception("Failed to upload attachment {!r}", original_name)
            return None
        finally:
            self.is_loading = False
        self.attachments = (attachment, *self.attachments)
        return attachment

    async def upload_path(self, path: Path) -> AttachmentResponse | None:
        """Register a local file by name and size without reading it."""
        return await self.upload(path.name, path.stat().st_size)

    async def delete(self, attachment_id: int) -> bool:
        try:
            deleted = await self.api.delete_attachment(attachment_id)
        except httpx.HTTPError:
            logger.exception("Failed to delete attachment {}", attachment_id)
            return False
        self.attachments = tuple(a for a in self.attachments if a.id != attachment_id)
        return deleted
