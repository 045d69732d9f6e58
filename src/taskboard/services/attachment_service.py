"""Attachment metadata service."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models import Attachment, Task, utcnow
from taskboard.schemas.attachment import AttachmentCreate
from taskboard.services.errors import TaskNotFoundError


class AttachmentService:
    """Service for attachment metadata operations.

    No file content is stored or removed here; only the database records.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: AttachmentCreate) -> Attachment:
        """Register an attachment for an existing task.

        Raises:
            TaskNotFoundError: if ``data.task_id`` does not reference a task.
        """
        task_result = await self.db.execute(
            select(Task.id).where(Task.id == data.task_id)
        )
        if task_result.scalar_one_or_none() is None:
            logger.warning("Attachment rejected, task {} not found", data.task_id)
            raise TaskNotFoundError(data.task_id)

        attachment = Attachment(
            task_id=data.task_id,
            filename=data.filename,
            original_name=data.original_name,
            file_size=data.file_size,
            mime_type=data.mime_type,
            created_at=utcnow(),
        )
        self.db.add(attachment)
        await self.db.flush()

        logger.info(
            "Created attachment {} ({!r}, {} bytes) on task {}",
            attachment.id,
            attachment.original_name,
            attachment.file_size,
            attachment.task_id,
        )
        return attachment

    async def get_by_task(self, task_id: int) -> list[Attachment]:
        """Get all attachments for a task.

        A task without attachments and a task that does not exist both
        yield an empty list.
        """
        result = await self.db.execute(
            select(Attachment)
            .where(Attachment.task_id == task_id)
            .order_by(Attachment.id)
        )
        return list(result.scalars())

    async def get_by_id(self, attachment_id: int) -> Attachment | None:
        """Get a single attachment by ID."""
        result = await self.db.execute(
            select(Attachment).where(Attachment.id == attachment_id)
        )
        return result.scalar_one_or_none()

    async def delete(self, attachment_id: int) -> bool:
        """Delete an attachment record. The owning task is left untouched."""
        attachment = await self.get_by_id(attachment_id)
        if not attachment:
            return False
        await self.db.delete(attachment)
        await self.db.flush()

        logger.info("Deleted attachment {}", attachment_id)
        return True
