"""Attachment API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.limits import limiter, attachment_rate_limit
from taskboard.database import get_db
from taskboard.schemas.attachment import AttachmentCreate, AttachmentResponse
from taskboard.services.attachment_service import AttachmentService
from taskboard.services.errors import TaskNotFoundError

router = APIRouter(tags=["attachments"])


@router.post(
    "/attachments",
    response_model=AttachmentResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createAttachment",
)
@limiter.limit(attachment_rate_limit)
async def create_attachment(
    request: Request,
    data: AttachmentCreate,
    db: AsyncSession = Depends(get_db),
):
    """Register attachment metadata for a task.

    Only metadata is accepted; no file content is uploaded or stored.
    """
    service = AttachmentService(db)
    try:
        attachment = await service.create(data)
    except TaskNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        )
    return AttachmentResponse.model_validate(attachment)


@router.get(
    "/tasks/{task_id}/attachments",
    response_model=list[AttachmentResponse],
    operation_id="getAttachmentsByTask",
)
async def list_attachments(
    task_id: int,
    db: AsyncSession = Depends(get_db),
):
    """List a task's attachments; unknown task ids yield an empty list."""
    service = AttachmentService(db)
    attachments = await service.get_by_task(task_id)
    return [AttachmentResponse.model_validate(a) for a in attachments]


@router.delete(
    "/attachments/{attachment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="deleteAttachment",
)
@limiter.limit(attachment_rate_limit)
async def delete_attachment(
    request: Request,
    attachment_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete an attachment record."""
    service = AttachmentService(db)
    deleted = await service.delete(attachment_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Attachment not found",
        )
