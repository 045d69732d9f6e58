"""Task API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.limits import limiter, default_rate_limit
from taskboard.database import get_db
from taskboard.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Task not found",
    )


@router.get("", response_model=list[TaskResponse], operation_id="getTasks")
async def list_tasks(
    db: AsyncSession = Depends(get_db),
):
    """List every task. Filtering happens on the client."""
    service = TaskService(db)
    tasks = await service.get_all()
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createTask",
)
@limiter.limit(default_rate_limit)
async def create_task(
    request: Request,
    data: TaskCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new task."""
    service = TaskService(db)
    task = await service.create(data)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse, operation_id="getTask")
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a single task by ID."""
    service = TaskService(db)
    task = await service.get_by_id(task_id)
    if not task:
        raise _not_found()
    return TaskResponse.model_validate(task)


async def _update_task_impl(
    task_id: int,
    data: TaskUpdate,
    db: AsyncSession,
) -> TaskResponse:
    """Shared implementation for PUT and PATCH task updates."""
    service = TaskService(db)
    task = await service.update(task_id, data)
    if not task:
        raise _not_found()
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse, operation_id="updateTask")
@limiter.limit(default_rate_limit)
async def patch_task(
    request: Request,
    task_id: int,
    data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partially update a task (only specified fields are modified)."""
    return await _update_task_impl(task_id, data, db)


@router.put("/{task_id}", response_model=TaskResponse, operation_id="replaceTask")
@limiter.limit(default_rate_limit)
async def put_task(
    request: Request,
    task_id: int,
    data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a task. Same semantics as PATCH: absent fields are kept."""
    return await _update_task_impl(task_id, data, db)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="deleteTask",
)
@limiter.limit(default_rate_limit)
async def delete_task(
    request: Request,
    task_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a task and, through the store cascade, its attachments."""
    service = TaskService(db)
    deleted = await service.delete(task_id)
    if not deleted:
        raise _not_found()
