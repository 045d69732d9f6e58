"""Business logic for task operations."""

from datetime import timedelta

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models import Task, ensure_utc, utcnow
from taskboard.schemas.task import TaskCreate, TaskUpdate


class TaskService:
    """Service for task CRUD operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> list[Task]:
        """Get every task in insertion order."""
        result = await self.db.execute(select(Task).order_by(Task.id))
        return list(result.scalars())

    async def get_by_id(self, task_id: int) -> Task | None:
        """Get a single task by ID."""
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one_or_none()

    async def create(self, data: TaskCreate) -> Task:
        """Create a new task."""
        now = utcnow()
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status,
            priority=data.priority,
            due_date=data.due_date,
            created_at=now,
            updated_at=now,
        )
        self.db.add(task)
        await self.db.flush()

        logger.info("Created task {} ({!r})", task.id, task.title)
        return task

    async def update(self, task_id: int, data: TaskUpdate) -> Task | None:
        """Update a task.

        Writes only the fields present in ``data`` and always refreshes
        ``updated_at``, even when nothing else changed.
        """
        task = await self.get_by_id(task_id)
        if not task:
            logger.debug("Update skipped, task {} not found", task_id)
            return None

        update_data = data.changes()
        for key, value in update_data.items():
            setattr(task, key, value)

        # updated_at must move forward even if the clock has not ticked
        now = utcnow()
        previous = ensure_utc(task.updated_at)
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        task.updated_at = now

        await self.db.flush()

        logger.info("Updated task {} fields={}", task_id, sorted(update_data))
        return task

    async def delete(self, task_id: int) -> bool:
        """Delete a task; its attachments are removed by the store cascade."""
        task = await self.get_by_id(task_id)
        if not task:
            return False
        await self.db.delete(task)
        await self.db.flush()

        logger.info("Deleted task {}", task_id)
        return True
