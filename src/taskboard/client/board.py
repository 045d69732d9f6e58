"""Task board controller: keeps client state in sync with the API."""

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from taskboard.client import state as transitions
from taskboard.client.api import TaskApiClient
from taskboard.client.state import BoardState
from taskboard.schemas.task import TaskCreate, TaskResponse


class TaskBoard:
    """Owns a ``BoardState`` and applies server responses to it.

    Failures from the API are logged here and never re-raised; the state is
    left as it was before the failed call.
    """

    def __init__(self, api: TaskApiClient, initial: BoardState | None = None):
        self.api = api
        self.state = initial or BoardState()

    async def load(self) -> BoardState:
        """Fetch the full task list."""
        try:
            tasks = await self.api.get_tasks()
        except httpx.HTTPError:
            logger.exception("Failed to load tasks")
            return self.state
        self.state = transitions.tasks_loaded(self.state, tasks)
        return self.state

    async def create(self, data: TaskCreate) -> TaskResponse | None:
        self.state = transitions.loading_changed(self.state, True)
        try:
            task = await self.api.create_task(data)
        except httpx.HTTPError:
            logger.exception("Failed to create task")
            return None
        finally:
            self.state = transitions.loading_changed(self.state, False)
        self.state = transitions.task_created(self.state, task)
        return task

    async def update(self, task_id: int, **changes: Any) -> TaskResponse | None:
        try:
            task = await self.api.update_task(task_id, **changes)
        except (ValidationError, httpx.HTTPError):
            logger.exception("Failed to update task {}", task_id)
            return None
        if task is None:
            # Selection keeps pointing at the stale task
            logger.error("Task not found for update: {}", task_id)
            return None
        self.state = transitions.task_updated(self.state, task)
        return task

    async def delete(self, task_id: int) -> bool:
        """Delete a task; it leaves local state once the call returns."""
        try:
            deleted = await self.api.delete_task(task_id)
        except httpx.HTTPError:
            logger.exception("Failed to delete task {}", task_id)
            return False
        if not deleted:
            logger.warning("Task {} was already gone on the server", task_id)
        self.state = transitions.task_deleted(self.state, task_id)
        return deleted

    def select(self, task: TaskResponse | None) -> BoardState:
        self.state = transitions.task_selected(self.state, task)
        return self.state

    def set_filters(self, *, status: str | None = None, priority: str | None = None) -> BoardState:
        self.state = transitions.filters_changed(self.state, status=status, priority=priority)
        return self.state

    def visible(self) -> list[TaskResponse]:
        return transitions.visible_tasks(self.state)
