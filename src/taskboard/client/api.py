"""Async client for the Taskboard HTTP API."""

from typing import Any

import httpx
from loguru import logger

from taskboard.schemas.attachment import AttachmentCreate, AttachmentResponse
from taskboard.schemas.task import TaskCreate, TaskUpdate, TaskResponse
from taskboard.services.errors import TaskNotFoundError


class TaskApiClient:
    """One method per gateway operation.

    404 responses are translated back into the service layer's not-found
    signals: ``None`` for reads and updates, ``False`` for deletes, and
    ``TaskNotFoundError`` for attachment creation. Any other error status
    raises ``httpx.HTTPStatusError``.
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "TaskApiClient":
        """Build a client with its own connection pool."""
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self.http.request(method, url, **kwargs)
        logger.debug("{} {} -> {}", method, url, response.status_code)
        return response

    # Tasks

    async def create_task(self, data: TaskCreate) -> TaskResponse:
        response = await self._request(
            "POST", "/api/tasks", json=data.model_dump(mode="json")
        )
        response.raise_for_status()
        return TaskResponse.model_validate(response.json())

    async def get_tasks(self) -> list[TaskResponse]:
        response = await self._request("GET", "/api/tasks")
        response.raise_for_status()
        return [TaskResponse.model_validate(item) for item in response.json()]

    async def get_task(self, task_id: int) -> TaskResponse | None:
        response = await self._request("GET", f"/api/tasks/{task_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        return TaskResponse.model_validate(response.json())

    async def update_task(self, task_id: int, **changes: Any) -> TaskResponse | None:
        """Send only the given keys; ``description=None`` clears, omission keeps."""
        payload = TaskUpdate(**changes).model_dump(mode="json", exclude_unset=True)
        response = await self._request("PATCH", f"/api/tasks/{task_id}", json=payload)
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        return TaskResponse.model_validate(response.json())

    async def delete_task(self, task_id: int) -> bool:
        response = await self._request("DELETE", f"/api/tasks/{task_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        response.raise_for_status()
        return True

    # Attachments

    async def create_attachment(self, data: AttachmentCreate) -> AttachmentResponse:
        response = await self._request(
            "POST", "/api/attachments", json=data.model_dump(mode="json")
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            raise TaskNotFoundError(data.task_id)
        response.raise_for_status()
        return AttachmentResponse.model_validate(response.json())

    async def get_attachments_by_task(self, task_id: int) -> list[AttachmentResponse]:
        response = await self._request("GET", f"/api/tasks/{task_id}/attachments")
        response.raise_for_status()
        return [AttachmentResponse.model_validate(item) for item in response.json()]

    async def delete_attachment(self, attachment_id: int) -> bool:
        response = await self._request("DELETE", f"/api/attachments/{attachment_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        response.raise_for_status()
        return True
