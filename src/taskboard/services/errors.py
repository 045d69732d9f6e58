"""Service layer exceptions."""


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskNotFoundError(ServiceError):
    """Raised when an operation requires a task that does not exist."""

    def __init__(self, task_id: int):
        super().__init__(f"Task with id {task_id} not found")
        self.task_id = task_id
