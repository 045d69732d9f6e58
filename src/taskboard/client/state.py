"""Client-side board state and its transitions.

``BoardState`` is immutable. Every transition takes the current state plus
an action payload and returns a new state, so callers own the state object
explicitly and can keep or discard any version of it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime

from taskboard.models import TaskStatus, ensure_utc, utcnow
from taskboard.schemas.task import TaskResponse

# Filter sentinel that disables a filter dimension
ALL = "all"

STATUS_FILTERS = (ALL, *(s.value for s in TaskStatus))
PRIORITY_FILTERS = (ALL, "high", "medium", "low")


@dataclass(frozen=True)
class BoardState:
    tasks: tuple[TaskResponse, ...] = ()
    selected: TaskResponse | None = None
    filter_status: str = ALL
    filter_priority: str = ALL
    is_loading: bool = False


def tasks_loaded(state: BoardState, tasks: list[TaskResponse]) -> BoardState:
    return replace(state, tasks=tuple(tasks))


def task_created(state: BoardState, task: TaskResponse) -> BoardState:
    """Newest tasks go first."""
    return replace(state, tasks=(task, *state.tasks))


def task_updated(state: BoardState, task: TaskResponse) -> BoardState:
    """Swap in the server's copy of the task and select it."""
    tasks = tuple(task if t.id == task.id else t for t in state.tasks)
    return replace(state, tasks=tasks, selected=task)


def task_deleted(state: BoardState, task_id: int) -> BoardState:
    tasks = tuple(t for t in state.tasks if t.id != task_id)
    return replace(state, tasks=tasks, selected=None)


def task_selected(state: BoardState, task: TaskResponse | None) -> BoardState:
    return replace(state, selected=task)


def loading_changed(state: BoardState, is_loading: bool) -> BoardState:
    return replace(state, is_loading=is_loading)


def filters_changed(
    state: BoardState,
    *,
    status: str | None = None,
    priority: str | None = None,
) -> BoardState:
    """Change one or both filters; ``None`` leaves a dimension as it is."""
    if status is not None and status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status!r}")
    if priority is not None and priority not in PRIORITY_FILTERS:
        raise ValueError(f"Unknown priority filter: {priority!r}")
    return replace(
        state,
        filter_status=state.filter_status if status is None else status,
        filter_priority=state.filter_priority if priority is None else priority,
    )


def visible_tasks(state: BoardState) -> list[TaskResponse]:
    """Tasks matching both the status and the priority filter."""
    return [
        t
        for t in state.tasks
        if (state.filter_status == ALL or t.status == state.filter_status)
        and (state.filter_priority == ALL or t.priority == state.filter_priority)
    ]


def summary(state: BoardState) -> str:
    return f"Showing {len(visible_tasks(state))} of {len(state.tasks)} tasks"


# Presentation helpers


def is_overdue(task: TaskResponse, now: datetime | None = None) -> bool:
    """A task is overdue when its due date has passed and it is not completed."""
    if task.due_date is None or task.status == TaskStatus.COMPLETED:
        return False
    now = now or utcnow()
    return ensure_utc(task.due_date) < ensure_utc(now)


_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """Human readable size, e.g. ``1.5 KB``."""
    if size <= 0:
        return "0 Bytes"
    exponent = min(int(math.log(size, 1024)), len(_SIZE_UNITS) - 1)
    # Guard against float rounding right at a unit boundary
    if 1024 ** (exponent + 1) <= size and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {_SIZE_UNITS[exponent]}"


def file_kind(mime_type: str) -> str:
    """Coarse category of a MIME type for display."""
    if mime_type.startswith("image/"):
        return "image"
    if mime_type.startswith("video/"):
        return "video"
    if mime_type.startswith("audio/"):
        return "audio"
    if "pdf" in mime_type:
        return "pdf"
    if "word" in mime_type:
        return "document"
    if "excel" in mime_type or "spreadsheet" in mime_type:
        return "spreadsheet"
    if "zip" in mime_type or "rar" in mime_type:
        return "archive"
    return "file"
