"""CLI interface for Taskboard."""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

import httpx
import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taskboard.client import AttachmentPanel, TaskApiClient, TaskBoard
from taskboard.client.state import (
    ALL,
    PRIORITY_FILTERS,
    STATUS_FILTERS,
    file_kind,
    format_file_size,
    is_overdue,
    summary,
)
from taskboard.config import get_settings
from taskboard.logging_config import setup_logging
from taskboard.models import TaskPriority, TaskStatus
from taskboard.schemas.attachment import AttachmentResponse
from taskboard.schemas.task import TaskCreate, TaskResponse

app = typer.Typer(
    name="taskboard",
    help="Taskboard - track tasks and their attachments.",
    no_args_is_help=True,
)
console = Console()

PRIORITY_STYLES = {"high": "red", "medium": "yellow", "low": "green"}
STATUS_STYLES = {"completed": "green", "in_progress": "blue", "pending": "dim"}


@app.callback()
def main():
    """Configure logging before any command runs."""
    setup_logging(get_settings())


def run_async(coro):
    """Run async function in sync context, reporting API failures."""
    try:
        return asyncio.run(coro)
    except httpx.HTTPError as e:
        logger.error("API request failed: {}", e)
        console.print(f"[red]API request failed: {e}[/red]")
        raise typer.Exit(1)


def connect() -> TaskApiClient:
    settings = get_settings()
    return TaskApiClient.connect(settings.api_url, timeout=settings.api_timeout_seconds)


def parse_due(due: str) -> datetime:
    try:
        return datetime.fromisoformat(due.replace(" ", "T"))
    except ValueError:
        console.print(f"[red]Invalid date format: {due}[/red]")
        console.print("Use format: YYYY-MM-DD or YYYY-MM-DD HH:MM")
        raise typer.Exit(1)


def _styled(value: str, styles: dict[str, str]) -> str:
    style = styles.get(value, "white")
    return f"[{style}]{value.replace('_', ' ')}[/{style}]"


def render_task(task: TaskResponse, attachments: tuple[AttachmentResponse, ...]) -> Panel:
    lines = [
        f"[bold]{task.title}[/bold]",
        f"{_styled(task.priority.value, PRIORITY_STYLES)} | {_styled(task.status.value, STATUS_STYLES)}",
    ]
    if task.description:
        lines.append(f"\n{task.description}")
    if task.due_date:
        due = task.due_date.strftime("%Y-%m-%d %H:%M")
        if is_overdue(task):
            due = f"[red]{due} (overdue)[/red]"
        lines.append(f"\n[dim]Due:[/dim] {due}")
    lines.append(f"[dim]Created:[/dim] {task.created_at:%Y-%m-%d %H:%M}")
    lines.append(f"[dim]Last updated:[/dim] {task.updated_at:%Y-%m-%d %H:%M}")

    lines.append(f"\n[bold]Attachments ({len(attachments)})[/bold]")
    if not attachments:
        lines.append("[dim]No attachments yet[/dim]")
    for a in attachments:
        lines.append(
            f"  [dim]{a.id}[/dim] {a.original_name} "
            f"[cyan]{file_kind(a.mime_type)}[/cyan] {format_file_size(a.file_size)} "
            f"[dim]{a.created_at:%Y-%m-%d}[/dim]"
        )
    return Panel("\n".join(lines), title=f"Task {task.id}")


@app.command("list")
def list_tasks(
    status: str = typer.Option(ALL, "--status", "-s", help=f"One of: {', '.join(STATUS_FILTERS)}"),
    priority: str = typer.Option(ALL, "--priority", "-p", help=f"One of: {', '.join(PRIORITY_FILTERS)}"),
):
    """List tasks, optionally filtered by status and priority."""

    async def _list():
        async with connect() as api:
            task_board = TaskBoard(api)
            try:
                task_board.set_filters(status=status, priority=priority)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)
            await task_board.load()

            tasks = task_board.visible()
            if not tasks:
                if not task_board.state.tasks:
                    console.print("[dim]No tasks yet. Create your first task with 'taskboard add'.[/dim]")
                else:
                    console.print("[dim]No tasks found. Try adjusting your filters.[/dim]")
                return

            table = Table(title=summary(task_board.state))
            table.add_column("ID", style="dim", justify="right")
            table.add_column("Title", style="bold")
            table.add_column("Priority", justify="center")
            table.add_column("Status", justify="center")
            table.add_column("Due", width=16)

            for task in tasks:
                due_str = ""
                if task.due_date:
                    due_str = task.due_date.strftime("%Y-%m-%d %H:%M")
                    if is_overdue(task):
                        due_str = f"[red]{due_str}[/red]"

                title = task.title
                if task.status == TaskStatus.COMPLETED:
                    title = f"[strike dim]{title}[/strike dim]"

                table.add_row(
                    str(task.id),
                    title,
                    _styled(task.priority.value, PRIORITY_STYLES),
                    _styled(task.status.value, STATUS_STYLES),
                    due_str,
                )

            console.print(table)

    run_async(_list())


@app.command()
def show(
    task_id: int = typer.Argument(..., help="Task ID"),
):
    """Show a task with its attachments."""

    async def _show():
        async with connect() as api:
            task = await api.get_task(task_id)
            if not task:
                console.print(f"[red]Task not found: {task_id}[/red]")
                raise typer.Exit(1)

            panel = AttachmentPanel(api, task.id)
            attachments = await panel.refresh()
            console.print(render_task(task, attachments))

    run_async(_show())


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    description: Optional[str] = typer.Option(None, "--desc", "-d", help="Description"),
    status: TaskStatus = typer.Option(TaskStatus.PENDING, "--status", "-s", help="Initial status"),
    priority: TaskPriority = typer.Option(TaskPriority.MEDIUM, "--priority", "-p", help="Priority"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date (YYYY-MM-DD HH:MM)"),
):
    """Add a new task."""
    try:
        data = TaskCreate(
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=parse_due(due) if due else None,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid task: {e}[/red]")
        raise typer.Exit(1)

    async def _add():
        async with connect() as api:
            task_board = TaskBoard(api)
            task = await task_board.create(data)
            if not task:
                console.print("[red]Failed to create task[/red]")
                raise typer.Exit(1)

            console.print(Panel(
                f"[green]Created:[/green] {task.title}\n"
                f"[dim]ID: {task.id}[/dim]",
                title="Task Added",
            ))

    run_async(_add())


@app.command()
def update(
    task_id: int = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--desc", "-d", help="New description"),
    clear_description: bool = typer.Option(False, "--clear-desc", help="Remove the description"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help="New status"),
    priority: Optional[TaskPriority] = typer.Option(None, "--priority", "-p", help="New priority"),
    due: Optional[str] = typer.Option(None, "--due", help="New due date (YYYY-MM-DD HH:MM)"),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
):
    """Update a task. Only the given options are changed."""
    changes = {}
    if title is not None:
        changes["title"] = title
    if clear_description:
        changes["description"] = None
    elif description is not None:
        changes["description"] = description
    if status is not None:
        changes["status"] = status
    if priority is not None:
        changes["priority"] = priority
    if clear_due:
        changes["due_date"] = None
    elif due is not None:
        changes["due_date"] = parse_due(due)

    async def _update():
        async with connect() as api:
            task_board = TaskBoard(api)
            task = await task_board.update(task_id, **changes)
            if not task:
                console.print(f"[red]Could not update task {task_id}[/red]")
                raise typer.Exit(1)
            console.print(f"[green]Updated:[/green] {task.title}")

    run_async(_update())


@app.command()
def delete(
    task_id: int = typer.Argument(..., help="Task ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Delete a task and its attachments."""

    async def _delete():
        async with connect() as api:
            task = await api.get_task(task_id)
            if not task:
                console.print(f"[red]Task not found: {task_id}[/red]")
                raise typer.Exit(1)

            if not force:
                confirm = typer.confirm(f"Delete '{task.title}'?")
                if not confirm:
                    raise typer.Abort()

            task_board = TaskBoard(api)
            await task_board.delete(task.id)
            console.print(f"[red]Deleted:[/red] {task.title}")

    run_async(_delete())


@app.command()
def attach(
    task_id: int = typer.Argument(..., help="Task ID"),
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to attach"),
    mime_type: Optional[str] = typer.Option(None, "--mime-type", help="Override the guessed MIME type"),
):
    """Attach a file to a task (metadata only, the file is not uploaded)."""

    async def _attach():
        async with connect() as api:
            panel = AttachmentPanel(api, task_id)
            if mime_type:
                attachment = await panel.upload(path.name, path.stat().st_size, mime_type)
            else:
                attachment = await panel.upload_path(path)
            if not attachment:
                console.print(f"[red]Could not attach {path.name} to task {task_id}[/red]")
                raise typer.Exit(1)
            console.print(
                f"[green]Attached:[/green] {attachment.original_name} "
                f"({format_file_size(attachment.file_size)}) [dim]ID: {attachment.id}[/dim]"
            )

    run_async(_attach())


@app.command()
def detach(
    attachment_id: int = typer.Argument(..., help="Attachment ID"),
):
    """Remove an attachment."""

    async def _detach():
        async with connect() as api:
            deleted = await api.delete_attachment(attachment_id)
            if not deleted:
                console.print(f"[red]Attachment not found: {attachment_id}[/red]")
                raise typer.Exit(1)
            console.print(f"[red]Removed attachment[/red] {attachment_id}")

    run_async(_detach())


@app.command()
def server(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind to"),
):
    """Start the API server."""
    from taskboard.main import run_server

    settings = get_settings()
    console.print(
        f"[green]Starting Taskboard server at http://{host or settings.api_host}:{port or settings.api_port}[/green]"
    )
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    run_server(host=host, port=port)


if __name__ == "__main__":
    app()
