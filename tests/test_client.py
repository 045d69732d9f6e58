"""Tests for the client layer: board state, controller and attachment panel."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from taskboard.client import AttachmentPanel, BoardState, TaskApiClient, TaskBoard
from taskboard.client import state as transitions
from taskboard.client.attachments import guess_mime_type, storage_filename
from taskboard.models import TaskPriority, TaskStatus
from taskboard.schemas.attachment import AttachmentCreate
from taskboard.schemas.task import TaskCreate, TaskResponse
from taskboard.services.errors import TaskNotFoundError

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_task(task_id: int, status: str = "pending", priority: str = "medium", **fields) -> TaskResponse:
    return TaskResponse(
        id=task_id,
        title=fields.pop("title", f"Task {task_id}"),
        description=fields.pop("description", None),
        status=status,
        priority=priority,
        due_date=fields.pop("due_date", None),
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def grid_state():
    """One task for every status/priority combination."""
    tasks = []
    task_id = 1
    for status in TaskStatus:
        for priority in TaskPriority:
            tasks.append(make_task(task_id, status.value, priority.value))
            task_id += 1
    return transitions.tasks_loaded(BoardState(), tasks)


def failing_api() -> TaskApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return TaskApiClient(httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test"))


class TestBoardTransitions:
    """Pure state transitions."""

    def test_created_task_goes_first(self):
        state = transitions.tasks_loaded(BoardState(), [make_task(1), make_task(2)])

        new_state = transitions.task_created(state, make_task(3))

        assert [t.id for t in new_state.tasks] == [3, 1, 2]
        assert [t.id for t in state.tasks] == [1, 2]

    def test_updated_task_replaced_and_selected(self):
        state = transitions.tasks_loaded(BoardState(), [make_task(1), make_task(2)])
        changed = make_task(2, status="completed")

        new_state = transitions.task_updated(state, changed)

        assert new_state.tasks[1].status == TaskStatus.COMPLETED
        assert new_state.tasks[0] == state.tasks[0]
        assert new_state.selected == changed

    def test_deleted_task_removed_and_selection_cleared(self):
        state = transitions.tasks_loaded(BoardState(), [make_task(1), make_task(2)])
        state = transitions.task_selected(state, state.tasks[0])

        new_state = transitions.task_deleted(state, 1)

        assert [t.id for t in new_state.tasks] == [2]
        assert new_state.selected is None

    def test_filter_status_and_priority(self, grid_state):
        state = transitions.filters_changed(grid_state, status="pending", priority="high")

        visible = transitions.visible_tasks(state)

        assert len(visible) == 1
        assert visible[0].status == TaskStatus.PENDING
        assert visible[0].priority == TaskPriority.HIGH

    def test_all_disables_a_dimension(self, grid_state):
        by_status = transitions.filters_changed(grid_state, status="completed", priority="all")
        by_priority = transitions.filters_changed(grid_state, status="all", priority="low")

        assert {t.priority for t in transitions.visible_tasks(by_status)} == set(TaskPriority)
        assert all(t.status == TaskStatus.COMPLETED for t in transitions.visible_tasks(by_status))
        assert {t.status for t in transitions.visible_tasks(by_priority)} == set(TaskStatus)
        assert len(transitions.visible_tasks(grid_state)) == 9

    def test_filters_change_independently(self, grid_state):
        state = transitions.filters_changed(grid_state, status="pending")
        state = transitions.filters_changed(state, priority="low")

        assert state.filter_status == "pending"
        assert state.filter_priority == "low"

    def test_unknown_filter_rejected(self, grid_state):
        with pytest.raises(ValueError):
            transitions.filters_changed(grid_state, status="archived")

    def test_summary(self, grid_state):
        state = transitions.filters_changed(grid_state, status="pending")
        assert transitions.summary(state) == "Showing 3 of 9 tasks"


class TestPresentationHelpers:

    def test_overdue(self):
        past = NOW - timedelta(days=1)
        assert transitions.is_overdue(make_task(1, due_date=past), now=NOW)
        assert not transitions.is_overdue(make_task(2, status="completed", due_date=past), now=NOW)
        assert not transitions.is_overdue(make_task(3, due_date=NOW + timedelta(days=1)), now=NOW)
        assert not transitions.is_overdue(make_task(4), now=NOW)

    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 Bytes"),
            (512, "512 Bytes"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1 MB"),
            (5 * 1024**3, "5 GB"),
        ],
    )
    def test_format_file_size(self, size, expected):
        assert transitions.format_file_size(size) == expected

    @pytest.mark.parametrize(
        "mime_type, kind",
        [
            ("image/png", "image"),
            ("video/mp4", "video"),
            ("audio/mpeg", "audio"),
            ("application/pdf", "pdf"),
            ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", "document"),
            ("application/vnd.ms-excel", "spreadsheet"),
            ("application/zip", "archive"),
            ("text/plain", "file"),
        ],
    )
    def test_file_kind(self, mime_type, kind):
        assert transitions.file_kind(mime_type) == kind

    def test_storage_filename_is_time_prefixed(self):
        assert storage_filename("a b.txt", now=1700000000.5) == "1700000000500_a b.txt"

    def test_guess_mime_type(self):
        assert guess_mime_type("photo.png") == "image/png"
        assert guess_mime_type("no_extension") == "application/octet-stream"


class TestTaskApiClient:
    """Gateway client against the in-process app."""

    @pytest.mark.asyncio
    async def test_not_found_signals(self, api):
        assert await api.get_task(999) is None
        assert await api.update_task(999, title="Ghost") is None
        assert await api.delete_task(999) is False
        assert await api.delete_attachment(999) is False
        assert await api.get_attachments_by_task(999) == []

    @pytest.mark.asyncio
    async def test_create_attachment_missing_task_raises(self, api):
        with pytest.raises(TaskNotFoundError) as exc_info:
            await api.create_attachment(
                AttachmentCreate(
                    task_id=999,
                    filename="1_a.txt",
                    original_name="a.txt",
                    file_size=1,
                    mime_type="text/plain",
                )
            )
        assert exc_info.value.task_id == 999

    @pytest.mark.asyncio
    async def test_update_sends_only_given_keys(self, api):
        task = await api.create_task(TaskCreate(title="Keep", description="Stays"))

        renamed = await api.update_task(task.id, title="Renamed")
        cleared = await api.update_task(task.id, description=None)

        assert renamed.description == "Stays"
        assert cleared.title == "Renamed"
        assert cleared.description is None

    @pytest.mark.asyncio
    async def test_lifecycle_scenario(self, api):
        """Create, update, delete, then confirm the task is gone."""
        task = await api.create_task(
            TaskCreate(title="Test Task", status=TaskStatus.PENDING, priority=TaskPriority.MEDIUM)
        )
        assert task.id is not None
        assert task.due_date is None
        assert task.created_at == task.updated_at

        updated = await api.update_task(task.id, status=TaskStatus.COMPLETED)
        assert updated.status == TaskStatus.COMPLETED
        assert updated.title == task.title
        assert updated.priority == task.priority
        assert updated.updated_at > task.updated_at

        assert await api.delete_task(task.id) is True
        assert await api.get_task(task.id) is None


class TestTaskBoard:
    """Controller keeping local state in sync with the gateway."""

    @pytest.mark.asyncio
    async def test_load_and_create(self, api):
        await api.create_task(TaskCreate(title="Existing"))
        board = TaskBoard(api)

        await board.load()
        created = await board.create(TaskCreate(title="New"))

        assert [t.title for t in board.state.tasks] == ["New", "Existing"]
        assert board.state.tasks[0].id == created.id
        assert board.state.is_loading is False

    @pytest.mark.asyncio
    async def test_update_replaces_task(self, api):
        board = TaskBoard(api)
        task = await board.create(TaskCreate(title="Edit me"))

        updated = await board.update(task.id, priority=TaskPriority.HIGH)

        assert board.state.tasks[0].priority == TaskPriority.HIGH
        assert board.state.selected == updated

    @pytest.mark.asyncio
    async def test_update_misspelled_key_rejected(self, api, log_messages):
        board = TaskBoard(api)
        task = await board.create(TaskCreate(title="Typo"))

        assert await board.update(task.id, titel="Renamed") is None

        stored = await api.get_task(task.id)
        assert stored.title == "Typo"
        assert stored.updated_at == task.updated_at
        assert any("Failed to update task" in m for m in log_messages)

    @pytest.mark.asyncio
    async def test_update_not_found_keeps_state(self, api, log_messages):
        board = TaskBoard(api)
        task = await board.create(TaskCreate(title="Stale"))
        board.select(task)
        before = board.state

        result = await board.update(999, title="Ghost")

        assert result is None
        assert board.state == before
        assert board.state.selected == task
        assert any("not found" in m for m in log_messages)

    @pytest.mark.asyncio
    async def test_delete_removes_and_clears_selection(self, api):
        board = TaskBoard(api)
        keep = await board.create(TaskCreate(title="Keep"))
        drop = await board.create(TaskCreate(title="Drop"))
        board.select(drop)

        assert await board.delete(drop.id) is True

        assert [t.id for t in board.state.tasks] == [keep.id]
        assert board.state.selected is None
        assert await api.get_task(drop.id) is None

    @pytest.mark.asyncio
    async def test_filters_are_local(self, api):
        board = TaskBoard(api)
        await board.create(TaskCreate(title="A", priority=TaskPriority.HIGH))
        await board.create(TaskCreate(title="B", priority=TaskPriority.LOW))

        board.set_filters(priority="high")

        assert [t.title for t in board.visible()] == ["A"]
        assert len(board.state.tasks) == 2

    @pytest.mark.asyncio
    async def test_failures_logged_and_state_unchanged(self, log_messages):
        api = failing_api()
        board = TaskBoard(api)

        await board.load()
        assert await board.create(TaskCreate(title="Lost")) is None
        assert await board.update(1, title="Lost") is None
        assert await board.delete(1) is False
        await api.aclose()

        assert board.state == BoardState()
        assert any("Failed to load tasks" in m for m in log_messages)
        assert any("Failed to create task" in m for m in log_messages)
        assert any("Failed to delete task" in m for m in log_messages)


class TestAttachmentPanel:
    """Attachment panel scoped to one task."""

    @pytest.mark.asyncio
    async def test_upload_synthesizes_metadata(self, api):
        task = await api.create_task(TaskCreate(title="Docs"))
        panel = AttachmentPanel(api, task.id)

        attachment = await panel.upload("plan.pdf", 4096)

        assert attachment.original_name == "plan.pdf"
        assert attachment.filename.endswith("_plan.pdf")
        assert attachment.filename.split("_", 1)[0].isdigit()
        assert attachment.mime_type == "application/pdf"
        assert attachment.file_size == 4096
        assert panel.attachments == (attachment,)

    @pytest.mark.asyncio
    async def test_upload_long_file_name(self, api):
        task = await api.create_task(TaskCreate(title="Docs"))
        panel = AttachmentPanel(api, task.id)
        name = "a" * 246 + ".pdf"

        attachment = await panel.upload(name, 10)

        assert attachment is not None
        assert attachment.original_name == name
        assert attachment.filename.endswith(f"_{name}")

    @pytest.mark.asyncio
    async def test_newest_upload_first(self, api):
        task = await api.create_task(TaskCreate(title="Docs"))
        panel = AttachmentPanel(api, task.id)

        await panel.upload("a.txt", 1)
        await panel.upload("b.txt", 2)

        assert [a.original_name for a in panel.attachments] == ["b.txt", "a.txt"]

    @pytest.mark.asyncio
    async def test_upload_path_uses_file_metadata(self, api, tmp_path):
        task = await api.create_task(TaskCreate(title="Docs"))
        path = tmp_path / "notes.txt"
        path.write_text("hello world")
        panel = AttachmentPanel(api, task.id)

        attachment = await panel.upload_path(path)

        assert attachment.original_name == "notes.txt"
        assert attachment.file_size == len("hello world")
        assert attachment.mime_type == "text/plain"

    @pytest.mark.asyncio
    async def test_upload_to_missing_task_logged(self, api, log_messages):
        panel = AttachmentPanel(api, 999)

        assert await panel.upload("a.txt", 10) is None
        assert panel.attachments == ()
        assert any("Failed to upload attachment" in m for m in log_messages)

    @pytest.mark.asyncio
    async def test_upload_empty_file_rejected(self, api, log_messages):
        task = await api.create_task(TaskCreate(title="Docs"))
        panel = AttachmentPanel(api, task.id)

        assert await panel.upload("empty.txt", 0) is None
        assert await api.get_attachments_by_task(task.id) == []

    @pytest.mark.asyncio
    async def test_show_task_refreshes_on_change(self, api):
        first = await api.create_task(TaskCreate(title="First"))
        second = await api.create_task(TaskCreate(title="Second"))
        panel = AttachmentPanel(api, first.id)
        await panel.upload("first.txt", 1)
        await AttachmentPanel(api, second.id).upload("second.txt", 1)

        shown = await panel.show_task(second.id)

        assert [a.original_name for a in shown] == ["second.txt"]
        assert panel.task_id == second.id

    @pytest.mark.asyncio
    async def test_delete(self, api):
        task = await api.create_task(TaskCreate(title="Docs"))
        panel = AttachmentPanel(api, task.id)
        attachment = await panel.upload("a.txt", 1)

        assert await panel.delete(attachment.id) is True
        assert panel.attachments == ()
        assert await api.get_task(task.id) is not None

    @pytest.mark.asyncio
    async def test_task_delete_empties_panel_on_refresh(self, api):
        """Deleting a task with attachments leaves nothing to list."""
        task = await api.create_task(TaskCreate(title="Parent"))
        panel = AttachmentPanel(api, task.id)
        await panel.upload("a.txt", 1)
        await panel.upload("b.txt", 1)

        assert await api.delete_task(task.id) is True

        assert await panel.refresh() == ()
