"""Client side of Taskboard: API client, board state and attachment panel."""

from taskboard.client.api import TaskApiClient
from taskboard.client.attachments import AttachmentPanel
from taskboard.client.board import TaskBoard
from taskboard.client.state import BoardState

__all__ = ["TaskApiClient", "AttachmentPanel", "TaskBoard", "BoardState"]
