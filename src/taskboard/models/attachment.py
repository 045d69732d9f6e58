"""Attachment model for file metadata."""

from datetime import datetime

from sqlalchemy import CheckConstraint, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.models.base import Base, utcnow


class Attachment(Base):
    """File metadata record owned by exactly one task.

    Only metadata is stored; the bytes themselves never reach the server.
    """

    __tablename__ = "attachments"
    __table_args__ = (
        CheckConstraint("file_size > 0", name="ck_attachments_file_size_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    task_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    filename: Mapped[str] = mapped_column(Text, nullable=False)
    original_name: Mapped[str] = mapped_column(Text, nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    mime_type: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Relationships
    task: Mapped["Task"] = relationship(back_populates="attachments")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Attachment(id={self.id}, original_name={self.original_name!r})>"
