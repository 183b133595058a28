"""Task ORM — one to-do item owned by the user who created it.

Invariants:
    - user_id is set at insert and never reassigned
    - completed defaults to false
    - Deleting a task cascades to its comments (FK on comments.task_id)

Design Decisions:
    - Column is user_id (not owner_id): the remote schema name, renamed in core/row_mapping.py
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base


class TaskRecord(Base):
    """A row of the tasks table."""
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
