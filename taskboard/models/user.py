"""User ORM — registered board members.

Invariants:
    - id is an autoincrement integer primary key
    - name and email are non-nullable; email is unique
    - Rows are only ever inserted by the core (never updated or deleted)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base


class UserRecord(Base):
    """A row of the users table."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
