"""Row Mapping — remote rows <-> semantic entities, and write payload builders.

Invariants:
    - Remote column names appear only in this module (user_id, task_id, user_name, created_at)
    - Every *_from_row raises ValueError on a malformed row, never returns a partial entity
    - Timestamps come out timezone-aware; naive store values are read as UTC
    - Payload builders trim user text; callers reject blank text before building

Design Decisions:
    - Explicit per-table functions over a generic field map: three small tables,
      every rename visible in one place
    - parse_timestamp accepts datetime or ISO-8601 text: the SQL gateway hands back
      datetimes, REST-style stores hand back strings with a trailing "Z"
"""

from datetime import datetime, timezone
from typing import Any

from taskboard.core.domain_types import CommentId, TaskId, UserId
from taskboard.core.entities import Comment, Task, User
from taskboard.core.repository_protocols import Row


def _require(row: Row, key: str) -> Any:
    if not isinstance(row, dict) or key not in row or row[key] is None:
        raise ValueError(f"row is missing column '{key}'")
    return row[key]


def parse_timestamp(value: Any) -> datetime:
    """Parse a store timestamp into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"unsupported timestamp value: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ─── Remote -> Entity ────────────────────────────────────────────

def user_from_row(row: Row) -> User:
    return User(
        id=UserId(_require(row, "id")),
        name=str(_require(row, "name")),
        email=str(_require(row, "email")),
    )


def task_from_row(row: Row) -> Task:
    return Task(
        id=TaskId(_require(row, "id")),
        text=str(_require(row, "text")),
        completed=bool(row.get("completed", False)),
        owner_id=UserId(_require(row, "user_id")),
    )


def comment_from_row(row: Row) -> Comment:
    return Comment(
        id=CommentId(_require(row, "id")),
        task_id=TaskId(_require(row, "task_id")),
        user_id=UserId(_require(row, "user_id")),
        user_name=str(_require(row, "user_name")),
        content=str(_require(row, "content")),
        created_at=parse_timestamp(_require(row, "created_at")),
    )


# ─── Entity -> Remote payload ────────────────────────────────────

def new_user_payload(name: str, email: str) -> Row:
    return {"name": name.strip(), "email": email.strip()}


def new_task_payload(text: str, owner_id: UserId) -> Row:
    return {"text": text.strip(), "completed": False, "user_id": owner_id}


def new_comment_payload(task_id: TaskId, author: User, content: str) -> Row:
    """Comment insert payload. Carries the author's *current* name as a snapshot."""
    return {
        "task_id": task_id,
        "user_id": author.id,
        "user_name": author.name,
        "content": content.strip(),
    }


def completion_patch(completed: bool) -> Row:
    return {"completed": completed}
