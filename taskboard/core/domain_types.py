"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskId, CommentId wrap the store-assigned integer keys
    - Table names and order keys are Enums — no raw string matching in services
    - SessionStatus encodes the whole session state machine

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: values are the literal remote table/column names, so they can be
      handed to any gateway implementation without a lookup table
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
TaskId = NewType("TaskId", int)
CommentId = NewType("CommentId", int)


# ─── Remote Store Names ──────────────────────────────────────────

class Table(str, Enum):
    """Remote tables the core reads and writes."""
    USERS = "users"
    TASKS = "tasks"
    COMMENTS = "comments"


class OrderKey(str, Enum):
    """Columns the loader orders by."""
    ID = "id"
    CREATED_AT = "created_at"


# ─── Enums ───────────────────────────────────────────────────────

class SessionStatus(str, Enum):
    """Session lifecycle: UNRESOLVED -> RESTORING -> AUTHENTICATED | ANONYMOUS."""
    UNRESOLVED = "unresolved"
    RESTORING = "restoring"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class Bucket(str, Enum):
    """The two partitions of a user's tasks (drag-and-drop targets)."""
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"

    @property
    def completed(self) -> bool:
        return self is Bucket.COMPLETE
