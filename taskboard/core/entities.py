"""Entities — immutable value objects mirrored from the remote store.

Invariants:
    - Identifiers are store-assigned and never change after creation
    - Task.owner_id is set once at creation and never reassigned
    - Comment.user_name is the author's name at creation time (never re-synced)
    - Comment.created_at is timezone-aware

Design Decisions:
    - frozen dataclasses: local deltas replace entities via dataclasses.replace,
      so a stale reference held by a view can never change under it
    - Comment.user_name denormalized on purpose: read-time convenience over
      consistency, a renamed author keeps their old name on old comments
"""

from dataclasses import dataclass
from datetime import datetime

from taskboard.core.domain_types import CommentId, TaskId, UserId


@dataclass(frozen=True)
class User:
    id: UserId
    name: str
    email: str


@dataclass(frozen=True)
class Task:
    id: TaskId
    text: str
    completed: bool
    owner_id: UserId


@dataclass(frozen=True)
class Comment:
    id: CommentId
    task_id: TaskId
    user_id: UserId
    user_name: str
    content: str
    created_at: datetime
