"""View Projector — pure derivations over the snapshot.

Invariants:
    - No function here mutates its input or performs IO
    - Results preserve snapshot order (load/creation order)
    - tasks_of() is the only visibility rule: a user sees exactly the tasks they own

Design Decisions:
    - Recompute on every read, no caching: the snapshot is small and every
      derivation is a single O(n) pass
"""

from dataclasses import dataclass
from typing import Iterable

from taskboard.core.domain_types import Bucket, TaskId, UserId
from taskboard.core.entities import Comment, Task, User
from taskboard.core.snapshot import Snapshot


def tasks_of(tasks: Iterable[Task], user_id: UserId) -> list[Task]:
    return [t for t in tasks if t.owner_id == user_id]


def incomplete(tasks: Iterable[Task]) -> list[Task]:
    return [t for t in tasks if not t.completed]


def complete(tasks: Iterable[Task]) -> list[Task]:
    return [t for t in tasks if t.completed]


def in_bucket(tasks: Iterable[Task], bucket: Bucket) -> list[Task]:
    return complete(tasks) if bucket.completed else incomplete(tasks)


def comments_of(comments: Iterable[Comment], task_id: TaskId) -> list[Comment]:
    return [c for c in comments if c.task_id == task_id]


def find_task(tasks: Iterable[Task], task_id: TaskId) -> Task | None:
    return next((t for t in tasks if t.id == task_id), None)


def find_user(users: Iterable[User], user_id: UserId) -> User | None:
    return next((u for u in users if u.id == user_id), None)


@dataclass(frozen=True)
class TaskCard:
    """One task with its thread and pending draft, as a bucket renders it."""
    task: Task
    comments: list[Comment]
    draft: str


@dataclass(frozen=True)
class BoardView:
    """A user's two buckets."""
    user_id: UserId
    incomplete: list[TaskCard]
    complete: list[TaskCard]


def board_view(snapshot: Snapshot, user_id: UserId) -> BoardView:
    """Compose both buckets of user_id's tasks with their comments."""
    owned = tasks_of(snapshot.tasks, user_id)

    def _cards(tasks: list[Task]) -> list[TaskCard]:
        return [
            TaskCard(
                task=t,
                comments=comments_of(snapshot.comments, t.id),
                draft=snapshot.drafts.get(t.id, ""),
            )
            for t in tasks
        ]

    return BoardView(
        user_id=user_id,
        incomplete=_cards(incomplete(owned)),
        complete=_cards(complete(owned)),
    )
