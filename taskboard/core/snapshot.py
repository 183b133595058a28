"""Snapshot — the in-memory mirror of users, tasks and comments, plus draft text.

Invariants:
    - A Snapshot is never mutated: every delta returns a new Snapshot, so the
      board publishes a change with a single assignment (atomic for asyncio)
    - drafts is a read-only mapping; item assignment raises TypeError
    - Record order is load/creation order; deltas append, never reorder
    - Ids are unique per record set: adding a record whose id is already present
      replaces it in place (a create confirmed after an overlapping reload
      already contains it)
    - without_task() removes the task, its comments and its draft together,
      mirroring the store's ON DELETE CASCADE
    - Drafts are local only and never reach the store

Design Decisions:
    - Tuples for record sets: hashable, cheap to copy for three small tables
    - drafts left out of the hash (a mapping is unhashable) but kept in equality
    - Pure methods, no IO: the mutation coordinator decides *when* a delta is
      applied (only after the store confirmed it), the snapshot decides *how*
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TypeVar

from taskboard.core.domain_types import TaskId, UserId
from taskboard.core.entities import Comment, Task, User

R = TypeVar("R", User, Task, Comment)


def _upsert(records: tuple[R, ...], record: R) -> tuple[R, ...]:
    if any(r.id == record.id for r in records):
        return tuple(record if r.id == record.id else r for r in records)
    return records + (record,)


@dataclass(frozen=True)
class Snapshot:
    """Immutable point-in-time mirror of the remote store."""

    users: tuple[User, ...] = ()
    tasks: tuple[Task, ...] = ()
    comments: tuple[Comment, ...] = ()
    drafts: Mapping[TaskId, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "drafts", MappingProxyType(dict(self.drafts)))

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.users or self.tasks or self.comments)

    # ─── Deltas ──────────────────────────────────────────────────

    def with_user(self, user: User) -> "Snapshot":
        return replace(self, users=_upsert(self.users, user))

    def with_task(self, task: Task) -> "Snapshot":
        return replace(self, tasks=_upsert(self.tasks, task))

    def with_task_completion(self, task_id: TaskId, completed: bool) -> "Snapshot":
        return replace(self, tasks=tuple(
            replace(t, completed=completed) if t.id == task_id else t
            for t in self.tasks
        ))

    def without_task(self, task_id: TaskId) -> "Snapshot":
        drafts = {k: v for k, v in self.drafts.items() if k != task_id}
        return replace(
            self,
            tasks=tuple(t for t in self.tasks if t.id != task_id),
            comments=tuple(c for c in self.comments if c.task_id != task_id),
            drafts=drafts,
        )

    def with_comment(self, comment: Comment) -> "Snapshot":
        drafts = {k: v for k, v in self.drafts.items() if k != comment.task_id}
        return replace(self, comments=_upsert(self.comments, comment), drafts=drafts)

    def with_draft(self, task_id: TaskId, text: str) -> "Snapshot":
        return replace(self, drafts={**self.drafts, task_id: text})

    # ─── Consistency ─────────────────────────────────────────────

    def dangling_references(self) -> list[str]:
        """Describe every reference to an entity missing from the snapshot."""
        user_ids: set[UserId] = {u.id for u in self.users}
        task_ids: set[TaskId] = {t.id for t in self.tasks}
        problems = [
            f"task {t.id} owned by unknown user {t.owner_id}"
            for t in self.tasks if t.owner_id not in user_ids
        ]
        for c in self.comments:
            if c.task_id not in task_ids:
                problems.append(f"comment {c.id} on unknown task {c.task_id}")
            if c.user_id not in user_ids:
                problems.append(f"comment {c.id} by unknown user {c.user_id}")
        return problems
