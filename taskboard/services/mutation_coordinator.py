"""Mutation Coordinator — write-through, confirm, then mirror.

Invariants:
    - Preconditions are checked before any store call; a refused action makes no
      store call, leaves the snapshot and the current error untouched
    - An attempted action clears the previous error before awaiting the store
    - The snapshot changes only after the store confirmed the write, in one
      synchronous assignment (no await between confirmation and publication)
    - A failed write leaves the snapshot untouched and sets exactly one error
    - Store failures never propagate past this class: methods return the new
      entity / True on success and None / False otherwise
    - Only the owner of a task may toggle, move or delete it; anonymous callers
      are refused before the task is looked up
    - A comment is only sent for a task present in the snapshot, so the mirror
      never holds a comment on a missing task whatever the store enforces
    - delete_task prunes the task's comments and draft, mirroring the store cascade

Design Decisions:
    - No per-entity locks: overlapping writes to one entity are not serialized
      (last write wins); each call issues its store request in call order
    - toggle computes the negation from the snapshot at call time and mirrors
      the value it asked for, not a re-negation at apply time
    - Comment payload carries the author's current name (denormalized on purpose)
"""

import logging

from taskboard.core.board_state import BoardState
from taskboard.core.domain_types import Table, TaskId, UserId
from taskboard.core.entities import Comment, Task, User
from taskboard.core.errors import (
    ErrorContext, MutationFailure, ResourceNotFoundError, TaskBoardError,
    ValidationRejected,
)
from taskboard.core.repository_protocols import StoreGateway
from taskboard.core.row_mapping import (
    comment_from_row, completion_patch, new_comment_payload, new_task_payload,
    new_user_payload, task_from_row, user_from_row,
)
from taskboard.core.views import find_task
from taskboard.services.session_manager import SessionManager

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


class MutationCoordinator:
    """One method per user action on the board."""

    def __init__(
        self, gateway: StoreGateway, state: BoardState, session: SessionManager,
    ):
        self._gateway = gateway
        self._state = state
        self._session = session

    # ─── Tasks ───────────────────────────────────────────────────

    async def create_task(self, text: str, owner_id: UserId | None = None) -> Task | None:
        """Insert a task for the active user and append it to the snapshot."""
        self._state.rejection = None
        user = self._session.current_user
        if user is None:
            return self._reject("add task", "no active session")
        if _is_blank(text):
            return self._reject("add task", "task text is empty")
        if owner_id is not None and owner_id != user.id:
            return self._reject("add task", "tasks are created for the active user only")

        self._state.clear_error()
        try:
            row = await self._gateway.insert(Table.TASKS, new_task_payload(text, user.id))
            task = task_from_row(row)
        except (TaskBoardError, ValueError, TypeError) as e:
            return self._fail("add task", e, ErrorContext(user_id=user.id))

        self._state.snapshot = self._state.snapshot.with_task(task)
        logger.info("Task created", extra={"task_id": task.id, "user_id": user.id})
        return task

    async def toggle_task(self, task_id: TaskId) -> bool:
        """Flip a task's completion flag."""
        self._state.rejection = None
        task = self._owned_task(task_id, "update task")
        if task is None:
            return False
        return await self._set_completion(task, not task.completed, "update task")

    async def move_task(self, task_id: TaskId, completed: bool) -> bool:
        """Set an explicit completion state (drag-and-drop between buckets)."""
        self._state.rejection = None
        task = self._owned_task(task_id, "move task")
        if task is None:
            return False
        return await self._set_completion(task, completed, "move task")

    async def delete_task(self, task_id: TaskId) -> bool:
        """Delete a task; its comments go with it, here and in the store."""
        self._state.rejection = None
        if self._owned_task(task_id, "delete task") is None:
            return False

        self._state.clear_error()
        try:
            await self._gateway.delete(Table.TASKS, task_id)
        except TaskBoardError as e:
            self._fail("delete task", e, ErrorContext(task_id=task_id))
            return False

        self._state.snapshot = self._state.snapshot.without_task(task_id)
        logger.info("Task deleted", extra={"task_id": task_id})
        return True

    def _owned_task(self, task_id: TaskId, action: str) -> Task | None:
        """The task if the active user owns it; otherwise record why not."""
        user = self._session.current_user
        if user is None:
            return self._reject(action, "no active session")
        task = find_task(self._state.snapshot.tasks, task_id)
        if task is None:
            return self._not_found(task_id)
        if task.owner_id != user.id:
            return self._reject(action, "only the owner can change a task")
        return task

    async def _set_completion(self, task: Task, completed: bool, action: str) -> bool:
        self._state.clear_error()
        try:
            await self._gateway.update(Table.TASKS, task.id, completion_patch(completed))
        except TaskBoardError as e:
            self._fail(action, e, ErrorContext(task_id=task.id))
            return False

        self._state.snapshot = self._state.snapshot.with_task_completion(task.id, completed)
        logger.info(
            f"Task marked {'complete' if completed else 'incomplete'}",
            extra={"task_id": task.id},
        )
        return True

    # ─── Users ───────────────────────────────────────────────────

    async def register_user(self, name: str, email: str) -> User | None:
        """Insert a user, append it, and make it the active session."""
        self._state.rejection = None
        if _is_blank(name) or _is_blank(email):
            return self._reject("register user", "name and email are required")

        self._state.clear_error()
        try:
            row = await self._gateway.insert(Table.USERS, new_user_payload(name, email))
            user = user_from_row(row)
        except (TaskBoardError, ValueError, TypeError) as e:
            return self._fail("register user", e)

        self._state.snapshot = self._state.snapshot.with_user(user)
        self._session.bind(user)
        logger.info("User registered", extra={"user_id": user.id})
        return user

    # ─── Comments ────────────────────────────────────────────────

    def set_draft(self, task_id: TaskId, text: str) -> None:
        """Record unsaved comment text for a task (local only)."""
        self._state.snapshot = self._state.snapshot.with_draft(task_id, text)

    async def create_comment(self, task_id: TaskId, content: str) -> Comment | None:
        """Insert a comment by the active user and clear the task's draft."""
        self._state.rejection = None
        author = self._session.current_user
        if author is None:
            return self._reject("add comment", "no active session")
        if _is_blank(content):
            return self._reject("add comment", "comment is empty")
        if find_task(self._state.snapshot.tasks, task_id) is None:
            return self._not_found(task_id)

        self._state.clear_error()
        try:
            row = await self._gateway.insert(
                Table.COMMENTS, new_comment_payload(task_id, author, content),
            )
            comment = comment_from_row(row)
        except (TaskBoardError, ValueError, TypeError) as e:
            return self._fail(
                "add comment", e, ErrorContext(task_id=task_id, user_id=author.id),
            )

        self._state.snapshot = self._state.snapshot.with_comment(comment)
        logger.info("Comment added", extra={"task_id": task_id, "user_id": author.id})
        return comment

    async def submit_draft(self, task_id: TaskId) -> Comment | None:
        """Create a comment from the task's pending draft text."""
        return await self.create_comment(task_id, self._state.snapshot.drafts.get(task_id, ""))

    # ─── Outcomes ────────────────────────────────────────────────

    def _reject(self, action: str, reason: str) -> None:
        rejection = ValidationRejected(f"Cannot {action}: {reason}", action)
        self._state.rejection = rejection
        logger.debug(rejection.message, extra={"error_code": rejection.code})
        return None

    def _not_found(self, task_id: TaskId) -> None:
        error = ResourceNotFoundError("Task", task_id, ErrorContext(task_id=task_id))
        self._state.report(error)
        logger.warning(error.message, extra={"error_code": error.code, "task_id": task_id})
        return None

    def _fail(
        self, action: str, exc: Exception, context: ErrorContext | None = None,
    ) -> None:
        reason = exc.message if isinstance(exc, TaskBoardError) else str(exc)
        failure = MutationFailure(action, reason, context)
        self._state.report(failure)
        logger.error(
            failure.message,
            extra={"error_code": failure.code, "operation": action},
        )
        return None
