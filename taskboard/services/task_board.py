"""Task Board — the explicit context object that owns session, snapshot and error.

Invariants:
    - start() runs once: identity restore -> users/tasks/comments load -> validation
    - A failed load publishes an empty snapshot and sets LoadFailure as the
      current error; it never raises past the board
    - Validation only ever runs against a fully loaded user set
    - While a load is in flight the session is RESTORING, so no task or comment
      can be created for a user the fresh user set might not contain
    - logout() tears down the session only, never the snapshot
    - All views are recomputed from the current snapshot on every read

Design Decisions:
    - One context object instead of ambient globals: the API, tests and any other
      front end get the same lifecycle by holding a TaskBoard
    - Coordinator methods are re-exported as board methods so callers never need
      to reach into the components
"""

import logging

from taskboard.core.board_state import BoardState
from taskboard.core.domain_types import Bucket, SessionStatus, TaskId, UserId
from taskboard.core.entities import Comment, Task, User
from taskboard.core.errors import LoadFailure, TaskBoardError
from taskboard.core.repository_protocols import IdentityStore, StoreGateway
from taskboard.core.snapshot import Snapshot
from taskboard.core import views
from taskboard.services.data_loader import DataLoader
from taskboard.services.mutation_coordinator import MutationCoordinator
from taskboard.services.session_manager import SessionManager

logger = logging.getLogger(__name__)


class TaskBoard:
    """Client-side mirror of the shared board for one process."""

    def __init__(self, gateway: StoreGateway, identity_store: IdentityStore):
        self.state = BoardState()
        self.session = SessionManager(identity_store)
        self.loader = DataLoader(gateway)
        self.coordinator = MutationCoordinator(gateway, self.state, self.session)

    # ─── Lifecycle ───────────────────────────────────────────────

    async def start(self) -> bool:
        """Restore the stored identity, then load and validate. Idempotent."""
        if self.state.initialized:
            return self.state.error is None
        self.session.restore()
        return await self.reload()

    async def reload(self) -> bool:
        """Re-read the whole store; on failure the snapshot is left empty.

        An authenticated session is suspended for the duration of the load and
        re-validated against the fresh user set, so a remote rename is picked up
        and a removed user is logged out.
        A create confirmed while the load was in flight may already be in the
        fresh snapshot; the snapshot keeps one record per id, so it is not
        duplicated.
        """
        self.state.loading = True
        self.state.clear_error()
        self.session.suspend()
        try:
            snapshot = await self.loader.load_all()
        except LoadFailure as e:
            self.state.snapshot = Snapshot.empty()
            self.state.report(e)
            logger.error(f"Board load failed: {e.message}", extra={"error_code": e.code})
            return False
        finally:
            self.state.loading = False
            self.state.initialized = True

        self.state.snapshot = snapshot
        self.session.validate(snapshot.users)
        return True

    def login(self, user_id: UserId) -> bool:
        return self.session.login(user_id, self.state.snapshot.users)

    def logout(self) -> None:
        self.session.logout()

    # ─── Mutations ───────────────────────────────────────────────

    async def create_task(self, text: str, owner_id: UserId | None = None) -> Task | None:
        return await self.coordinator.create_task(text, owner_id)

    async def toggle_task(self, task_id: TaskId) -> bool:
        return await self.coordinator.toggle_task(task_id)

    async def move_task(self, task_id: TaskId, completed: bool) -> bool:
        return await self.coordinator.move_task(task_id, completed)

    async def drop_task(self, task_id: TaskId, bucket: Bucket) -> bool:
        """Drag-and-drop: move a task onto a bucket."""
        return await self.coordinator.move_task(task_id, bucket.completed)

    async def delete_task(self, task_id: TaskId) -> bool:
        return await self.coordinator.delete_task(task_id)

    async def register_user(self, name: str, email: str) -> User | None:
        return await self.coordinator.register_user(name, email)

    def set_draft(self, task_id: TaskId, text: str) -> None:
        self.coordinator.set_draft(task_id, text)

    async def create_comment(self, task_id: TaskId, content: str) -> Comment | None:
        return await self.coordinator.create_comment(task_id, content)

    async def submit_draft(self, task_id: TaskId) -> Comment | None:
        return await self.coordinator.submit_draft(task_id)

    # ─── Views ───────────────────────────────────────────────────

    @property
    def snapshot(self) -> Snapshot:
        return self.state.snapshot

    @property
    def current_user(self) -> User | None:
        return self.session.current_user

    @property
    def session_status(self) -> SessionStatus:
        return self.session.status

    @property
    def error(self) -> TaskBoardError | None:
        return self.state.error

    @property
    def error_message(self) -> str | None:
        return self.state.error_message

    @property
    def users(self) -> list[User]:
        return list(self.state.snapshot.users)

    def my_tasks(self) -> list[Task]:
        if self.current_user is None:
            return []
        return views.tasks_of(self.state.snapshot.tasks, self.current_user.id)

    def incomplete_tasks(self) -> list[Task]:
        return views.incomplete(self.my_tasks())

    def complete_tasks(self) -> list[Task]:
        return views.complete(self.my_tasks())

    def comments_for(self, task_id: TaskId) -> list[Comment]:
        return views.comments_of(self.state.snapshot.comments, task_id)

    def draft_for(self, task_id: TaskId) -> str:
        return self.state.snapshot.drafts.get(task_id, "")

    def board_view(self) -> views.BoardView | None:
        if self.current_user is None:
            return None
        return views.board_view(self.state.snapshot, self.current_user.id)
