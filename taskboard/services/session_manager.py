"""Session Manager — restores, validates and persists the active user's identity.

Invariants:
    - State machine: UNRESOLVED -> RESTORING -> AUTHENTICATED | ANONYMOUS
    - current_user is set iff status is AUTHENTICATED
    - Every transition into AUTHENTICATED persists the durable copy; every
      transition out of it persists (suspend) or clears (logout, failed validation)
    - validate() binds the authoritative record from the user set, never the
      possibly-stale durable copy
    - A malformed durable copy is treated as absent, never fatal

Design Decisions:
    - Sync methods: the identity store is local, persistence happens in the same
      step as the transition so no await can observe a half-applied session
    - Validation failure is logged with the ValidationFailure code but not raised:
      the board falls back to ANONYMOUS silently
"""

import logging
from typing import Iterable

from taskboard.core.domain_types import SessionStatus, UserId
from taskboard.core.entities import User
from taskboard.core.errors import ValidationFailure
from taskboard.core.repository_protocols import IdentityStore
from taskboard.core.views import find_user
from taskboard.schemas.identity import parse_identity, serialize_identity

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the single process-wide session."""

    def __init__(self, identity_store: IdentityStore):
        self._store = identity_store
        self.status = SessionStatus.UNRESOLVED
        self.current_user: User | None = None
        self._pending: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    @property
    def pending_identity(self) -> User | None:
        """The restored, not yet validated record (RESTORING only)."""
        return self._pending

    def restore(self) -> SessionStatus:
        """Read the durable identity copy. Present -> RESTORING, absent -> ANONYMOUS."""
        restored = parse_identity(self._store.get())
        if restored is None:
            logger.info("No stored identity to restore")
            self._pending = None
            self.status = SessionStatus.ANONYMOUS
            return self.status
        logger.info("Restored stored identity", extra={"user_id": restored.id})
        self._pending = restored
        self.status = SessionStatus.RESTORING
        return self.status

    def validate(self, users: Iterable[User]) -> SessionStatus:
        """Bind the restored identity to its authoritative record, or clear it."""
        if self.status is not SessionStatus.RESTORING or self._pending is None:
            return self.status
        authoritative = find_user(users, self._pending.id)
        if authoritative is None:
            failure = ValidationFailure(self._pending.id)
            logger.warning(
                failure.message, extra={"error_code": failure.code, "user_id": self._pending.id},
            )
            self._pending = None
            self._clear()
            return self.status
        self._pending = None
        self._bind(authoritative)
        return self.status

    def login(self, user_id: UserId, users: Iterable[User]) -> bool:
        """Bind a known user. Unknown ids are a no-op."""
        user = find_user(users, user_id)
        if user is None:
            logger.info(f"Login ignored: unknown user {user_id}")
            return False
        self._bind(user)
        logger.info("User logged in", extra={"user_id": user.id})
        return True

    def bind(self, user: User) -> None:
        """Bind a user the store has just confirmed (registration)."""
        self._bind(user)

    def logout(self) -> None:
        user_id = self.current_user.id if self.current_user else None
        self._pending = None
        self._clear()
        logger.info("User logged out", extra={"user_id": user_id})

    def suspend(self) -> None:
        """Return an AUTHENTICATED session to RESTORING; the durable copy is kept."""
        if self.current_user is None:
            return
        self._pending = self.current_user
        self._store.set(serialize_identity(self.current_user))
        self.current_user = None
        self.status = SessionStatus.RESTORING

    def _bind(self, user: User) -> None:
        self.current_user = user
        self.status = SessionStatus.AUTHENTICATED
        self._store.set(serialize_identity(user))

    def _clear(self) -> None:
        self.current_user = None
        self.status = SessionStatus.ANONYMOUS
        self._store.clear()
