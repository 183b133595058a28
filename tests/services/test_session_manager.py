"""Session Manager — tests for restore / validate / login / logout transitions.

Tests cover:
    - restore() with absent, valid, and malformed durable identity
    - validate() binds the authoritative record, or clears a stale identity
    - login() ignores unknown ids
    - Every transition into/out of AUTHENTICATED persists or clears the copy
    - suspend() keeps the durable identity for the next validation
"""

import json

from taskboard.core.domain_types import SessionStatus
from taskboard.core.entities import User
from taskboard.infrastructure.identity_store import MemoryIdentityStore
from taskboard.services.session_manager import SessionManager

USERS = [
    User(id=1, name="Ann", email="a@x.com"),
    User(id=3, name="B", email="b@x.com"),
]


def _stored(**fields) -> MemoryIdentityStore:
    return MemoryIdentityStore(json.dumps(fields))


def test_initial_state_is_unresolved():
    session = SessionManager(MemoryIdentityStore())
    assert session.status is SessionStatus.UNRESOLVED
    assert session.current_user is None


def test_restore_without_identity_is_anonymous():
    session = SessionManager(MemoryIdentityStore())
    assert session.restore() is SessionStatus.ANONYMOUS
    assert session.pending_identity is None


def test_restore_with_identity_is_restoring_but_not_authenticated():
    session = SessionManager(_stored(id=3, name="A", email="b@x.com"))
    assert session.restore() is SessionStatus.RESTORING
    assert session.pending_identity.id == 3
    assert session.current_user is None
    assert not session.is_authenticated


def test_restore_with_malformed_json_is_treated_as_absent():
    session = SessionManager(MemoryIdentityStore("{not json"))
    assert session.restore() is SessionStatus.ANONYMOUS


def test_restore_with_missing_fields_is_treated_as_absent():
    session = SessionManager(_stored(name="no id"))
    assert session.restore() is SessionStatus.ANONYMOUS


def test_validate_unknown_identity_clears_durable_storage():
    store = _stored(id=7, name="Ghost", email="g@x.com")
    session = SessionManager(store)
    session.restore()
    assert session.validate(USERS) is SessionStatus.ANONYMOUS
    assert session.current_user is None
    assert store.get() is None


def test_validate_binds_authoritative_record_not_stale_copy():
    store = _stored(id=3, name="A", email="b@x.com")
    session = SessionManager(store)
    session.restore()
    assert session.validate(USERS) is SessionStatus.AUTHENTICATED
    assert session.current_user.name == "B"
    assert json.loads(store.get())["name"] == "B"


def test_validate_without_restored_identity_is_noop():
    session = SessionManager(MemoryIdentityStore())
    session.restore()
    assert session.validate(USERS) is SessionStatus.ANONYMOUS


def test_login_known_user_persists():
    store = MemoryIdentityStore()
    session = SessionManager(store)
    assert session.login(1, USERS) is True
    assert session.status is SessionStatus.AUTHENTICATED
    assert json.loads(store.get()) == {"id": 1, "name": "Ann", "email": "a@x.com"}


def test_login_unknown_user_is_noop():
    store = MemoryIdentityStore()
    session = SessionManager(store)
    session.restore()
    assert session.login(99, USERS) is False
    assert session.status is SessionStatus.ANONYMOUS
    assert store.get() is None


def test_login_unknown_user_keeps_existing_session():
    session = SessionManager(MemoryIdentityStore())
    session.login(1, USERS)
    session.login(99, USERS)
    assert session.current_user.id == 1


def test_logout_clears_session_and_storage():
    store = MemoryIdentityStore()
    session = SessionManager(store)
    session.login(1, USERS)
    session.logout()
    assert session.status is SessionStatus.ANONYMOUS
    assert session.current_user is None
    assert store.get() is None


def test_bind_persists_new_user():
    store = MemoryIdentityStore()
    session = SessionManager(store)
    session.bind(User(id=9, name="Tanaka", email="t@x.com"))
    assert session.is_authenticated
    assert json.loads(store.get())["id"] == 9


def test_suspend_returns_to_restoring_and_keeps_identity():
    store = MemoryIdentityStore()
    session = SessionManager(store)
    session.login(1, USERS)
    session.suspend()
    assert session.status is SessionStatus.RESTORING
    assert session.current_user is None
    assert json.loads(store.get())["id"] == 1
    assert session.validate(USERS) is SessionStatus.AUTHENTICATED


def test_suspend_when_not_authenticated_is_noop():
    session = SessionManager(MemoryIdentityStore())
    session.restore()
    session.suspend()
    assert session.status is SessionStatus.ANONYMOUS
