"""Identity Schema — the durable JSON copy of the active user.

Invariants:
    - Serialized form is {"id", "name", "email"} (same shape as a users row)
    - parse_identity() never raises: malformed input yields None

Design Decisions:
    - Pydantic at the durable-storage boundary: the file may have been written by
      an older build or edited by hand, so it is validated like request input
"""

import logging

from pydantic import BaseModel, ValidationError

from taskboard.core.domain_types import UserId
from taskboard.core.entities import User

logger = logging.getLogger(__name__)


class StoredIdentity(BaseModel):
    """A User record as persisted in the durable identity store."""
    id: int
    name: str
    email: str

    def to_user(self) -> User:
        return User(id=UserId(self.id), name=self.name, email=self.email)


def serialize_identity(user: User) -> str:
    return StoredIdentity(id=user.id, name=user.name, email=user.email).model_dump_json()


def parse_identity(raw: str | None) -> User | None:
    """Parse a stored identity; absent or malformed input yields None."""
    if raw is None or not raw.strip():
        return None
    try:
        return StoredIdentity.model_validate_json(raw).to_user()
    except ValidationError as e:
        logger.warning(f"Discarding malformed stored identity: {e.error_count()} error(s)")
        return None
