"""Identity Stores — durable local copy of the active user record.

Invariants:
    - get() returns the last value passed to set(), or None after clear()
    - set() on the file store is atomic (write temp file, then os.replace)
    - Neither store interprets the payload; parsing lives in schemas/identity.py

Design Decisions:
    - File store made private (0600) best-effort: it holds a name and an email
    - Unreadable or undecodable file is reported as absent, the session manager
      then starts ANONYMOUS instead of failing the whole board
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class FileIdentityStore:
    """JSON file on local disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read stored identity {self.path}: {e}")
            return None

    def set(self, serialized_user: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        tmp_path.write_text(serialized_user, "utf-8")
        os.replace(tmp_path, self.path)
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            logger.debug(f"Could not restrict permissions on {self.path}")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryIdentityStore:
    """Process-local store (tests, throwaway runs)."""

    def __init__(self, initial: str | None = None):
        self._value = initial

    def get(self) -> str | None:
        return self._value

    def set(self, serialized_user: str) -> None:
        self._value = serialized_user

    def clear(self) -> None:
        self._value = None
