"""Board State — the mutable cell that holds the current snapshot and error.

Invariants:
    - snapshot is replaced wholesale, never edited in place
    - At most one current error; report() replaces the previous one
    - rejection records the last refused precondition and is never shown as the
      current error
    - loading / initialized only move forward within one load cycle

Design Decisions:
    - Dataclass shared by the loader path and the mutation coordinator, the same
      way handlers share one per-session state object
"""

from dataclasses import dataclass, field

from taskboard.core.errors import TaskBoardError, ValidationRejected
from taskboard.core.snapshot import Snapshot


@dataclass
class BoardState:
    """Process-wide board state — pure dataclass, no IO."""

    snapshot: Snapshot = field(default_factory=Snapshot.empty)

    # Current surfaced error (LoadFailure, MutationFailure, ResourceNotFoundError)
    error: TaskBoardError | None = None

    # Last local precondition refusal (not surfaced)
    rejection: ValidationRejected | None = None

    loading: bool = False
    initialized: bool = False

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error else None

    def report(self, error: TaskBoardError) -> None:
        self.error = error

    def clear_error(self) -> None:
        self.error = None
