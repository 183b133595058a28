"""Error Hierarchy — typed, categorized exceptions for all task board failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Local precondition errors (400-level) are recoverable; store errors (503) are not
      retried automatically, the caller re-invokes the action
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskBoardError base: the board stores any of them as the
      current error, the FastAPI global handler renders any of them
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - ValidationFailure is a type even though it is never surfaced: the session
      manager logs it with the same code/category fields as everything else
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    SESSION = "session"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    table: str | None = None
    user_id: int | None = None
    task_id: int | None = None
    debug_info: dict[str, Any] | None = None


class TaskBoardError(Exception):
    """Base exception for all task board errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "table": self.context.table,
                    "task_id": self.context.task_id,
                },
            }
        }


# ─── Local Errors (400-level) ───────────────────────────────────

class ValidationRejected(TaskBoardError):
    """Local precondition failed; the action was not attempted."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "VALIDATION_REJECTED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )


class ValidationFailure(TaskBoardError):
    """Restored identity is not in the loaded user set. Recovered silently."""
    def __init__(self, user_id: Any, context: ErrorContext | None = None):
        super().__init__(
            f"Restored user '{user_id}' is not a known user",
            "SESSION_INVALID", ErrorCategory.SESSION,
            ErrorSeverity.INFO, context, 401,
        )
        self.user_id = user_id


class ResourceNotFoundError(TaskBoardError):
    """Requested entity is not in the local snapshot."""
    def __init__(
        self, resource_type: str, resource_id: Any, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Store Errors (503) ─────────────────────────────────────────

class StoreError(TaskBoardError):
    """Remote store operation failed (the gateway's Failure)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class LoadFailure(TaskBoardError):
    """One of the three startup reads failed; no snapshot was published."""
    def __init__(self, table: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.table = table
        super().__init__(
            f"Failed to load {table}: {reason}",
            "LOAD_FAILED", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.table = table


class MutationFailure(TaskBoardError):
    """The store rejected a create/update/delete; the snapshot is unchanged."""
    def __init__(self, action: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = action
        super().__init__(
            f"Failed to {action}: {reason}",
            "MUTATION_FAILED", ErrorCategory.STORE,
            ErrorSeverity.ERROR, ctx, 503,
        )
        self.action = action
