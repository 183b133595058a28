"""Error Handlers — map board failures onto HTTP responses.

Invariants:
    - Every error body has the same envelope: {"error": {code, message, category, severity, ...}}
    - TaskBoardError keeps its own status: 400 rejected, 404 unknown, 503 store
    - Request bodies that fail schema validation answer 400, like a local rejection
    - Anything else answers 500 without leaking the exception text

Design Decisions:
    - Three handlers layered by specificity (board error, request validation,
      catch-all) and registered from one function so main.py stays wiring only
    - Board errors below 500 log at warning: a refused action is the user's
      mistake, not an operational problem
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskboard.core.errors import ErrorCategory, ErrorSeverity, TaskBoardError

logger = logging.getLogger(__name__)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity, **fields,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **fields,
        },
    }


async def handle_board_error(request: Request, exc: TaskBoardError) -> JSONResponse:
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        exc.message,
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "task_id": exc.context.task_id,
            "operation": exc.context.operation,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Invalid request body: {len(details)} error(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc, extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(TaskBoardError, handle_board_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
