"""Structured Logging — formatters and setup for the board's log stream.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Board context (user_id, task_id, table, error_code, operation, path) is
      surfaced when the call site passed it through `extra`, in both formats
    - setup_logging() replaces the handler it installed before: calling it twice
      (tests, reloads) never duplicates output

Design Decisions:
    - stdlib logging with a JSON formatter, no logging library: services only
      ever call logging.getLogger(__name__)
    - Text format keeps the context as trailing key=value pairs so a local run
      shows which task a failure belongs to
"""

import logging
import json
from datetime import datetime, timezone

CONTEXT_KEYS = ("user_id", "task_id", "table", "error_code", "operation", "path")

_HANDLER_NAME = "taskboard"


def _context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_KEYS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextFormatter(logging.Formatter):
    """Human-readable line with the board context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the board's handler on the root logger."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
