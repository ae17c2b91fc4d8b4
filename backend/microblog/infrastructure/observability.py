"""Structured Logging — JSON and key=value formatters, installed once per process.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Context passed via extra= (user_id, post_id, error_code, operation, path)
      is rendered by both formatters when present
    - setup_logging replaces its own handler on repeat calls, never stacks them

Design Decisions:
    - json for deployments, text for local runs and tests (LOG_FORMAT)
    - SQLAlchemy engine chatter capped at WARNING regardless of LOG_LEVEL
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("user_id", "post_id", "error_code", "operation", "path")

_HANDLER_NAME = "microblog"


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key] for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(f"{k}={v}" for k, v in _extras(record).items())
        return f"{line} [{pairs}]" if pairs else line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application handler on the root logger and return it."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
