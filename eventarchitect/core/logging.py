"""
Logging for EventArchitect.

Generation work runs as many concurrent tasks, so plain log lines do not
say which workflow, project or batch item they belong to. `log_context`
binds those fields for the current task (and every task it spawns), and
`ContextFilter` stamps them onto each record so both formatters can show
them.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

# Fields bound by log_context, in display order
CONTEXT_FIELDS = ("workflow", "project_id", "batch", "item")

_context: ContextVar[Dict[str, str]] = ContextVar("eventarchitect_log_context", default={})

_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


@contextmanager
def log_context(**fields: Optional[str]) -> Iterator[Dict[str, str]]:
    """
    Bind context fields for the duration of the block.

    Nested blocks add to the enclosing context; None values are ignored.
    """
    unknown = set(fields) - set(CONTEXT_FIELDS)
    if unknown:
        raise ValueError(f"Unknown log context fields: {sorted(unknown)}")
    merged = dict(_context.get())
    merged.update({k: str(v) for k, v in fields.items() if v is not None})
    token = _context.set(merged)
    try:
        yield merged
    finally:
        _context.reset(token)


def current_log_context() -> Dict[str, str]:
    return dict(_context.get())


class ContextFilter(logging.Filter):
    """Copies the bound context onto the record. Explicit `extra=` values win."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line; context under "context", other extras at top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = _record_context(record)
        if context:
            log_data["context"] = context

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS and key not in CONTEXT_FIELDS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Context renders as a bracketed prefix, for example
    `[crest project=3f2a item=Gothic] Rendered option`.
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(context_prefix)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        context = _record_context(record)
        parts = []
        if "workflow" in context:
            parts.append(context.pop("workflow"))
        if "project_id" in context:
            parts.append(f"project={context.pop('project_id')}")
        parts.extend(f"{key}={value}" for key, value in context.items())
        record.context_prefix = f"[{' '.join(parts)}] " if parts else ""
        return super().format(record)


def configure_logging(level: str = "INFO", format_type: str = "text") -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" for structured, "text" for human-readable
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JSONFormatter() if format_type.lower() == "json" else TextFormatter())
    root_logger.addHandler(handler)

    # Storage and HTTP client chatter
    for name in ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
