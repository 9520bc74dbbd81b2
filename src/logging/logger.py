# src/logging/logger.py — v2
"""Logger factory with JSON and text formatters.

Handlers installed by setup_logging() carry a ContextFilter that stamps each
record with the session/diagram context at emit time, so a record formats the
same way whichever handler writes it.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

from tikzembed.logging.context import get_context

ROOT_LOGGER = "tikzembed"
CONTEXT_ATTR = "tikz_context"


class ContextFilter(logging.Filter):
    """Attach a snapshot of the logging context to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, CONTEXT_ATTR):
            setattr(record, CONTEXT_ATTR, get_context().as_dict())
        return True


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    stamped = getattr(record, CONTEXT_ATTR, None)
    if stamped is not None:
        return stamped
    return get_context().as_dict()


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line; context under "context" when any is set."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = _record_context(record)
        if context:
            entry["context"] = context
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Terminal lines: time, level, logger, <document> [fingerprint] (stage), message."""

    def format(self, record: logging.LogRecord) -> str:
        context = _record_context(record)
        parts = [
            _timestamp(record).strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname:8s}]",
            record.name,
        ]
        if context.get("document"):
            parts.append(f"<{context['document']}>")
        if context.get("fingerprint") is not None:
            parts.append(f"[{context['fingerprint']}]")
        if context.get("stage"):
            parts.append(f"({context['stage']})")
        parts.append(f"— {record.getMessage()}")

        line = " ".join(parts)
        if record.exc_info and record.exc_info[1] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the tikzembed namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 5,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure the tikzembed logger. Safe to call again; handlers are replaced.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text".
        log_file: Optional log file path.
        rotation: Max file size before rotation (e.g. "10MB", "0" disables).
        retention: Number of rotated files to keep.
        stream: Console stream, stderr by default so stdout stays free for
            the rewritten document.
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter: logging.Formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    context_filter = ContextFilter()

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if log_file:
        from tikzembed.logging.handlers import create_rotating_handler

        handlers.append(
            create_rotating_handler(log_file, rotation=rotation, retention=retention)
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    return root_logger
