# src/logging/context.py — v2
"""Contextual logging support — attach document, session, diagram and stage to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging — set per session / per diagram.
_document: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document", default=None
)
_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_id", default=None
)
_fingerprint: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "fingerprint", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    document: str | None = None
    session_id: str | None = None
    fingerprint: int | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        document=_document.get(),
        session_id=_session_id.get(),
        fingerprint=_fingerprint.get(),
        stage=_stage.get(),
    )


def set_session_context(session_id: str, document: str | None = None) -> None:
    """Set session-level context (called once per session)."""
    _session_id.set(session_id)
    _document.set(document)


def set_diagram_context(fingerprint: int | None, stage: str | None = None) -> None:
    """Set diagram-level context (called per render stage)."""
    _fingerprint.set(fingerprint)
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _document.set(None)
    _session_id.set(None)
    _fingerprint.set(None)
    _stage.set(None)
