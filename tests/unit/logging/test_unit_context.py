# tests/unit/logging/test_unit_context.py — v2
"""Tests for logging/context.py — contextual logging variables."""

from __future__ import annotations

from tikzembed.logging.context import (
    LogContext,
    clear_context,
    get_context,
    set_diagram_context,
    set_session_context,
)


class TestLogContext:
    def test_initial_state(self):
        ctx = get_context()
        assert ctx.document is None
        assert ctx.session_id is None
        assert ctx.fingerprint is None

    def test_set_session_context(self):
        set_session_context("abc123", "paper.typ")
        ctx = get_context()
        assert ctx.session_id == "abc123"
        assert ctx.document == "paper.typ"

    def test_set_diagram_context(self):
        set_diagram_context(42, "typeset")
        ctx = get_context()
        assert ctx.fingerprint == 42
        assert ctx.stage == "typeset"

    def test_fingerprint_zero_kept_in_dict(self):
        set_diagram_context(0, "convert")
        assert get_context().as_dict()["fingerprint"] == 0

    def test_as_dict_filters_none(self):
        set_session_context("s1")
        d = get_context().as_dict()
        assert d == {"session_id": "s1"}

    def test_clear(self):
        set_session_context("s1", "doc")
        set_diagram_context(1, "read")
        clear_context()
        assert get_context() == LogContext()
