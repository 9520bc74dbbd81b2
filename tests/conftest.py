# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides SVG payloads, a fake renderer and settings isolated from .env.
No external tools are invoked — lualatex and pdf2svg are never required.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from tikzembed.config.settings import Settings
from tikzembed.core.models import Failed, Rendered, RenderResult
from tikzembed.logging.context import clear_context
from tikzembed.logging.logger import ROOT_LOGGER


def make_svg(width: str = "3cm", height: str = "2cm") -> bytes:
    """Minimal SVG document shaped like pdf2svg output."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        'viewBox="0 0 85 57" version="1.1">\n'
        '<path d="M 0 0 L 85 57"/>\n'
        "</svg>\n"
    ).encode("utf-8")


class FakeRenderer:
    """Renderer double: records calls, answers from a table keyed by source."""

    def __init__(self, default: RenderResult | None = None) -> None:
        self.default = default or Rendered(data=make_svg())
        self.results: dict[str, RenderResult] = {}
        self.calls: list[tuple[str, str]] = []

    def render(
        self, source: str, environment: str, fingerprint: int | None = None
    ) -> RenderResult:
        self.calls.append((environment, source))
        return self.results.get(source, self.default)


# === FIXTURES: Settings ===


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env in the working directory."""
    return Settings(_env_file=None)


# === FIXTURES: Rendering ===


@pytest.fixture
def svg_factory() -> Callable[..., bytes]:
    return make_svg


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def renderer_factory() -> type[FakeRenderer]:
    return FakeRenderer


@pytest.fixture
def failing_result() -> Failed:
    return Failed(kind="execution", message="Undefined control sequence.")


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_scratch_dir(tmp_path: Path) -> Path:
    """Temporary scratch directory for renderer tests."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return scratch


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo setup_logging() so handlers never outlive the captured streams of one test."""
    root = logging.getLogger(ROOT_LOGGER)
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
