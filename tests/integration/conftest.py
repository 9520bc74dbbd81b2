# tests/integration/conftest.py — v8
"""Shared fixtures for integration tests using a fake TeX toolchain.

The fake engine and converter are POSIX shell scripts written to tmp_path:
- fake lualatex: records each call, copies the .tex into tikz.pdf, fails with
  a TeX-style message when the body contains \\undefinedmacro
- fake pdf2svg: writes a fixed-size SVG to its second argument

Real lualatex / pdf2svg are never invoked.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path

import pytest

from tikzembed.config.settings import Settings

FAKE_SVG_WIDTH = "28.5pt"

_FAKE_ENGINE = """#!/bin/sh
# argv: -lua CONFIG -output-directory DIR -no-shell-escape TEX
echo "$@" >> "{calls}"
cp "$6" "{last_tex}"
if grep -q 'undefinedmacro' "$6"; then
    echo "! Undefined control sequence."
    echo "l.7 \\\\undefinedmacro"
    exit 1
fi
cp "$6" "$4/tikz.pdf"
"""

_FAKE_CONVERTER = """#!/bin/sh
# argv: PDF SVG
printf '<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="10pt"></svg>' > "$2"
"""


@dataclass
class FakeToolchain:
    engine: Path
    converter: Path
    calls_file: Path
    last_tex: Path

    @property
    def call_count(self) -> int:
        if not self.calls_file.exists():
            return 0
        return len(self.calls_file.read_text(encoding="utf-8").splitlines())

    def settings(self, scratch_root: Path, **overrides: object) -> Settings:
        values: dict[str, object] = {
            "latex_engine": str(self.engine),
            "svg_converter": str(self.converter),
            "scratch_root": scratch_root,
            **overrides,
        }
        return Settings(_env_file=None, **values)


def _write_script(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_toolchain(tmp_path: Path) -> FakeToolchain:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    calls = tmp_path / "engine_calls.txt"
    last_tex = tmp_path / "last.tex"
    engine = _write_script(
        bin_dir / "lualatex",
        _FAKE_ENGINE.format(calls=calls, last_tex=last_tex),
    )
    converter = _write_script(
        bin_dir / "pdf2svg",
        _FAKE_CONVERTER.format(width=FAKE_SVG_WIDTH),
    )
    return FakeToolchain(engine=engine, converter=converter, calls_file=calls, last_tex=last_tex)


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root

