# src/render/latex_renderer.py — v1
"""Render diagram source to SVG through LaTeX and a PDF-to-SVG converter.

Pipeline, all inside one scratch directory:
    1. write tikz.tex (standalone document wrapping the diagram)
    2. <engine> -lua config.lua -output-directory <dir> -no-shell-escape tikz.tex
    3. <converter> tikz.pdf tikz.svg
    4. read tikz.svg

The file names are fixed and reused, so one renderer must not run two renders
at the same time. Every failure is returned as ``Failed``; nothing raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from tikzembed.core.models import CommandOutcome, Failed, Rendered, RenderResult
from tikzembed.logging.context import set_diagram_context
from tikzembed.render.command import run_command
from tikzembed.render.templates import LUA_CONFIG, build_document

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str | Path], Path | None], CommandOutcome]

TEX_NAME = "tikz.tex"
PDF_NAME = "tikz.pdf"
SVG_NAME = "tikz.svg"
CONFIG_NAME = "config.lua"


def write_lua_config(scratch_dir: Path) -> Path:
    """Write the engine configuration script into the scratch directory."""
    path = Path(scratch_dir) / CONFIG_NAME
    path.write_text(LUA_CONFIG, encoding="utf-8")
    return path


class LatexRenderer:
    """Two-stage external render bound to one scratch directory."""

    def __init__(
        self,
        scratch_dir: Path,
        config_path: Path,
        latex_engine: str = "lualatex",
        svg_converter: str = "pdf2svg",
        document_class: str = "standalone",
        class_options: str = "tikz",
        packages: Sequence[str] = ("tikz-cd",),
        runner: CommandRunner = run_command,
    ) -> None:
        self.scratch_dir = Path(scratch_dir)
        self.config_path = Path(config_path)
        self.latex_engine = latex_engine
        self.svg_converter = svg_converter
        self.document_class = document_class
        self.class_options = class_options
        self.packages = tuple(packages)
        self._run = runner
        self.render_count = 0

    @property
    def tex_path(self) -> Path:
        return self.scratch_dir / TEX_NAME

    @property
    def pdf_path(self) -> Path:
        return self.scratch_dir / PDF_NAME

    @property
    def svg_path(self) -> Path:
        return self.scratch_dir / SVG_NAME

    def render(
        self, source: str, environment: str, fingerprint: int | None = None
    ) -> RenderResult:
        """Render one diagram.

        Args:
            source: Diagram body (without \\begin/\\end).
            environment: Diagram environment, e.g. "tikzpicture".
            fingerprint: Only used for log context.

        Returns:
            Rendered(svg bytes) or Failed(kind, message).
        """
        self.render_count += 1
        logger.info("Rendering %s diagram", environment)

        try:
            set_diagram_context(fingerprint, "write")
            document = build_document(
                source,
                environment,
                document_class=self.document_class,
                class_options=self.class_options,
                packages=self.packages,
            )
            self.tex_path.write_text(document, encoding="utf-8")
            # Outputs of the previous render must not be mistaken for this one.
            self.pdf_path.unlink(missing_ok=True)
            self.svg_path.unlink(missing_ok=True)

            set_diagram_context(fingerprint, "typeset")
            outcome = self._run(self._typeset_command(), self.scratch_dir)
            if not outcome.ok:
                return self._failed(outcome)

            set_diagram_context(fingerprint, "convert")
            outcome = self._run(self._convert_command(), self.scratch_dir)
            if not outcome.ok:
                return self._failed(outcome)

            set_diagram_context(fingerprint, "read")
            try:
                data = self.svg_path.read_bytes()
            except OSError as exc:
                logger.warning("Could not read rendered image: %s", exc)
                return Failed(kind="io", message=str(exc))
        except OSError as exc:
            logger.warning("Could not write diagram source: %s", exc)
            return Failed(kind="io", message=str(exc))
        finally:
            set_diagram_context(None)

        return Rendered(data=data)

    def _typeset_command(self) -> list[str]:
        return [
            self.latex_engine,
            "-lua", str(self.config_path),
            "-output-directory", str(self.scratch_dir),
            "-no-shell-escape",
            str(self.tex_path),
        ]

    def _convert_command(self) -> list[str]:
        return [self.svg_converter, str(self.pdf_path), str(self.svg_path)]

    @staticmethod
    def _failed(outcome: CommandOutcome) -> Failed:
        kind = "spawn" if outcome.status == "spawn_error" else "execution"
        first_line = next((ln for ln in outcome.output.splitlines() if ln.strip()), "")
        logger.warning("%s failed: %s", outcome.program, first_line or "<no output>")
        return Failed(kind=kind, message=outcome.output)
