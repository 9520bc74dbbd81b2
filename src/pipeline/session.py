# src/pipeline/session.py — v1
"""One document-processing session: scratch directory, engine config, cache.

Usage:
    with TikzSession(settings) as session:
        text = session.rewrite(source)
        data = session.load("generated_tikz_123.svg")

The scratch directory and everything in it are removed when the session
closes, however many renders failed. A session is single-threaded; run
concurrent documents in separate sessions.
"""

from __future__ import annotations

import logging
import tempfile
import uuid
from pathlib import Path

from tikzembed.cache.diagram_cache import DiagramCache
from tikzembed.config.settings import Settings
from tikzembed.core.models import RenderResult, RewriteReport
from tikzembed.extraction.block_extractor import BlockExtractor
from tikzembed.logging.context import clear_context, set_session_context
from tikzembed.pipeline.placeholder import PlaceholderCodec
from tikzembed.pipeline.resolver import Resolver
from tikzembed.pipeline.rewriter import DiagramRenderer, DocumentRewriter
from tikzembed.render.latex_renderer import LatexRenderer, write_lua_config

logger = logging.getLogger(__name__)


class TikzSession:
    """Owns the cache and the scratch directory for one document."""

    def __init__(
        self,
        settings: Settings | None = None,
        document: str | None = None,
        renderer: DiagramRenderer | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.session_id = uuid.uuid4().hex[:12]
        self.document = document

        scratch_root = self.settings.scratch_root
        if scratch_root is not None:
            Path(scratch_root).expanduser().mkdir(parents=True, exist_ok=True)
        self._tempdir = tempfile.TemporaryDirectory(
            prefix="tikzembed-",
            dir=str(Path(scratch_root).expanduser()) if scratch_root is not None else None,
        )
        self.scratch_dir = Path(self._tempdir.name)
        self.closed = False

        try:
            self.config_path = write_lua_config(self.scratch_dir)
        except OSError:
            self._tempdir.cleanup()
            raise

        self.cache = DiagramCache()
        self.codec = PlaceholderCodec(
            self.settings.placeholder_prefix, self.settings.placeholder_suffix
        )
        self.renderer = renderer or LatexRenderer(
            scratch_dir=self.scratch_dir,
            config_path=self.config_path,
            latex_engine=self.settings.latex_engine,
            svg_converter=self.settings.svg_converter,
            document_class=self.settings.document_class,
            class_options=self.settings.document_class_options,
            packages=self.settings.latex_packages_list,
        )
        self.extractor = BlockExtractor(
            self.settings.diagram_environments_list, self.settings.host_syntax
        )
        self.rewriter = DocumentRewriter(self.cache, self.renderer, self.extractor, self.codec)
        self.resolver = Resolver(self.cache, self.codec)

        set_session_context(self.session_id, document)
        logger.debug("Session %s scratch dir: %s", self.session_id, self.scratch_dir)

    # --- Context manager ---

    def __enter__(self) -> TikzSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Remove the scratch directory and drop the session log context. Idempotent."""
        if self.closed:
            return
        self.closed = True
        self._tempdir.cleanup()
        logger.debug(
            "Session %s closed (%d cached diagram(s))", self.session_id, len(self.cache)
        )
        clear_context()

    # --- Pipeline ---

    def rewrite(self, text: str) -> str:
        self._check_open()
        return self.rewriter.rewrite(text)

    def rewrite_with_report(self, text: str) -> tuple[str, RewriteReport]:
        self._check_open()
        return self.rewriter.rewrite_with_report(text)

    def resolve(self, identifier: int | str) -> RenderResult | None:
        self._check_open()
        return self.resolver.resolve(identifier)

    def load(self, path: str | Path) -> bytes:
        self._check_open()
        return self.resolver.load(path)

    def _check_open(self) -> None:
        if self.closed:
            raise RuntimeError(f"Session {self.session_id} is closed")
