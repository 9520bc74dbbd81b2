# src/pipeline/rewriter.py — v1
"""Replace diagram blocks in a host document with image placeholders.

For each block, in document order:
    fingerprint -> cache.get_or_compute(render) -> placeholder directive

Successful renders carry the SVG's declared width, failed ones do not. Text
outside the blocks is copied verbatim.
"""

from __future__ import annotations

import logging
from typing import Protocol

from tikzembed.cache.diagram_cache import DiagramCache
from tikzembed.cache.fingerprint import compute_fingerprint
from tikzembed.core.models import (
    DiagramBlock,
    Failed,
    FailureRecord,
    Rendered,
    RenderResult,
    RewriteReport,
)
from tikzembed.extraction.block_extractor import BlockExtractor
from tikzembed.pipeline.placeholder import PlaceholderCodec
from tikzembed.render.svg_metadata import width_string

logger = logging.getLogger(__name__)


class DiagramRenderer(Protocol):
    def render(
        self, source: str, environment: str, fingerprint: int | None = None
    ) -> RenderResult: ...


class DocumentRewriter:
    """Pure text transform backed by a shared cache."""

    def __init__(
        self,
        cache: DiagramCache,
        renderer: DiagramRenderer,
        extractor: BlockExtractor | None = None,
        codec: PlaceholderCodec | None = None,
    ) -> None:
        self.cache = cache
        self.renderer = renderer
        self.extractor = extractor or BlockExtractor()
        self.codec = codec or PlaceholderCodec()

    def rewrite(self, text: str) -> str:
        """Return ``text`` with every diagram block replaced by a placeholder.

        Raises:
            MetadataInconsistencyError: A rendered SVG has an unsupported width.
        """
        rewritten, _ = self.rewrite_with_report(text)
        return rewritten

    def rewrite_with_report(self, text: str) -> tuple[str, RewriteReport]:
        """Like ``rewrite`` but also return a summary of the pass."""
        blocks = self.extractor.extract(text)
        report = RewriteReport(block_count=len(blocks))
        seen: set[int] = set()

        pieces: list[str] = []
        cursor = 0
        for block in blocks:
            fingerprint = compute_fingerprint(block.environment, block.source)
            known = fingerprint in self.cache
            result = self.cache.get_or_compute(
                fingerprint, lambda b=block, fp=fingerprint: self._render(b, fp)
            )

            if known:
                report.cache_hits += 1
            elif isinstance(result, Rendered):
                report.rendered += 1
            if fingerprint not in seen:
                seen.add(fingerprint)
                if isinstance(result, Failed):
                    report.failures.append(
                        FailureRecord(
                            fingerprint=fingerprint,
                            environment=block.environment,
                            kind=result.kind,
                            message=result.message,
                        )
                    )

            pieces.append(text[cursor:block.start])
            pieces.append(self._placeholder(fingerprint, result, block))
            cursor = block.end
        pieces.append(text[cursor:])

        report.distinct_fingerprints = len(seen)
        logger.info(
            "Rewrote %d block(s): %d rendered, %d cached, %d failed",
            report.block_count, report.rendered, report.cache_hits, len(report.failures),
        )
        return "".join(pieces), report

    def _render(self, block: DiagramBlock, fingerprint: int) -> RenderResult:
        return self.renderer.render(block.source, block.environment, fingerprint)

    def _placeholder(
        self, fingerprint: int, result: RenderResult, block: DiagramBlock
    ) -> str:
        width = width_string(result.data) if isinstance(result, Rendered) else None
        return self.codec.directive(fingerprint, width) + "\n" * block.lines
