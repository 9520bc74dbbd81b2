# src/pipeline/resolver.py — v1
"""Turn placeholder names back into rendered bytes for the host's image loader."""

from __future__ import annotations

import logging
from pathlib import Path

from tikzembed.cache.diagram_cache import DiagramCache
from tikzembed.core.errors import DiagramRenderError, UnknownFingerprintError
from tikzembed.core.models import Failed, RenderResult
from tikzembed.pipeline.placeholder import PlaceholderCodec

logger = logging.getLogger(__name__)


class Resolver:
    """Decode-then-lookup against the session cache."""

    def __init__(self, cache: DiagramCache, codec: PlaceholderCodec | None = None) -> None:
        self.cache = cache
        self.codec = codec or PlaceholderCodec()

    def resolve(self, identifier: int | str) -> RenderResult | None:
        """Return the stored result for a fingerprint or placeholder name.

        Returns:
            The RenderResult, or None if ``identifier`` is a name that is not
            shaped like a placeholder.

        Raises:
            UnknownFingerprintError: Well-formed placeholder with no cache entry.
        """
        if isinstance(identifier, int):
            fingerprint: int | None = identifier
        else:
            fingerprint = self.codec.decode_name(identifier)
        if fingerprint is None:
            return None

        result = self.cache.lookup(fingerprint)
        if result is None:
            raise UnknownFingerprintError(fingerprint)
        return result

    def load(self, path: str | Path) -> bytes:
        """Image-loading callback for the host.

        Placeholder names are served from the cache. Any other path is read
        from disk, so a genuinely missing file still raises FileNotFoundError.

        Raises:
            DiagramRenderError: The placeholder's diagram failed to render.
            UnknownFingerprintError: Placeholder never produced by this session.
        """
        result = self.resolve(str(path))
        if result is None:
            return Path(path).read_bytes()

        if isinstance(result, Failed):
            fingerprint = self.codec.decode_name(str(path))
            logger.debug("Placeholder %s resolves to a failed render", path)
            raise DiagramRenderError(fingerprint, result.kind, result.message)
        return result.data
