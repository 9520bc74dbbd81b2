# src/core/errors.py — v1
"""Exception hierarchy for tikzembed.

Render failures of a single diagram are NOT exceptions: they are stored as
``Failed`` cache entries (see core.models). The exceptions below signal broken
invariants and are expected to terminate the run, except ``DiagramRenderError``
which is how a stored failure surfaces to the host's image loader.
"""

from __future__ import annotations


class TikzEmbedError(Exception):
    """Base class for all tikzembed errors."""


class MetadataInconsistencyError(TikzEmbedError):
    """Rendered SVG declares a width the pipeline cannot represent."""


class UnknownFingerprintError(TikzEmbedError, LookupError):
    """Resolver asked for a fingerprint that was never recorded."""

    def __init__(self, fingerprint: int) -> None:
        super().__init__(f"No cache entry for fingerprint {fingerprint}")
        self.fingerprint = fingerprint


class DuplicateEntryError(TikzEmbedError):
    """Attempt to overwrite an existing cache key."""

    def __init__(self, fingerprint: int) -> None:
        super().__init__(f"Cache entry for fingerprint {fingerprint} already exists")
        self.fingerprint = fingerprint


class DiagramRenderError(TikzEmbedError):
    """A placeholder was loaded whose diagram failed to render.

    ``str(exc)`` is the original diagnostic (captured tool output).
    """

    def __init__(self, fingerprint: int, kind: str, message: str) -> None:
        super().__init__(message)
        self.fingerprint = fingerprint
        self.kind = kind
        self.message = message
