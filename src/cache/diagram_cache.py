# src/cache/diagram_cache.py — v1
"""Append-only in-memory store of render results keyed by fingerprint.

Lives for one session. Entries are immutable pydantic models, so a result
handed out earlier stays valid while later entries are added; nothing is ever
removed or replaced.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from tikzembed.core.errors import DuplicateEntryError
from tikzembed.core.models import RenderResult

logger = logging.getLogger(__name__)


class DiagramCache:
    """Fingerprint -> RenderResult, each key written at most once.

    Failed renders are stored exactly like successful ones, so a broken
    diagram repeated N times in a document is attempted once.
    """

    def __init__(self) -> None:
        self._entries: dict[int, RenderResult] = {}
        self.hits = 0
        self.misses = 0

    def get_or_compute(
        self, fingerprint: int, compute: Callable[[], RenderResult]
    ) -> RenderResult:
        """Return the entry for ``fingerprint``, computing it on first use.

        ``compute`` is called at most once per fingerprint for the lifetime of
        the cache and never when an entry already exists.
        """
        entry = self._entries.get(fingerprint)
        if entry is not None:
            self.hits += 1
            logger.debug("Cache hit for %d", fingerprint)
            return entry

        self.misses += 1
        logger.debug("Cache miss for %d", fingerprint)
        return self.insert(fingerprint, compute())

    def lookup(self, fingerprint: int) -> RenderResult | None:
        """Non-mutating read."""
        return self._entries.get(fingerprint)

    def insert(self, fingerprint: int, result: RenderResult) -> RenderResult:
        """Store a new entry.

        Raises:
            DuplicateEntryError: If ``fingerprint`` is already present.
        """
        if fingerprint in self._entries:
            raise DuplicateEntryError(fingerprint)
        self._entries[fingerprint] = result
        return result

    def entries(self) -> Iterator[tuple[int, RenderResult]]:
        """Iterate entries in insertion order."""
        return iter(list(self._entries.items()))

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._entries

    def __len__(self) -> int:
        return len(self._entries)
