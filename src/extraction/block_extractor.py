# src/extraction/block_extractor.py — v1
"""Locate diagram blocks in host document text.

Two host syntaxes are supported:

- ``plain``:  ``tikzpicture[ <source> ]``
- ``fenced``: ``tikzpicture[ ```<source>``` ]``

In plain mode the payload may contain one level of balanced brackets
(``\\node{A[1]};``); the first unbalanced ``]`` ends the block. Text that does
not match is left alone, extraction never raises.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from typing import Literal

from tikzembed.core.models import DiagramBlock

logger = logging.getLogger(__name__)

HostSyntax = Literal["plain", "fenced"]

DEFAULT_ENVIRONMENTS: tuple[str, ...] = ("tikzpicture", "tikzcd")

# Payload with at most one level of nested [...] pairs.
_BALANCED_PAYLOAD = r"[^\[\]]*(?:\[[^\[\]]*\][^\[\]]*)*"
_FENCE = "```"


def build_pattern(
    environments: Iterable[str] = DEFAULT_ENVIRONMENTS,
    syntax: HostSyntax = "plain",
) -> re.Pattern[str]:
    """Compile the block pattern for the given environments and syntax."""
    names = [name for name in environments if name]
    if not names:
        raise ValueError("At least one diagram environment is required")
    # Longest first so "tikzcd" never shadows a longer name sharing its prefix.
    alternation = "|".join(re.escape(n) for n in sorted(names, key=len, reverse=True))

    if syntax == "plain":
        return re.compile(
            rf"(?P<environment>{alternation})\[(?P<source>{_BALANCED_PAYLOAD})\]"
        )
    if syntax == "fenced":
        return re.compile(
            rf"(?P<environment>{alternation})\[\s*{_FENCE}"
            rf"(?P<source>(?:(?!{_FENCE}).)*){_FENCE}\s*\]",
            re.DOTALL,
        )
    raise ValueError(f"Unknown host syntax: {syntax!r}")


class BlockExtractor:
    """Find diagram blocks in order of appearance."""

    def __init__(
        self,
        environments: Iterable[str] = DEFAULT_ENVIRONMENTS,
        syntax: HostSyntax = "plain",
    ) -> None:
        self.environments = tuple(environments)
        self.syntax = syntax
        self._pattern = build_pattern(self.environments, syntax)

    def iter_blocks(self, text: str) -> Iterator[DiagramBlock]:
        """Yield blocks lazily, in document order."""
        for match in self._pattern.finditer(text):
            yield DiagramBlock(
                environment=match.group("environment"),
                source=match.group("source"),
                start=match.start(),
                end=match.end(),
                lines=self._count_lines(match),
            )

    def extract(self, text: str) -> list[DiagramBlock]:
        """Return all blocks in document order."""
        blocks = list(self.iter_blocks(text))
        logger.debug("Extracted %d diagram block(s)", len(blocks))
        return blocks

    def _count_lines(self, match: re.Match[str]) -> int:
        # Only the fenced syntax preserves line count. The whole match is
        # counted so whitespace around the fence is covered too.
        if self.syntax != "fenced":
            return 0
        return match.group(0).count("\n")


def extract_blocks(
    text: str,
    syntax: HostSyntax = "plain",
    environments: Iterable[str] = DEFAULT_ENVIRONMENTS,
) -> list[DiagramBlock]:
    """Convenience wrapper around ``BlockExtractor.extract``."""
    return BlockExtractor(environments, syntax).extract(text)
