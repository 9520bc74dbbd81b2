# src/pipeline/placeholder.py — v1
"""Placeholder names and embed directives.

A placeholder name is ``<prefix><fingerprint><suffix>`` with the fingerprint
in decimal, e.g. ``generated_tikz_1234.svg``. Decoding is the exact inverse
of encoding; anything else is "not a placeholder" (``None``).
"""

from __future__ import annotations

import re

from tikzembed.cache.fingerprint import is_valid_fingerprint

DEFAULT_PREFIX = "generated_tikz_"
DEFAULT_SUFFIX = ".svg"


class PlaceholderCodec:
    """Encode fingerprints as file names and build embed directives."""

    def __init__(self, prefix: str = DEFAULT_PREFIX, suffix: str = DEFAULT_SUFFIX) -> None:
        self.prefix = prefix
        self.suffix = suffix
        # Canonical decimal only: no sign, no leading zeros.
        self._name_re = re.compile(
            rf"^{re.escape(prefix)}(?P<fingerprint>0|[1-9][0-9]*){re.escape(suffix)}$"
        )

    def encode_name(self, fingerprint: int) -> str:
        return f"{self.prefix}{fingerprint}{self.suffix}"

    def decode_name(self, name: str) -> int | None:
        """Return the fingerprint encoded in ``name`` or None if not a placeholder.

        Only the final path component is considered, so ``assets/<name>``
        decodes the same as ``<name>``.
        """
        basename = re.split(r"[\\/]", name)[-1]
        match = self._name_re.match(basename)
        if not match:
            return None
        fingerprint = int(match.group("fingerprint"))
        if not is_valid_fingerprint(fingerprint):
            return None
        return fingerprint

    def is_placeholder(self, name: str) -> bool:
        return self.decode_name(name) is not None

    def directive(self, fingerprint: int, width: str | None = None) -> str:
        """``image("<name>")`` or ``image("<name>", width: <width>)``."""
        name = self.encode_name(fingerprint)
        if width is None:
            return f'image("{name}")'
        return f'image("{name}", width: {width})'
