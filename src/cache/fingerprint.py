# src/cache/fingerprint.py — v3
"""Content fingerprint of a diagram: (environment, source) -> 64-bit int.

The fingerprint is both the cache key and the placeholder identifier, so it
must be stable across processes. Python's built-in ``hash`` is salted per
process and is therefore not used.

Collisions are not detected: two distinct diagrams hashing to the same value
share one cache entry. With 64 bits this is an accepted limitation.
"""

from __future__ import annotations

import hashlib

FINGERPRINT_BITS = 64
_FIELD_TERMINATOR = b"\xff"


def compute_fingerprint(environment: str, source: str) -> int:
    """Compute the fingerprint of a diagram block.

    Each field is followed by a 0xFF byte (never valid in UTF-8), so
    ``("ab", "c")`` and ``("a", "bc")`` hash differently.

    Args:
        environment: Diagram environment name (e.g. "tikzpicture").
        source: Raw diagram source, byte-exact, whitespace included.

    Returns:
        Unsigned 64-bit integer.
    """
    hasher = hashlib.sha256()
    for field in (environment, source):
        hasher.update(field.encode("utf-8"))
        hasher.update(_FIELD_TERMINATOR)
    return int.from_bytes(hasher.digest()[: FINGERPRINT_BITS // 8], "big")


def is_valid_fingerprint(value: int) -> bool:
    """Whether ``value`` fits the unsigned 64-bit fingerprint range."""
    return 0 <= value < (1 << FINGERPRINT_BITS)
