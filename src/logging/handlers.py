# src/logging/handlers.py — v2
"""File handler for log files, size-rotated when a rotation size is given."""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_RE = re.compile(r"^(\d+)\s*(B|KB|MB|GB)?$", re.IGNORECASE)
_MULTIPLIERS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size_str: str) -> int:
    """Parse '10MB', '512kb', '2048' (bytes) into a byte count."""
    match = _SIZE_RE.match(size_str.strip())
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    unit = (match.group(2) or "B").upper()
    return int(match.group(1)) * _MULTIPLIERS[unit]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str | None = "10MB",
    retention: int = 5,
) -> logging.FileHandler:
    """Create the log file handler.

    Args:
        log_file: Path to log file; parent directories are created.
        rotation: Max size before rotation, or None / "0" to append forever.
        retention: Number of rotated files to keep.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    max_bytes = parse_size(rotation) if rotation else 0
    if max_bytes == 0:
        return logging.FileHandler(str(path), encoding="utf-8")

    return RotatingFileHandler(
        filename=str(path),
        maxBytes=max_bytes,
        backupCount=retention,
        encoding="utf-8",
    )
