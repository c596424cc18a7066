# src/logging/handlers.py — v1
"""Rotating file handler for pipeline logs."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_UNITS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}
_SIZE_RE = re.compile(r"^(\d+)\s*(B|KB|MB|GB)$", re.IGNORECASE)


def parse_size(size_str: str) -> int:
    """Convert '10MB' / '512KB' / '100B' into a byte count."""
    match = _SIZE_RE.match(size_str.strip())
    if match is None:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    return int(match.group(1)) * _SIZE_UNITS[match.group(2).upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 30,
) -> RotatingFileHandler:
    """Build a size-based rotating handler, creating the parent directory.

    Args:
        log_file: Target log path (``~`` is expanded).
        rotation: Max file size before rolling over.
        retention: Number of rolled files to keep.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
