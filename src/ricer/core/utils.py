"""Path helpers and output truncation."""

from __future__ import annotations

import os
from pathlib import Path

MAX_OUTPUT_BYTES = 100 * 1024  # 100KB


def expand_path(path: str) -> Path:
    """Expand ``~`` and ``$VAR`` / ``${VAR}`` references in *path*."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


def truncate(text: str, max_bytes: int = MAX_OUTPUT_BYTES) -> str:
    """Truncate text to max_bytes."""
    encoded = text.encode("utf-8", errors="replace")
    if len(encoded) <= max_bytes:
        return text
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")
    return truncated + f"\n\n... [truncated, {len(encoded)} bytes total]"


def short_path(p: Path, home: Path | None = None) -> str:
    """Return path relative to home directory, using ~ prefix."""
    try:
        rel = p.relative_to(home or Path.home())
        return f"~/{rel}" if str(rel) != "." else "~"
    except ValueError:
        return str(p)
