"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Text encoding used for every read and write
DEFAULT_ENCODING = "utf-8"

# Streaming reads pull this many characters per chunk
DEFAULT_CHUNK_SIZE = 64 * 1024

# Automatic invalidation is opt-in
DEFAULT_WATCH = False

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "encoding": DEFAULT_ENCODING,
        "chunk_size": DEFAULT_CHUNK_SIZE,
        "watch": DEFAULT_WATCH,
        "log_level": DEFAULT_LOG_LEVEL,
    }
