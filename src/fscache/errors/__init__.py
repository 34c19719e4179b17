"""Error handling: cache-specific exceptions.

I/O errors raised by the filesystem collaborators are never wrapped; these
cover failures that originate in the cache itself.
"""

from fscache.errors.exceptions import (
    FsCacheError,
    StreamAbortedError,
    WatchError,
)

__all__ = [
    "FsCacheError",
    "StreamAbortedError",
    "WatchError",
]
