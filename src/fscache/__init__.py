"""fscache: read-through content cache for build-pipeline file access."""

from fscache.cache.file_cache import FileCache
from fscache.cache.stats import CacheStats
from fscache.core import (
    concat,
    copy,
    create_read_stream,
    expire,
    get_default_cache,
    read_file,
    reset_stats,
    set_default_cache,
    stats,
    watch,
)
from fscache.errors.exceptions import FsCacheError, StreamAbortedError, WatchError
from fscache.types import WatchEvent

__all__ = [
    "CacheStats",
    "FileCache",
    "FsCacheError",
    "StreamAbortedError",
    "WatchError",
    "WatchEvent",
    "concat",
    "copy",
    "create_read_stream",
    "expire",
    "get_default_cache",
    "read_file",
    "reset_stats",
    "set_default_cache",
    "stats",
    "watch",
]
