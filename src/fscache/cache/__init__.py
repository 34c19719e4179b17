"""Cache subsystem: path-keyed store, read path, invalidation and stats."""

from fscache.cache.entries import CacheValue, Materialized, Pending
from fscache.cache.file_cache import FileCache
from fscache.cache.stats import CacheStats
from fscache.cache.store import Store

__all__ = [
    "CacheStats",
    "CacheValue",
    "FileCache",
    "Materialized",
    "Pending",
    "Store",
]
