"""Module-level API bound to a shared default FileCache."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable

from fscache.cache.file_cache import FileCache
from fscache.cache.stats import CacheStats
from fscache.config.hierarchy import load_cache_config
from fscache.types import EventCallback, Transform

logger = logging.getLogger(__name__)

_default_cache: FileCache | None = None


def get_default_cache() -> FileCache:
    """Return the process-wide cache, building it from config on first use."""
    global _default_cache
    if _default_cache is None:
        config = load_cache_config()
        _default_cache = FileCache.from_config(config)
        logger.debug("Created default cache (encoding=%s)", config.encoding)
    return _default_cache


def set_default_cache(cache: FileCache | None) -> FileCache | None:
    """Replace the process-wide cache. Returns the previous one.

    Passing None drops it; the next call builds a fresh one.
    """
    global _default_cache
    previous, _default_cache = _default_cache, cache
    return previous


# ── Module-level convenience functions ──


async def read_file(path: str) -> str:
    return await get_default_cache().read_file(path)


def create_read_stream(path: str) -> AsyncIterator[str]:
    return get_default_cache().create_read_stream(path)


def expire(path: str) -> None:
    get_default_cache().expire(path)


async def concat(paths: Iterable[str], transform: Transform | None = None) -> str:
    return await get_default_cache().concat(paths, transform)


async def copy(src: str, dest: str) -> None:
    await get_default_cache().copy(src, dest)


def stats(reset: bool = False) -> CacheStats:
    return get_default_cache().stats(reset=reset)


def reset_stats() -> None:
    get_default_cache().reset_stats()


def watch(on_event: EventCallback) -> None:
    get_default_cache().watch(on_event)
