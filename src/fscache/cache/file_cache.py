"""Read-through content cache for file-system data."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from collections.abc import AsyncIterator, Iterable

from fscache.cache.entries import Materialized, Pending
from fscache.cache.stats import CacheStats, StatsCounter
from fscache.cache.store import Store
from fscache.cache.streams import TapStream, content_stream, pending_stream
from fscache.config.defaults import DEFAULT_ENCODING
from fscache.config.schema import CacheConfig
from fscache.errors.exceptions import WatchError
from fscache.fs.local import FileSystem, LocalFileSystem
from fscache.fs.watcher import Watcher, WatchdogWatcher
from fscache.types import EXPIRING_EVENTS, EventCallback, Transform

logger = logging.getLogger(__name__)


class FileCache:
    """Serves file contents from memory, reading through to disk on a miss.

    Entries are keyed by the path string exactly as the caller passes it and
    live until expired. Concurrent first reads of one path share a single
    underlying read. Must be used from one event loop.
    """

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        watcher: Watcher | None = None,
        encoding: str = DEFAULT_ENCODING,
        auto_watch: bool = False,
    ) -> None:
        self._filesystem = filesystem or LocalFileSystem()
        self._watcher = watcher
        self._encoding = encoding
        # Start watch mode, with a logging observer, on the first miss
        self._auto_watch = auto_watch
        self._store = Store()
        self._stats = StatsCounter()
        self._tasks: set[asyncio.Task[None]] = set()
        self._on_event: EventCallback | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        filesystem: FileSystem | None = None,
        watcher: Watcher | None = None,
    ) -> FileCache:
        return cls(
            filesystem=filesystem or LocalFileSystem(chunk_size=config.chunk_size),
            watcher=watcher,
            encoding=config.encoding,
            auto_watch=config.watch,
        )

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def watcher(self) -> Watcher | None:
        return self._watcher

    @property
    def watching(self) -> bool:
        return self._on_event is not None

    # ── Read path ──

    async def read_file(self, path: str) -> str:
        """Return the content of ``path``, reading it only on a miss."""
        entry = self._store.get(path)
        if isinstance(entry, Materialized):
            self._stats.record_hit()
            logger.debug("Cache hit: %s", path)
            return entry.content
        if isinstance(entry, Pending):
            self._stats.record_hit()
            logger.debug("Cache hit (in flight): %s", path)
            return await entry.wait()

        self._stats.record_miss()
        logger.debug("Cache miss: %s", path)
        pending = self._start_pending(path)
        task = asyncio.get_running_loop().create_task(self._load(path, pending))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return await pending.wait()

    def create_read_stream(self, path: str) -> AsyncIterator[str]:
        """Return an async iterator over the content of ``path``.

        On a miss the file is streamed from disk and the chunks are
        collected on the side; the entry is materialized once the consumer
        has drained the stream. A stream that is abandoned part way leaves
        nothing cached. Call from within a running event loop.
        """
        entry = self._store.get(path)
        if isinstance(entry, Materialized):
            self._stats.record_hit()
            logger.debug("Cache hit (stream): %s", path)
            return content_stream(entry.content)
        if isinstance(entry, Pending):
            self._stats.record_hit()
            logger.debug("Cache hit (stream, in flight): %s", path)
            return pending_stream(entry)

        self._stats.record_miss()
        logger.debug("Cache miss (stream): %s", path)
        pending = self._start_pending(path)
        source = self._filesystem.open_read_stream(path, self._encoding)
        return TapStream(self._store, path, source, pending, on_cached=self._register)

    def _start_pending(self, path: str) -> Pending:
        if self._auto_watch and self._on_event is None:
            self.watch(_log_event)
        pending = Pending(asyncio.get_running_loop().create_future())
        self._store.set(path, pending)
        return pending

    def _register(self, path: str) -> None:
        # Only successfully read paths are watched
        if self._on_event is not None and self._watcher is not None:
            self._watcher.add(path)

    async def _load(self, path: str, pending: Pending) -> None:
        try:
            content = await self._filesystem.read(path, self._encoding)
        except asyncio.CancelledError:
            self._store.discard(path, pending)
            pending.cancel()
            raise
        except Exception as e:
            self._store.discard(path, pending)
            logger.debug("Read failed, not cached: %s (%s)", path, e)
            pending.fail(e)
            return
        # Settle before resolving so woken readers already see the entry
        if self._store.settle(path, pending, content):
            self._register(path)
        pending.resolve(content)

    # ── Invalidation ──

    def expire(self, path: str) -> None:
        """Drop the cached entry for ``path``, if any."""
        if self._store.delete(path):
            logger.debug("Expired: %s", path)

    def cached_paths(self) -> list[str]:
        return self._store.paths()

    def __contains__(self, path: object) -> bool:
        return path in self._store

    def __len__(self) -> int:
        return len(self._store)

    def watch(self, on_event: EventCallback) -> None:
        """Expire entries automatically when their files change.

        Every path cached now or later is watched once its read succeeds.
        For ``changed``, ``deleted`` and ``renamed`` events the entry is
        expired before ``on_event(kind, path)`` is called. Call from within a
        running loop.
        """
        if self._on_event is not None:
            raise WatchError("Cache is already watching")
        if self._watcher is None:
            self._watcher = WatchdogWatcher()
        self._loop = asyncio.get_running_loop()
        self._watcher.start(self._forward_event)
        self._on_event = on_event
        for path in self._store.paths():
            if isinstance(self._store.get(path), Materialized):
                self._watcher.add(path)

    def _forward_event(self, kind: str, path: str) -> None:
        # Watchers may call back from their own thread
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(self._handle_event, kind, path)

    def _handle_event(self, kind: str, path: str) -> None:
        on_event = self._on_event
        if on_event is None:
            return
        if kind in EXPIRING_EVENTS:
            self.expire(path)
        logger.debug("Watch event %s: %s", kind, path)
        on_event(kind, path)

    def close(self) -> None:
        """Stop watching, including automatic watching. The cached entries are kept."""
        self._auto_watch = False
        if self._watcher is not None and self._on_event is not None:
            self._watcher.stop()
        self._on_event = None
        self._loop = None

    # ── Derived operations ──

    async def concat(self, paths: Iterable[str], transform: Transform | None = None) -> str:
        """Read ``paths`` and join their contents in input order.

        ``transform(path, content)`` is applied to each file before joining.
        The first failed read fails the whole call.
        """
        paths = list(paths)
        contents = await asyncio.gather(*(self.read_file(p) for p in paths))
        if transform is not None:
            contents = [transform(p, c) for p, c in zip(paths, contents)]
        return "".join(contents)

    async def copy(self, src: str, dest: str) -> None:
        """Copy ``src`` to ``dest`` through the cached stream, creating parent dirs.

        A failed write may leave ``dest`` truncated.
        """
        parent = os.path.dirname(dest)
        if parent:
            await self._filesystem.ensure_dir(parent)
        stream = self.create_read_stream(src)
        async with contextlib.aclosing(stream):
            async with self._filesystem.open_write_stream(dest, self._encoding) as sink:
                async for chunk in stream:
                    await sink.write(chunk)
        logger.debug("Copied %s -> %s", src, dest)

    # ── Stats ──

    def stats(self, reset: bool = False) -> CacheStats:
        """Return hit/miss counters, zeroing them afterwards if ``reset``."""
        return self._stats.snapshot(reset=reset)

    def reset_stats(self) -> None:
        self._stats.reset()


def _log_event(kind: str, path: str) -> None:
    logger.info("Watch event %s: %s", kind, path)
