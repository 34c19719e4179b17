"""Async iterators handed out by ``FileCache.create_read_stream``."""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import AsyncIterator, Callable

from fscache.cache.entries import Pending
from fscache.cache.store import Store
from fscache.errors.exceptions import StreamAbortedError

logger = logging.getLogger(__name__)


async def content_stream(content: str) -> AsyncIterator[str]:
    """Single-shot stream over already cached content."""
    if content:
        yield content


async def pending_stream(pending: Pending) -> AsyncIterator[str]:
    """Stream that waits for an in-flight read and yields its result."""
    content = await pending.wait()
    if content:
        yield content


class TapStream:
    """Pass-through over a file stream that fills the cache on the side.

    Chunks reach the consumer untouched. When the source is exhausted the
    joined text replaces ``pending`` in the store and ``on_cached(path)`` is
    called. An error, an early ``aclose()`` or dropping the stream unfinished
    (``break`` out of the loop, or never iterating it) drops the entry
    instead, so later readers never wait on a read nobody is driving.
    """

    def __init__(
        self,
        store: Store,
        path: str,
        source: AsyncIterator[str],
        pending: Pending,
        on_cached: Callable[[str], None] | None = None,
    ) -> None:
        self._store = store
        self._path = path
        self._source = source
        self._pending = pending
        self._on_cached = on_cached
        self._chunks: list[str] = []
        self._done = False
        self._finalizer = weakref.finalize(self, _release_abandoned, store, path, pending)

    @property
    def path(self) -> str:
        return self._path

    def __aiter__(self) -> TapStream:
        return self

    async def __anext__(self) -> str:
        if self._done:
            raise StopAsyncIteration
        try:
            chunk = await self._source.__anext__()
        except StopAsyncIteration:
            self._finish()
            raise
        except asyncio.CancelledError:
            self._abandon()
            self._pending.fail(StreamAbortedError(path=self._path))
            raise
        except Exception as e:
            self._abandon()
            logger.debug("Stream failed, not cached: %s (%s)", self._path, e)
            self._pending.fail(e)
            raise
        self._chunks.append(chunk)
        return chunk

    async def aclose(self) -> None:
        if not self._done:
            self._abandon()
            self._pending.fail(StreamAbortedError(path=self._path))
        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            await aclose()

    def _finish(self) -> None:
        self._done = True
        self._finalizer.detach()
        content = "".join(self._chunks)
        self._chunks = []
        # Settle before resolving so woken readers already see the entry
        if self._store.settle(self._path, self._pending, content) and self._on_cached:
            self._on_cached(self._path)
        self._pending.resolve(content)

    def _abandon(self) -> None:
        self._done = True
        self._finalizer.detach()
        self._chunks = []
        self._store.discard(self._path, self._pending)


def _release_abandoned(store: Store, path: str, pending: Pending) -> None:
    # Runs when an unfinished TapStream is garbage collected
    store.discard(path, pending)
    if pending.future.get_loop().is_closed():
        return
    logger.debug("Stream dropped before completion, not cached: %s", path)
    pending.fail(StreamAbortedError(path=path))
