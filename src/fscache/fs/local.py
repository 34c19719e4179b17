"""Raw async file I/O backed by aiofiles."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

import aiofiles
import aiofiles.os

from fscache.config.defaults import DEFAULT_CHUNK_SIZE


class FileSystem(Protocol):
    """What the cache needs from the underlying storage.

    Errors are raised as-is; the cache never translates them.
    """

    async def read(self, path: str, encoding: str) -> str: ...

    def open_read_stream(self, path: str, encoding: str) -> AsyncIterator[str]: ...

    def open_write_stream(
        self, path: str, encoding: str
    ) -> AbstractAsyncContextManager[Any]: ...

    async def ensure_dir(self, path: str) -> None: ...


class LocalFileSystem:
    """Local disk access through aiofiles' thread-pool file objects."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._chunk_size = chunk_size

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    async def read(self, path: str, encoding: str) -> str:
        async with aiofiles.open(path, encoding=encoding, newline="") as f:
            return await f.read()

    async def open_read_stream(self, path: str, encoding: str) -> AsyncIterator[str]:
        async with aiofiles.open(path, encoding=encoding, newline="") as f:
            while True:
                chunk = await f.read(self._chunk_size)
                if not chunk:
                    break
                yield chunk

    def open_write_stream(
        self, path: str, encoding: str
    ) -> AbstractAsyncContextManager[Any]:
        # No newline translation on either side, so a copy matches its source
        return aiofiles.open(path, "w", encoding=encoding, newline="")

    async def ensure_dir(self, path: str) -> None:
        await aiofiles.os.makedirs(path, exist_ok=True)
