import asyncio
from contextlib import asynccontextmanager
from pathlib import Path

import pytest

from fscache.fs.local import LocalFileSystem

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES


@pytest.fixture
def file_a():
    return str(FIXTURES / "fileA.txt")


@pytest.fixture
def file_b():
    return str(FIXTURES / "fileB.txt")


class _Sink:
    def __init__(self, owner, path):
        self._owner = owner
        self._path = path
        self._parts = []

    async def write(self, chunk):
        if self._owner.fail_writes:
            raise OSError(f"disk full: {self._path}")
        self._parts.append(chunk)


class FakeFileSystem:
    """In-memory FileSystem that counts reads and can stall or fail them.

    ``gate`` (an asyncio.Event) holds every read until it is set.
    """

    def __init__(self, files=None, chunk_size=2):
        self.files = dict(files or {})
        self.chunk_size = chunk_size
        self.reads = 0
        self.stream_opens = 0
        self.dirs = []
        self.gate = None
        self.fail_writes = False
        self.fail_dirs = False

    async def _wait_gate(self):
        if self.gate is not None:
            await self.gate.wait()

    async def read(self, path, encoding):
        self.reads += 1
        await self._wait_gate()
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    async def open_read_stream(self, path, encoding):
        self.stream_opens += 1
        await self._wait_gate()
        if path not in self.files:
            raise FileNotFoundError(path)
        content = self.files[path]
        for i in range(0, len(content), self.chunk_size):
            await asyncio.sleep(0)
            yield content[i:i + self.chunk_size]

    @asynccontextmanager
    async def open_write_stream(self, path, encoding):
        sink = _Sink(self, path)
        yield sink
        self.files[path] = "".join(sink._parts)

    async def ensure_dir(self, path):
        if self.fail_dirs:
            raise PermissionError(path)
        self.dirs.append(path)


class FakeWatcher:
    """Watcher that records registrations and lets tests fire events."""

    def __init__(self):
        self.callback = None
        self.added = []
        self.stopped = False

    def start(self, callback):
        self.callback = callback

    def add(self, path):
        if path not in self.added:
            self.added.append(path)

    def watched(self):
        result = {}
        for path in self.added:
            result.setdefault(str(Path(path).parent), []).append(path)
        return result

    def stop(self):
        self.stopped = True

    def fire(self, kind, path):
        self.callback(kind, path)


@pytest.fixture
def fake_fs():
    return FakeFileSystem({"/src/a.txt": "File A", "/src/b.txt": "File B"})


@pytest.fixture
def fake_watcher():
    return FakeWatcher()


@pytest.fixture
def local_fs():
    return LocalFileSystem(chunk_size=4)
