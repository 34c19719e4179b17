"""Tests for the aiofiles-backed local filesystem."""

import pytest

from fscache.fs.local import LocalFileSystem


class TestLocalFileSystem:
    async def test_read(self, file_a):
        fs = LocalFileSystem()
        assert await fs.read(file_a, "utf-8") == "File A"

    async def test_read_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await LocalFileSystem().read(str(tmp_path / "nope.txt"), "utf-8")

    async def test_read_keeps_line_endings(self, tmp_path):
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"a\r\nb\r\n")
        assert await LocalFileSystem().read(str(path), "utf-8") == "a\r\nb\r\n"

    async def test_stream_in_chunks(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("abcdefghij")
        fs = LocalFileSystem(chunk_size=4)
        chunks = [c async for c in fs.open_read_stream(str(path), "utf-8")]
        assert chunks == ["abcd", "efgh", "ij"]

    async def test_stream_missing_raises_on_iteration(self, tmp_path):
        stream = LocalFileSystem().open_read_stream(str(tmp_path / "nope.txt"), "utf-8")
        with pytest.raises(FileNotFoundError):
            await stream.__anext__()

    async def test_write_stream(self, tmp_path):
        path = tmp_path / "out.txt"
        async with LocalFileSystem().open_write_stream(str(path), "utf-8") as sink:
            await sink.write("one\n")
            await sink.write("two\n")
        assert path.read_bytes() == b"one\ntwo\n"

    async def test_ensure_dir_is_idempotent(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        fs = LocalFileSystem()
        await fs.ensure_dir(str(target))
        await fs.ensure_dir(str(target))
        assert target.is_dir()

    async def test_ensure_dir_over_file_fails(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(OSError):
            await LocalFileSystem().ensure_dir(str(blocker / "child"))

    def test_rejects_bad_chunk_size(self):
        with pytest.raises(ValueError, match="chunk_size"):
            LocalFileSystem(chunk_size=0)
