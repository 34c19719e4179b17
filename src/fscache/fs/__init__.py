"""Filesystem collaborators: raw file I/O and change notification."""

from fscache.fs.local import FileSystem, LocalFileSystem
from fscache.fs.watcher import Watcher, WatchdogWatcher

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "Watcher",
    "WatchdogWatcher",
]
