"""Filesystem change notification backed by watchdog."""

from __future__ import annotations

import logging
import os
import threading
from typing import Protocol

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from fscache.errors.exceptions import WatchError
from fscache.types import EventCallback, WatchEvent

logger = logging.getLogger(__name__)

_EVENT_KINDS: dict[str, WatchEvent] = {
    EVENT_TYPE_MODIFIED: WatchEvent.CHANGED,
    EVENT_TYPE_CREATED: WatchEvent.ADDED,
    EVENT_TYPE_DELETED: WatchEvent.DELETED,
    EVENT_TYPE_MOVED: WatchEvent.RENAMED,
}


class Watcher(Protocol):
    """Watches individual files by registering their parent directories.

    ``callback(kind, path)`` may be invoked from any thread.
    """

    def start(self, callback: EventCallback) -> None: ...

    def add(self, path: str) -> None: ...

    def watched(self) -> dict[str, list[str]]: ...

    def stop(self) -> None: ...


class _Handler(FileSystemEventHandler):
    def __init__(self, watcher: WatchdogWatcher) -> None:
        super().__init__()
        self._watcher = watcher

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        kind = _EVENT_KINDS.get(event.event_type)
        if kind is None:
            return
        self._watcher.dispatch(kind, os.fsdecode(event.src_path))
        dest_path = getattr(event, "dest_path", "")
        if kind is WatchEvent.RENAMED and dest_path:
            # Atomic saves rename a temp file over the target
            self._watcher.dispatch(WatchEvent.CHANGED, os.fsdecode(dest_path))


class WatchdogWatcher:
    """Watcher running a watchdog observer thread.

    Directories are scheduled non-recursively the first time a file in them
    is added; only events naming an added file reach the callback.
    """

    def __init__(self) -> None:
        self._observer: Observer | None = None
        self._callback: EventCallback | None = None
        self._handler = _Handler(self)
        self._lock = threading.Lock()
        self._watched: dict[str, list[str]] = {}
        # absolute path -> spellings the caller registered it under
        self._lookup: dict[str, list[str]] = {}

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self, callback: EventCallback) -> None:
        if self._observer is not None:
            raise WatchError("Watcher is already running")
        self._callback = callback
        self._observer = Observer()
        self._observer.daemon = True
        self._observer.start()
        logger.info("File watcher started")

    def add(self, path: str) -> None:
        if self._observer is None:
            raise WatchError(f"Cannot watch {path}: watcher not started")
        full = os.path.abspath(path)
        directory = os.path.dirname(full)
        with self._lock:
            files = self._watched.get(directory)
            if files is None:
                if not os.path.isdir(directory):
                    logger.warning("Cannot watch non-existent directory: %s", directory)
                    return
                self._observer.schedule(self._handler, directory, recursive=False)
                files = self._watched[directory] = []
                logger.info("Watching directory: %s", directory)
            if path in files:
                return
            files.append(path)
            self._lookup.setdefault(full, []).append(path)

    def watched(self) -> dict[str, list[str]]:
        with self._lock:
            return {directory: list(files) for directory, files in self._watched.items()}

    def dispatch(self, kind: WatchEvent, src_path: str) -> None:
        with self._lock:
            paths = list(self._lookup.get(os.path.abspath(src_path), ()))
            callback = self._callback
        if callback is None:
            return
        for path in paths:
            callback(kind, path)

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
        self._callback = None
        with self._lock:
            self._watched.clear()
            self._lookup.clear()
        logger.info("File watcher stopped")
