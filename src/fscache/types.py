"""Shared types for fscache."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum


class WatchEvent(StrEnum):
    CHANGED = "changed"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"


# Events after which the cached copy no longer matches the file
EXPIRING_EVENTS = frozenset({WatchEvent.CHANGED, WatchEvent.DELETED, WatchEvent.RENAMED})

Transform = Callable[[str, str], str]
EventCallback = Callable[[str, str], object]
