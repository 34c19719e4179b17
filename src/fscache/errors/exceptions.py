"""Custom exception hierarchy for fscache."""

from __future__ import annotations

from typing import Any


class FsCacheError(Exception):
    """Base exception for all fscache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class StreamAbortedError(FsCacheError):
    """A streaming read was closed before it reached the end of the file.

    Raised to readers that attached to the in-flight read; the consumer that
    closed the stream never sees it.
    """

    def __init__(self, message: str = "", path: str = "") -> None:
        super().__init__(message or f"Stream for {path} closed before completion")
        self.path = path


class WatchError(FsCacheError):
    """Watch mode misuse, such as registering before start or starting twice."""
