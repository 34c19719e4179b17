"""In-memory path -> CacheValue mapping."""

from __future__ import annotations

from collections.abc import Iterator

from fscache.cache.entries import CacheValue, Materialized, Pending


class Store:
    """Unbounded store keyed by the caller-supplied path. No TTL, no eviction."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheValue] = {}

    def get(self, path: str) -> CacheValue | None:
        return self._entries.get(path)

    def set(self, path: str, value: CacheValue) -> None:
        self._entries[path] = value

    def delete(self, path: str) -> bool:
        """Remove ``path``. Returns whether an entry was present."""
        return self._entries.pop(path, None) is not None

    def settle(self, path: str, pending: Pending, content: str) -> bool:
        """Replace ``pending`` with its content.

        Fills the slot when it is still ``pending`` or was expired meanwhile;
        leaves it alone when another read has installed a newer value.
        """
        current = self._entries.get(path)
        if current is not None and current is not pending:
            return False
        self._entries[path] = Materialized(content)
        return True

    def discard(self, path: str, pending: Pending) -> None:
        """Remove ``pending`` after a failed read, but only if it is still current."""
        if self._entries.get(path) is pending:
            del self._entries[path]

    def clear(self) -> None:
        self._entries.clear()

    def paths(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
