"""Hit/miss statistics."""

from __future__ import annotations

from pydantic import BaseModel


class CacheStats(BaseModel):
    """Snapshot of read-path counters."""

    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class StatsCounter:
    """Mutable counters; one increment per read-path call."""

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0

    def record_hit(self) -> None:
        self.hits += 1

    def record_miss(self) -> None:
        self.misses += 1

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0

    def snapshot(self, reset: bool = False) -> CacheStats:
        stats = CacheStats(hits=self.hits, misses=self.misses)
        if reset:
            self.reset()
        return stats
