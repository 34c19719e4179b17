"""Cache values. A path holds either materialized content or a pending read."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass


@dataclass(frozen=True)
class Materialized:
    """Fully read file content."""

    content: str


@dataclass(frozen=True, eq=False)
class Pending:
    """An in-flight read. Late readers await ``future`` instead of reading again."""

    future: asyncio.Future[str]

    async def wait(self) -> str:
        # Shielded so one cancelled reader does not cancel the read for the rest
        return await asyncio.shield(self.future)

    def resolve(self, content: str) -> None:
        if not self.future.done():
            self.future.set_result(content)

    def fail(self, exc: BaseException) -> None:
        if self.future.done():
            return
        self.future.set_exception(exc)
        # Mark retrieved; the reader that triggered the read already sees exc
        self.future.exception()

    def cancel(self) -> None:
        self.future.cancel()


CacheValue = Materialized | Pending
