"""Time sources for playback.

``AsyncioClock`` waits in real time.  ``VirtualClock`` only moves when told
to, so every timed step of a round can be checked without real sleeps.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod


class Clock(ABC):
    @abstractmethod
    async def sleep(self, ms: float) -> None:
        """Suspend the calling task for *ms* milliseconds."""

    @abstractmethod
    def now(self) -> float:
        """Current time in milliseconds."""


class AsyncioClock(Clock):
    """Real time, backed by the running event loop."""

    async def sleep(self, ms: float) -> None:
        await asyncio.sleep(ms / 1000)

    def now(self) -> float:
        return asyncio.get_running_loop().time() * 1000


class VirtualClock(Clock):
    """Manually advanced clock.

    Sleepers are parked on futures ordered by wake-up time.  ``advance``
    wakes them one by one, letting each woken task run up to its next
    ``sleep`` before the following deadline is considered.
    """

    # Loop iterations granted to woken tasks before re-checking deadlines.
    SETTLE_ROUNDS = 10

    def __init__(self) -> None:
        self._now: float = 0.0
        self._sleepers: list[tuple[float, int, asyncio.Future[None]]] = []
        self._order = itertools.count()

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of tasks still waiting on this clock."""
        return sum(1 for _, _, fut in self._sleepers if not fut.done())

    async def sleep(self, ms: float) -> None:
        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        heapq.heappush(self._sleepers, (self._now + ms, next(self._order), fut))
        await fut

    async def advance(self, ms: float) -> None:
        """Move time forward by *ms*, running every task that wakes meanwhile."""
        target = self._now + ms
        await self._settle()
        while self._sleepers and self._sleepers[0][0] <= target:
            wake_at, _, fut = heapq.heappop(self._sleepers)
            self._now = wake_at
            if not fut.done():
                fut.set_result(None)
            await self._settle()
        self._now = target
        await self._settle()

    async def _settle(self) -> None:
        for _ in range(self.SETTLE_ROUNDS):
            await asyncio.sleep(0)
