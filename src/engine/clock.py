"""
Clock
=====

Every timer in the engine (layer frame loops, transition steps, effect
countdowns, auto-advance delays) reads time through a Clock. Nothing calls
asyncio.sleep() directly.

- AsyncioClock: real time on the running event loop
- ManualClock:  virtual time, advanced explicitly (tests, offline rendering)
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import List, Protocol, Tuple


class Clock(Protocol):
    """
    Time source protocol.

    All values are milliseconds.
    """

    def now_ms(self) -> float:
        """Current time in milliseconds (monotonic)."""
        ...

    async def sleep(self, ms: float) -> None:
        """Suspend the calling coroutine for `ms` milliseconds."""
        ...

    async def next_frame(self) -> None:
        """Suspend until the next display frame."""
        ...


class AsyncioClock:
    """Real-time clock backed by the running asyncio loop"""

    def __init__(self, fps: int = 60):
        self.fps = max(1, min(fps, 240))

    @property
    def frame_ms(self) -> float:
        return 1000.0 / self.fps

    def now_ms(self) -> float:
        return asyncio.get_running_loop().time() * 1000.0

    async def sleep(self, ms: float) -> None:
        await asyncio.sleep(max(0.0, ms) / 1000.0)

    async def next_frame(self) -> None:
        await asyncio.sleep(self.frame_ms / 1000.0)


class ManualClock:
    """
    Deterministic virtual clock.

    Sleepers park on futures keyed by their wake-up time. advance() moves
    time forward, firing due timers in order and letting the event loop run
    between firings so woken coroutines can schedule their next sleep.

    Example:
        clock = ManualClock()
        task = asyncio.create_task(engine.execute_transition("fade", "a", "b"))
        await clock.advance(500)
        assert task.done()
    """

    SETTLE_ROUNDS = 20

    def __init__(self, start_ms: float = 0.0, fps: int = 60):
        self._now = float(start_ms)
        self.fps = max(1, min(fps, 240))
        self._timers: List[Tuple[float, int, asyncio.Future]] = []
        self._seq = itertools.count()

    @property
    def frame_ms(self) -> float:
        return 1000.0 / self.fps

    def now_ms(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of sleepers still waiting"""
        return sum(1 for _, _, fut in self._timers if not fut.done())

    async def sleep(self, ms: float) -> None:
        if ms <= 0:
            await asyncio.sleep(0)
            return
        fut = asyncio.get_running_loop().create_future()
        heapq.heappush(self._timers, (self._now + ms, next(self._seq), fut))
        await fut

    async def next_frame(self) -> None:
        await self.sleep(self.frame_ms)

    async def advance(self, ms: float) -> None:
        """Move virtual time forward by `ms`, waking every sleeper due on the way."""
        target = self._now + max(0.0, ms)
        await self.settle()

        while self._timers and self._timers[0][0] <= target:
            due, _, fut = heapq.heappop(self._timers)
            if fut.done():
                # Sleeper was cancelled
                continue
            self._now = max(self._now, due)
            fut.set_result(None)
            await self.settle()

        self._now = target
        await self.settle()

    async def settle(self) -> None:
        """Let ready callbacks and woken tasks run without moving time."""
        for _ in range(self.SETTLE_ROUNDS):
            await asyncio.sleep(0)
