"""
Auto-Advance Scheduler

Recurring jittered timer: sample a delay uniformly in [min, max], wait,
invoke the switch callback, repeat. The callback is awaited, so a slow
transition pushes the next delay back instead of overlapping it.
"""

import asyncio
import random
from typing import Any, Awaitable, Callable, Optional

from engine.clock import Clock
from lifecycle.task_registry import TaskCategory, spawn
from models.errors import PerformanceError
from models.schedule import IntervalBounds, ScheduleState
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SCHEDULER)


class AutoAdvanceScheduler:
    """
    Jittered auto-advance timer

    Example:
        scheduler = AutoAdvanceScheduler(service.random_switch, clock)
        scheduler.start()
        ...
        scheduler.set_bounds(3000, 6000)   # restarts with the new window
        scheduler.stop()
    """

    def __init__(
        self,
        callback: Callable[[], Awaitable[Any]],
        clock: Clock,
        rng: Optional[random.Random] = None,
        bounds: Optional[IntervalBounds] = None,
    ):
        self._callback = callback
        self.clock = clock
        self.rng = rng or random.Random()
        self.state = ScheduleState(bounds=bounds or IntervalBounds())

    # ============================================================
    # State
    # ============================================================

    @property
    def bounds(self) -> IntervalBounds:
        return self.state.bounds

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    def is_running(self) -> bool:
        return self.state.handle is not None and not self.state.handle.done

    def sample_delay(self) -> float:
        """Uniform delay in [min, max] milliseconds"""
        return self.rng.uniform(self.state.bounds.min_ms, self.state.bounds.max_ms)

    # ============================================================
    # Control
    # ============================================================

    def start(self) -> None:
        """Cancel any pending timer and begin self-scheduling"""
        self._cancel_handle()
        self.state.enabled = True
        self.state.handle = spawn(
            self._loop(),
            category=TaskCategory.SCHEDULER,
            description="Auto-advance timer",
        )
        log.info(
            "Auto-advance started",
            min_ms=self.state.bounds.min_ms,
            max_ms=self.state.bounds.max_ms,
        )

    def stop(self) -> bool:
        """Cancel the timer; returns False if it was not running"""
        was_enabled = self.state.enabled
        self.state.enabled = False
        cancelled = self._cancel_handle()
        if was_enabled:
            log.info("Auto-advance stopped", switches=self.state.switches)
        return cancelled

    def restart(self) -> None:
        self.stop()
        self.start()

    def set_bounds(self, min_ms: float, max_ms: float) -> IntervalBounds:
        """
        Replace the jitter window.

        Raises InvalidIntervalError (prior bounds kept). A pending delay was
        sampled from the old window, so a running timer is restarted.
        """
        self.state.bounds = IntervalBounds(min_ms, max_ms)
        log.info("Interval changed", min_ms=min_ms, max_ms=max_ms)
        if self.state.enabled:
            self.restart()
        return self.state.bounds

    def scale_interval(self, multiplier: float) -> IntervalBounds:
        """Scale both bounds, keeping min >= 1000 ms and max >= min + 1000 ms"""
        scaled = self.state.bounds.scaled(multiplier)
        return self.set_bounds(scaled.min_ms, scaled.max_ms)

    # ============================================================
    # Internal
    # ============================================================

    def _cancel_handle(self) -> bool:
        handle, self.state.handle = self.state.handle, None
        if handle is None:
            return False
        return handle.cancel()

    async def _loop(self) -> None:
        try:
            while True:
                delay = self.sample_delay()
                self.state.last_delay_ms = delay
                log.debug(f"Next auto switch in {delay:.0f}ms")

                await self.clock.sleep(delay)

                try:
                    await self._callback()
                    self.state.switches += 1
                except PerformanceError as e:
                    log.warn(f"Auto switch skipped: {e.message}", code=e.code)
                except Exception as e:
                    log.error(f"Auto switch failed: {e}")
        except asyncio.CancelledError:
            log.debug("Auto-advance timer cancelled")
            raise
