"""
Auto-advance schedule models
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from models.errors import InvalidIntervalError

if TYPE_CHECKING:
    from lifecycle.task_registry import TaskHandle

MIN_INTERVAL_FLOOR_MS = 1000


@dataclass(frozen=True)
class IntervalBounds:
    """Jitter window for auto-advance, in milliseconds"""
    min_ms: float = 2000
    max_ms: float = 10000

    def __post_init__(self):
        validate_interval(self.min_ms, self.max_ms)

    def scaled(self, multiplier: float) -> "IntervalBounds":
        """
        Scale both bounds, keeping min above the floor and max at least
        one floor-width above min.
        """
        new_min = max(MIN_INTERVAL_FLOOR_MS, round(self.min_ms * multiplier))
        new_max = max(new_min + MIN_INTERVAL_FLOOR_MS, round(self.max_ms * multiplier))
        return IntervalBounds(new_min, new_max)


def validate_interval(min_ms: float, max_ms: float) -> None:
    """Raise InvalidIntervalError unless floor <= min < max"""
    if min_ms < MIN_INTERVAL_FLOOR_MS:
        raise InvalidIntervalError(min_ms, max_ms, f"min must be at least {MIN_INTERVAL_FLOOR_MS}ms")
    if min_ms >= max_ms:
        raise InvalidIntervalError(min_ms, max_ms, "min must be less than max")


@dataclass
class ScheduleState:
    """
    Live auto-advance timer state

    Created when auto mode is enabled; handle cleared when disabled or when
    the bounds change (a pending delay was sampled from the old bounds).
    """
    bounds: IntervalBounds
    handle: Optional["TaskHandle"] = None
    enabled: bool = False
    switches: int = 0
    last_delay_ms: Optional[float] = None
