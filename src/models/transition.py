"""
Transition Models

Defines transition timing configuration and the per-run state record used
by TransitionEngine for background surface hand-offs.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from models.enums import TransitionStatus


class TransitionConfig:
    """
    Configuration for a stepped transition

    Reusable configuration object defining how long a hand-off takes and
    how many intermediate writes it performs.

    Attributes:
        duration_ms: Total transition duration in milliseconds
        steps: Number of intermediate frames
        ease_function: Optional easing function (t: 0.0-1.0) → (factor: 0.0-1.0)

    Examples:
        # Cross-fade, CSS "ease"
        fade = TransitionConfig(duration_ms=500, steps=20, ease_function=ease_in_out_cubic)

        # Eight discrete glitch flickers
        glitch = TransitionConfig(duration_ms=400, steps=8)
    """

    def __init__(
        self,
        duration_ms: int = 300,
        steps: int = 10,
        ease_function: Optional[Callable[[float], float]] = None
    ):
        """
        Initialize transition configuration

        Args:
            duration_ms: Total duration in milliseconds
            steps: Number of intermediate frames
            ease_function: Optional easing function for the interpolation curve
        """
        self.duration_ms = duration_ms
        self.steps = max(1, steps)  # At least 1 step
        self.ease_function = ease_function or ease_linear

    @property
    def step_ms(self) -> float:
        return self.duration_ms / self.steps

    def __repr__(self):
        return f"TransitionConfig({self.duration_ms}ms, {self.steps} steps)"


@dataclass
class TransitionRun:
    """
    One hand-off between two surfaces

    Ephemeral: created by TransitionEngine per execute_transition() call.
    At most one run may be RUNNING at a time.
    """
    name: str
    outgoing: Optional[str]
    incoming: Optional[str]
    status: TransitionStatus = TransitionStatus.PENDING
    started_at: Optional[float] = None
    finished_at: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self.status is TransitionStatus.RUNNING

    @property
    def duration_ms(self) -> Optional[float]:
        if self.started_at is None or self.finished_at is None:
            return None
        return self.finished_at - self.started_at


# === Easing Functions ===
# Common easing functions for smooth transitions

def ease_linear(t: float) -> float:
    """
    Linear easing (constant speed)

    Args:
        t: Progress (0.0 = start, 1.0 = end)

    Returns:
        Factor (0.0 to 1.0)
    """
    return t


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out (very slow end)"""
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out (very smooth acceleration/deceleration)"""
    return 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2
