from __future__ import annotations

from .float_range_param import FloatRangeParam


class SpeedParam(FloatRangeParam):
    """Per-layer speed multiplier, scales both clock increment and velocity"""

    def __init__(self):
        super().__init__(
            key="speed",
            label="Speed",
            min_value=0.1,
            max_value=10.0,
            default=1.0,
        )


SPEED = SpeedParam()
