from __future__ import annotations
from .animation_param import AnimationParam


class FloatRangeParam(AnimationParam):
    """Bounded float parameter; out-of-range values are clamped, not rejected"""

    def __init__(self, *, key: str, label: str, min_value: float, max_value: float, default: float):
        self.key = key
        self.label = label
        self.min = min_value
        self.max = max_value
        self.default = default

    def clamp(self, value: float) -> float:
        return max(self.min, min(self.max, float(value)))

    def __repr__(self):
        return f"{type(self).__name__}({self.key}: {self.min}..{self.max}, default {self.default})"
