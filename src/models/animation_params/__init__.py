"""Layer parameter definitions"""

from .animation_param import AnimationParam
from .float_range_param import FloatRangeParam
from .speed_param import SpeedParam, SPEED

__all__ = [
    "AnimationParam",
    "FloatRangeParam",
    "SpeedParam",
    "SPEED",
]
