"""
Motion primitives

Pure functions of (time, phase, amplitude). Recipes in this package are
compositions of these. Time is the layer clock, not wall time: it already
carries the layer speed.

Multi-wave displacement sums sinusoids at incommensurate frequencies so the
path never visibly repeats:

    x = sin(t + φx)·A + sin(2.3t + φy)·0.4A + cos(0.5t)·0.3A
    y = cos(0.7t + φy)·A + cos(1.8t + φx)·0.4A + sin(0.3t)·0.3A
"""

import math
from typing import Tuple

from models.layer import Phase


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def floating(time: float, phase: Phase, amplitude: float = 15.0) -> Tuple[float, float]:
    """Gentle single-wave drift"""
    x = math.sin(time + phase.x) * amplitude
    y = math.cos(time * 0.7 + phase.y) * amplitude
    return x, y


def displacement(time: float, phase: Phase, amplitude: float = 80.0) -> Tuple[float, float]:
    """Three-wave dynamic float (base f, harmonics 2.3f/0.5f and 0.7f/1.8f/0.3f)"""
    x = (math.sin(time + phase.x) * amplitude
         + math.sin(time * 2.3 + phase.y) * (amplitude * 0.4)
         + math.cos(time * 0.5) * (amplitude * 0.3))
    y = (math.cos(time * 0.7 + phase.y) * amplitude
         + math.cos(time * 1.8 + phase.x) * (amplitude * 0.4)
         + math.sin(time * 0.3) * (amplitude * 0.3))
    return x, y


def rotation(time: float, phase: Phase, amplitude: float = 15.0, rate: float = 1.0) -> float:
    """Swaying rotation in degrees, ±amplitude"""
    return math.sin(time * rate + phase.rotation) * amplitude


def scale(time: float, phase: Phase, depth: float = 0.3, rate: float = 2.0) -> float:
    """Breathing scale factor, 1 ± depth"""
    return 1 + math.sin(time * rate + phase.scale) * depth


def opacity(time: float, phase: Phase = None, rate: float = 3.0) -> float:
    """Smooth blink in [0, 1]"""
    offset = phase.scale if phase is not None else 0.0
    return clamp01((math.sin(time * rate + offset) + 1) / 2)


def wrap(value: float, span: float) -> float:
    """Wrap into [0, span)"""
    if span <= 0:
        return 0.0
    return value % span


def hsl(hue: float, saturation: float = 100, lightness: float = 60) -> str:
    return f"hsl({hue % 360:.1f}, {saturation:.0f}%, {lightness:.1f}%)"


def font_px(font_size: str, default: float = 48.0) -> float:
    """Parse "48px" → 48.0"""
    try:
        return float(str(font_size).strip().lower().rstrip("px") or default)
    except ValueError:
        return default


def text_extent(content: str, font_size: str) -> float:
    """Rough rendered width of a single-line text (average glyph ≈ 0.6em)"""
    return max(1, len(content)) * font_px(font_size) * 0.6
