"""
Pulsing motions

Floating recipes whose signature is an opacity, glow or colour pulse.
"""

import math

from animations import motion
from animations.base import BaseMotion
from models.enums import AnimationKind
from models.frame import MotionFrame

RAINBOW_HUE_PER_CLOCK = 4 / 0.06
NEON_HUE_PER_CLOCK = 2 / 0.05


class BlinkMotion(BaseMotion):
    KIND = AnimationKind.BLINK
    CLOCK_STEP = 0.06

    def compute(self, clock: float) -> MotionFrame:
        x, y = motion.displacement(clock, self.phase, 70)
        return MotionFrame(
            x=x,
            y=y,
            rotation=motion.rotation(clock, self.phase, 25, rate=0.5),
            scale=motion.scale(clock, self.phase, 0.4, rate=1.5),
            opacity=motion.opacity(clock),
        )


class NeonMotion(BaseMotion):
    """Glow blur pulses 20..60 px; the glow hue drifts while the text keeps the layer colour"""

    KIND = AnimationKind.NEON
    CLOCK_STEP = 0.05

    def compute(self, clock: float) -> MotionFrame:
        x, y = motion.displacement(clock, self.phase, 90)
        intensity = motion.clamp01((math.sin(clock * 1.5 + self.phase.scale) + 1) / 2)
        hue = (clock * NEON_HUE_PER_CLOCK) % 360
        return MotionFrame(
            x=x,
            y=y,
            rotation=motion.rotation(clock, self.phase, 30, rate=0.7),
            scale=motion.scale(clock, self.phase, 0.35),
            opacity=0.8 + intensity * 0.2,
            hue=hue,
            glow_radius=intensity * 40 + 20,
            glow_color=motion.hsl(hue),
        )


class ZoomMotion(BaseMotion):
    KIND = AnimationKind.ZOOM
    CLOCK_STEP = 0.08

    def compute(self, clock: float) -> MotionFrame:
        x, y = motion.displacement(clock, self.phase, 100)
        return MotionFrame(
            x=x,
            y=y,
            rotation=motion.rotation(clock, self.phase, 40, rate=0.8),
            scale=motion.scale(clock, self.phase, 0.9, rate=1),
            opacity=motion.clamp01(0.6 + math.sin(clock * 1.2) * 0.4),
        )


class RainbowMotion(BaseMotion):
    """Hue cycles 4°/tick·speed"""

    KIND = AnimationKind.RAINBOW
    CLOCK_STEP = 0.06

    def compute(self, clock: float) -> MotionFrame:
        x, y = motion.displacement(clock, self.phase, 110)
        hue = (clock * RAINBOW_HUE_PER_CLOCK) % 360
        color = motion.hsl(hue)
        return MotionFrame(
            x=x,
            y=y,
            rotation=motion.rotation(clock, self.phase, 50, rate=1.2),
            scale=motion.scale(clock, self.phase, 0.7),
            hue=hue,
            color=color,
            glow_radius=20.0,
            glow_color=color,
        )
