"""
Wave motions

Stacked sinusoid paths. Chaos adds a fourth term per axis, a colour cycle
and random jolts from the layer rng.
"""

import math

from animations import motion
from animations.base import BaseMotion
from models.enums import AnimationKind
from models.frame import MotionFrame

CHAOS_HUE_PER_CLOCK = 6 / 0.08


class WaveMotion(BaseMotion):
    KIND = AnimationKind.WAVE
    CLOCK_STEP = 0.07

    def compute(self, clock: float) -> MotionFrame:
        phase = self.phase
        y = (math.sin(clock + phase.y) * 80
             + math.sin(clock * 1.5 + phase.x) * 40
             + math.cos(clock * 2.5) * 20)
        x = math.cos(clock * 0.8 + phase.x) * 60 + math.sin(clock * 1.2) * 30
        return MotionFrame(
            x=x,
            y=y,
            rotation=motion.rotation(clock, phase, 35, rate=0.7),
            scale=motion.scale(clock, phase, 0.6),
        )


class ChaosMotion(BaseMotion):
    KIND = AnimationKind.CHAOS
    CLOCK_STEP = 0.08

    JOLT_PROBABILITY = 0.08
    JOLT_RANGE = 25.0

    def compute(self, clock: float) -> MotionFrame:
        t = clock
        phase = self.phase

        x = (math.sin(t + phase.x) * 200
             + math.sin(t * 2.3 + phase.y) * 80
             + math.cos(t * 0.7) * 50
             + math.sin(t * 4.1) * 30)
        y = (math.cos(t * 0.7 + phase.y) * 180
             + math.sin(t * 1.7 + phase.x) * 70
             + math.cos(t * 3) * 40
             + math.sin(t * 5.2) * 25)

        jolt = 0.0
        if self.rng.random() < self.JOLT_PROBABILITY:
            jolt = (self.rng.random() - 0.5) * self.JOLT_RANGE

        hue = (t * CHAOS_HUE_PER_CLOCK) % 360
        lightness = 50 + math.sin(t * 5) * 20

        return MotionFrame(
            x=x + jolt,
            y=y + jolt,
            rotation=math.sin(t * 0.8 + phase.rotation) * 360 + math.cos(t * 1.5) * 180,
            scale=1 + math.sin(t * 2 + phase.scale) * 0.8 + math.cos(t * 3.5) * 0.4,
            hue=hue,
            color=motion.hsl(hue, 100, lightness),
            glow_radius=max(0.0, 20 + math.sin(t * 3) * 30),
            glow_color=motion.hsl(hue),
            rgb_split=abs(math.sin(t * 4)) * 10,
        )
