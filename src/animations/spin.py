"""
Spinning motions
"""

import math

from animations import motion
from animations.base import BaseMotion
from models.enums import AnimationKind
from models.frame import MotionFrame

# 2°/tick at clock step 0.04
ROTATE_DEG_PER_CLOCK = 2 / 0.04


class RotateMotion(BaseMotion):
    """Continuous spin while floating"""

    KIND = AnimationKind.ROTATE
    CLOCK_STEP = 0.04

    def compute(self, clock: float) -> MotionFrame:
        x, y = motion.displacement(clock, self.phase, 100)
        return MotionFrame(
            x=x,
            y=y,
            rotation=clock * ROTATE_DEG_PER_CLOCK,
            scale=motion.scale(clock, self.phase, 0.5),
        )


class Rotate3DMotion(BaseMotion):
    """rotateX / rotateY / rotateZ composition under a 1000px perspective"""

    KIND = AnimationKind.ROTATE_3D
    CLOCK_STEP = 0.06

    PERSPECTIVE = 1000.0

    def compute(self, clock: float) -> MotionFrame:
        phase = self.phase
        x, y = motion.displacement(clock, phase, 120)
        return MotionFrame(
            x=x,
            y=y,
            rotate_x=math.sin(clock + phase.x) * 180 + math.cos(clock * 2) * 60,
            rotate_y=math.cos(clock * 0.7 + phase.y) * 180 + math.sin(clock * 1.5) * 60,
            rotation=clock * 50 + math.sin(clock * 2) * 90,
            scale=motion.scale(clock, phase, 0.6, rate=3),
            perspective=self.PERSPECTIVE,
        )
