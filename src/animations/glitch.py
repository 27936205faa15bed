"""
Glitch Motion

Gentle float interrupted by discrete perturbations. The perturbation draws
from the layer rng, so a seeded layer glitches reproducibly.
"""

from animations import motion
from animations.base import BaseMotion
from models.enums import AnimationKind
from models.frame import MotionFrame


class GlitchMotion(BaseMotion):
    """
    With probability 0.05·speed per tick:
    - ±15 px offset on both axes
    - ±7.5° skew, ±5° rotation
    - opacity 1 (70%) or 0.7
    - RGB split up to 3 px
    """

    KIND = AnimationKind.GLITCH
    CLOCK_STEP = 0.05

    PROBABILITY = 0.05

    def compute(self, clock: float) -> MotionFrame:
        x, y = motion.floating(clock, self.phase, 10)
        rng = self.rng

        if rng.random() < self.PROBABILITY * self.speed:
            return MotionFrame(
                x=x + (rng.random() - 0.5) * 30,
                y=y + (rng.random() - 0.5) * 30,
                skew_x=(rng.random() - 0.5) * 15,
                rotation=(rng.random() - 0.5) * 10,
                opacity=1.0 if rng.random() > 0.3 else 0.7,
                rgb_split=rng.random() * 3,
            )

        return MotionFrame(
            x=x,
            y=y,
            rotation=motion.rotation(clock, self.phase, 2),
            opacity=1.0,
        )
