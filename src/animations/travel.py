"""
Travelling motions

Recipes that move the text across the viewport: horizontal and vertical
scrolls, steering toward random targets, and the spiral around the centre.
"""

import math

from animations import motion
from animations.base import BaseMotion
from models.enums import AnimationKind
from models.frame import FrameAnchor, MotionFrame

# px travelled per unit of layer clock (3 px/tick at clock step 0.03)
SCROLL_PX_PER_CLOCK = 3 / 0.03
VERTICAL_PX_PER_CLOCK = 2.5 / 0.03


class ScrollMotion(BaseMotion):
    """Right-to-left scroll, wrapping at the viewport, with a dynamic float on y"""

    KIND = AnimationKind.SCROLL
    CLOCK_STEP = 0.03

    def compute(self, clock: float) -> MotionFrame:
        span = self.viewport.width + motion.text_extent(self.state.content, self.state.params.font_size)
        x = self.viewport.width - motion.wrap(clock * SCROLL_PX_PER_CLOCK, span)
        _, y = motion.displacement(clock, self.phase, 60)
        return MotionFrame(
            x=x,
            y=y,
            rotation=motion.rotation(clock, self.phase, 15),
            scale=motion.scale(clock, self.phase, 0.3),
        )


class VerticalMotion(BaseMotion):
    """Bottom-to-top scroll with a dynamic float on x"""

    KIND = AnimationKind.VERTICAL
    CLOCK_STEP = 0.03

    def compute(self, clock: float) -> MotionFrame:
        span = self.viewport.height + motion.font_px(self.state.params.font_size)
        y = self.viewport.height - motion.wrap(clock * VERTICAL_PX_PER_CLOCK, span)
        x, _ = motion.displacement(clock, self.phase, 80)
        return MotionFrame(
            x=x,
            y=y,
            rotation=motion.rotation(clock, self.phase, 20, rate=0.5),
            scale=motion.scale(clock, self.phase, 0.4),
        )


class RandomMoveMotion(BaseMotion):
    """
    Steer toward random targets.

    Each tick the position blends 5%·speed of the remaining distance toward
    the target; once within RETARGET_DISTANCE a new target is sampled from
    the layer rng. Position is absolute (viewport coordinates).
    """

    KIND = AnimationKind.RANDOM_MOVE
    CLOCK_STEP = 0.04

    RETARGET_DISTANCE = 50.0
    BLEND = 0.05
    MARGIN = 50.0

    def on_start(self) -> None:
        w, h = self.viewport.width, self.viewport.height
        self.target_x = self.rng.random() * (w * 0.9)
        self.target_y = self.rng.random() * (h * 0.9)
        self.current_x = w / 2
        self.current_y = h / 2

    def _retarget(self) -> None:
        w, h = self.viewport.width, self.viewport.height
        self.target_x = self.MARGIN + self.rng.random() * (w - 2 * self.MARGIN)
        self.target_y = self.MARGIN + self.rng.random() * (h - 2 * self.MARGIN)

    def steer(self) -> None:
        """One steering update (blend toward the target as it was at tick start)"""
        dx = self.target_x - self.current_x
        dy = self.target_y - self.current_y

        if math.hypot(dx, dy) < self.RETARGET_DISTANCE:
            self._retarget()

        blend = min(1.0, self.BLEND * self.speed)
        self.current_x += dx * blend
        self.current_y += dy * blend

    def step(self) -> MotionFrame:
        if not self._started:
            self._started = True
            self.on_start()
        self.steer()
        return super().step()

    def compute(self, clock: float) -> MotionFrame:
        fx, fy = motion.displacement(clock, self.phase, 40)
        return MotionFrame(
            x=self.current_x + fx,
            y=self.current_y + fy,
            rotation=motion.rotation(clock, self.phase, 45, rate=1.5),
            scale=motion.scale(clock, self.phase, 0.5),
            anchor=FrameAnchor.ABSOLUTE,
        )


class SpiralMotion(BaseMotion):
    """Orbit the viewport centre on a breathing radius"""

    KIND = AnimationKind.SPIRAL
    CLOCK_STEP = 0.05

    def compute(self, clock: float) -> MotionFrame:
        phase = self.phase
        angle = clock * 2

        radius = (math.sin(angle * 0.3 + phase.x) + 1) * 250
        radius += math.sin(clock * 2 + phase.y) * 80 + math.cos(clock * 3) * 40

        x = self.viewport.width / 2 + math.cos(angle + phase.x) * radius
        y = self.viewport.height / 2 + math.sin(angle + phase.y) * radius

        return MotionFrame(
            x=x,
            y=y,
            rotation=math.degrees(angle) + math.sin(clock * 1.5 + phase.rotation) * 90,
            scale=motion.scale(clock, phase, 0.7, rate=3),
            anchor=FrameAnchor.ABSOLUTE,
        )
