"""
Base Motion Recipe

All text animations inherit from BaseMotion and implement compute().
"""

import random
from typing import Optional

from models.config import DisplayConfig
from models.enums import AnimationKind
from models.frame import MotionFrame
from models.layer import LayerState, Phase


class BaseMotion:
    """
    Base class for text layer motion recipes

    A recipe turns the layer clock into one MotionFrame per tick.

    IMPORTANT:
    - One recipe instance = ONE LAYER. The instance is created by
      AnimationLayer on start() and dropped on the next start().
    - compute() reads only (clock, phase, speed) plus, for the random kinds,
      the layer's seeded rng. Anything else a recipe integrates (RandomMove
      steering) lives on the instance.

    Subclasses MUST set KIND and CLOCK_STEP and implement compute().
    """

    KIND: AnimationKind
    CLOCK_STEP: float = 0.05

    def __init__(
        self,
        state: LayerState,
        rng: random.Random,
        viewport: Optional[DisplayConfig] = None
    ):
        self.state = state
        self.rng = rng
        self.viewport = viewport or DisplayConfig()
        self._started = False

    # ------------------------------------------------------------
    # Layer context helpers
    # ------------------------------------------------------------

    @property
    def speed(self) -> float:
        return self.state.params.speed

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def color(self) -> str:
        return self.state.params.color

    # ------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------

    def on_start(self) -> None:
        """Called once before the first tick."""

    def compute(self, clock: float) -> MotionFrame:
        raise NotImplementedError

    def step(self) -> MotionFrame:
        """Advance the layer clock by one tick and compute its frame"""
        if not self._started:
            self._started = True
            self.on_start()
        self.state.clock += self.CLOCK_STEP * self.speed
        self.state.ticks += 1
        return self.compute(self.state.clock)
