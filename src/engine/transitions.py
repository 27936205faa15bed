"""
Transition behaviors

A transition behavior is an async callable

    behavior(outgoing, incoming, ctx) -> None

that hands the background over from `outgoing` to `incoming` (either may be
None) and returns once the hand-off is visually complete. All waiting goes
through ctx.clock, all randomness through ctx.rng.

Built-ins: fade, glitch, slide. Custom behaviors are registered by name.
"""

import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from engine.clock import Clock
from models.transition import TransitionConfig, ease_in_out_cubic, ease_out_cubic
from surfaces.surface_interface import ISurface
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TRANSITION)


@dataclass
class TransitionContext:
    clock: Clock
    rng: random.Random


TransitionBehavior = Callable[[Optional[ISurface], Optional[ISurface], TransitionContext], Awaitable[None]]


# === Presets ===

FADE = TransitionConfig(duration_ms=500, steps=20, ease_function=ease_in_out_cubic)
GLITCH = TransitionConfig(duration_ms=400, steps=8)
SLIDE = TransitionConfig(duration_ms=600, steps=20, ease_function=ease_out_cubic)

GLITCH_JITTER_PX = 10


# ============================================================
# Built-in behaviors
# ============================================================

async def fade(outgoing: Optional[ISurface], incoming: Optional[ISurface], ctx: TransitionContext) -> None:
    """Stepped cross-opacity; outgoing ends hidden at opacity 0"""
    config = FADE
    css = f"opacity {config.duration_ms}ms ease"

    if outgoing:
        outgoing.set_style(opacity=1.0, transition=css)
    if incoming:
        incoming.set_style(opacity=0.0, transition=css)
        incoming.show()

    for step in range(1, config.steps + 1):
        await ctx.clock.sleep(config.step_ms)
        factor = config.ease_function(step / config.steps)
        if outgoing:
            outgoing.set_style(opacity=round(1.0 - factor, 4))
        if incoming:
            incoming.set_style(opacity=round(factor, 4))

    if outgoing:
        outgoing.set_style(opacity=0.0)
        outgoing.hide()
        outgoing.clear_style("transition")
    if incoming:
        incoming.set_style(opacity=1.0)
        incoming.clear_style("transition")


async def glitch(outgoing: Optional[ISurface], incoming: Optional[ISurface], ctx: TransitionContext) -> None:
    """Eight 50 ms flickers with positional jitter on the outgoing surface"""
    config = GLITCH
    rng = ctx.rng

    if incoming:
        incoming.show()

    for _ in range(config.steps):
        await ctx.clock.sleep(config.step_ms)
        if outgoing:
            outgoing.set_style(opacity=1.0 if rng.random() > 0.5 else 0.0)
        if incoming:
            incoming.set_style(opacity=1.0 if rng.random() > 0.5 else 0.0)
        if outgoing:
            dx = rng.random() * 2 * GLITCH_JITTER_PX - GLITCH_JITTER_PX
            dy = rng.random() * 2 * GLITCH_JITTER_PX - GLITCH_JITTER_PX
            outgoing.set_style(transform=f"translate({dx:.2f}px, {dy:.2f}px)")

    if outgoing:
        outgoing.hide()
        outgoing.set_style(opacity=1.0)
        outgoing.clear_style("transform")
    if incoming:
        incoming.set_style(opacity=1.0)
        incoming.clear_style("transform")


async def slide(outgoing: Optional[ISurface], incoming: Optional[ISurface], ctx: TransitionContext) -> None:
    """
    Horizontal push, direction chosen 50/50.

    incoming: dir·100% → 0
    outgoing: 0 → -dir·100%
    """
    config = SLIDE
    direction = 1 if ctx.rng.random() > 0.5 else -1
    css = f"transform {config.duration_ms}ms ease-out"

    def place(surface: ISurface, percent: float) -> None:
        surface.set_style(transform=f"translateX({percent:.2f}%)", offset_x=percent)

    if incoming:
        incoming.show()
        incoming.set_style(transition=css)
        place(incoming, direction * 100.0)
    if outgoing:
        outgoing.set_style(transition=css)
        place(outgoing, 0.0)

    for step in range(1, config.steps + 1):
        await ctx.clock.sleep(config.step_ms)
        factor = config.ease_function(step / config.steps)
        if incoming:
            place(incoming, direction * 100.0 * (1.0 - factor))
        if outgoing:
            place(outgoing, -direction * 100.0 * factor)

    if outgoing:
        outgoing.hide()
        outgoing.clear_style("transform", "offset_x", "transition")
    if incoming:
        incoming.clear_style("transform", "offset_x", "transition")


# ============================================================
# Registry
# ============================================================

class TransitionRegistry:
    """Name → behavior. Lookup by name only."""

    BUILTINS: Dict[str, TransitionBehavior] = {
        "fade": fade,
        "glitch": glitch,
        "slide": slide,
    }

    def __init__(self, include_builtins: bool = True):
        self._behaviors: Dict[str, TransitionBehavior] = dict(self.BUILTINS) if include_builtins else {}

    def register(self, name: str, behavior: TransitionBehavior) -> None:
        """Register (or replace) a behavior"""
        if not name:
            raise ValueError("Transition name must not be empty")
        replaced = name in self._behaviors
        self._behaviors[name] = behavior
        log.info(f"Transition '{name}' {'replaced' if replaced else 'registered'}")

    def unregister(self, name: str) -> bool:
        return self._behaviors.pop(name, None) is not None

    def get(self, name: Optional[str]) -> Optional[TransitionBehavior]:
        if name is None:
            return None
        return self._behaviors.get(name)

    def names(self) -> List[str]:
        return list(self._behaviors.keys())

    def random_name(self, rng: random.Random) -> str:
        names = self.names()
        if not names:
            raise LookupError("No transitions registered")
        return rng.choice(names)

    def __contains__(self, name: object) -> bool:
        return name in self._behaviors

    def __len__(self) -> int:
        return len(self._behaviors)
