"""
Effect Scheduler

One-shot, self-expiring overlay pulses (flash, glitch, colour shift,
blackout, whiteout). The overlay is written immediately on trigger; a
countdown task reverts it to neutral. A newer pulse supersedes the older
one, whose revert then does nothing.
"""

import asyncio
import random
from typing import Awaitable, Dict, Optional

from engine.clock import Clock
from lifecycle.task_registry import TaskCategory, TaskHandle, spawn
from models.effect import (
    COLOR_SHIFT_PALETTE,
    DEFAULT_DURATIONS_MS,
    FIXED_BACKGROUNDS,
    EffectPulse,
    OverlayState,
)
from models.enums import EffectKind
from models.errors import UnknownKindError
from surfaces.surface_interface import ISurface
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EFFECT)


class EffectScheduler:
    """
    Overlay pulse scheduler

    Example:
        effects = EffectScheduler(overlay_surface, clock)

        effects.trigger(EffectKind.FLASH)            # fire and forget
        await effects.trigger(EffectKind.BLACKOUT)   # wait for the 1 s blackout
    """

    def __init__(
        self,
        overlay: ISurface,
        clock: Clock,
        rng: Optional[random.Random] = None,
        durations_ms: Optional[Dict[EffectKind, float]] = None,
    ):
        self.overlay = overlay
        self.clock = clock
        self.rng = rng or random.Random()
        self.durations_ms: Dict[EffectKind, float] = dict(DEFAULT_DURATIONS_MS)
        if durations_ms:
            self.durations_ms.update(durations_ms)

        self._token = 0
        self._pulse: Optional[EffectPulse] = None
        self._state = OverlayState.neutral()
        self._handles: Dict[int, TaskHandle] = {}

        self._write(self._state)
        self.overlay.show()

    # ============================================================
    # State
    # ============================================================

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def active_pulse(self) -> Optional[EffectPulse]:
        return self._pulse

    def is_neutral(self) -> bool:
        return self._state.is_neutral

    # ============================================================
    # Triggering
    # ============================================================

    def trigger(self, kind, duration_ms: Optional[float] = None) -> Awaitable[None]:
        """
        Apply the effect now and schedule its revert.

        Returns an awaitable that completes when this pulse's countdown
        ends (meaningful for blackout / whiteout; flash and friends can be
        ignored).

        Raises:
            UnknownKindError: kind is not an EffectKind
        """
        try:
            kind = EffectKind.parse(kind)
        except ValueError:
            raise UnknownKindError("effect", kind, [k.value for k in EffectKind]) from None

        duration = self.durations_ms[kind] if duration_ms is None else max(0.0, float(duration_ms))

        if kind is EffectKind.COLOR_SHIFT:
            background = self.rng.choice(COLOR_SHIFT_PALETTE)
        else:
            background = FIXED_BACKGROUNDS.get(kind)

        self._token += 1
        pulse = EffectPulse(
            kind=kind,
            started_at=self.clock.now_ms(),
            duration_ms=duration,
            token=self._token,
            background=background,
        )

        if self._pulse is not None:
            log.debug(f"{kind.value} preempts {self._pulse.kind.value}")

        self._pulse = pulse
        self._apply(OverlayState.for_pulse(pulse))

        handle = spawn(
            self._countdown(pulse),
            category=TaskCategory.EFFECT,
            description=f"Effect {kind.value} revert ({duration:.0f}ms)",
        )
        self._handles[pulse.token] = handle

        done = asyncio.get_running_loop().create_future()

        def _finished(_task, token=pulse.token):
            self._handles.pop(token, None)
            if not done.done():
                done.set_result(None)

        handle.task.add_done_callback(_finished)

        log.info(f"Effect {kind.value}", duration_ms=duration, background=background)
        return done

    # Named helpers, matching the keyboard/API vocabulary

    def flash(self, duration_ms: Optional[float] = None) -> Awaitable[None]:
        return self.trigger(EffectKind.FLASH, duration_ms)

    def glitch(self, duration_ms: Optional[float] = None) -> Awaitable[None]:
        return self.trigger(EffectKind.GLITCH, duration_ms)

    def color_shift(self, duration_ms: Optional[float] = None) -> Awaitable[None]:
        return self.trigger(EffectKind.COLOR_SHIFT, duration_ms)

    def blackout(self, duration_ms: Optional[float] = None) -> Awaitable[None]:
        return self.trigger(EffectKind.BLACKOUT, duration_ms)

    def whiteout(self, duration_ms: Optional[float] = None) -> Awaitable[None]:
        return self.trigger(EffectKind.WHITEOUT, duration_ms)

    def cancel_all(self) -> None:
        """Cancel pending reverts and force the overlay neutral"""
        for handle in list(self._handles.values()):
            handle.cancel()
        self._handles.clear()
        self._pulse = None
        self._apply(OverlayState.neutral())

    # ============================================================
    # Internal
    # ============================================================

    async def _countdown(self, pulse: EffectPulse) -> None:
        await self.clock.sleep(pulse.duration_ms)
        self.revert(pulse.token)

    def revert(self, token: int) -> bool:
        """
        Return to neutral if `token` still owns the overlay.

        Idempotent; a superseded pulse's revert is a no-op.
        """
        if self._pulse is None or self._pulse.token != token:
            return False
        log.debug(f"Effect {self._pulse.kind.value} expired")
        self._pulse = None
        self._apply(OverlayState.neutral())
        return True

    def _apply(self, state: OverlayState) -> None:
        self._state = state
        self._write(state)

    def _write(self, state: OverlayState) -> None:
        self.overlay.set_style(className=state.css_class)
        if state.background is None:
            self.overlay.clear_style("backgroundColor")
        else:
            self.overlay.set_style(backgroundColor=state.background)
