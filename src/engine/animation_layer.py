"""
Animation Layer

One text slot on the performance surface. Owns its LayerState, its recipe
instance and the frame loop task. Nothing else writes to its text surface.
"""

import asyncio
import random
from typing import Any, Dict, Optional

from animations import BaseMotion, create_motion, resolve_kind
from engine.clock import Clock
from lifecycle.task_registry import TaskCategory, TaskHandle, spawn
from models.config import DisplayConfig
from models.enums import AnimationKind
from models.errors import UnknownKindError
from models.frame import MotionFrame
from models.layer import LayerParams, LayerState, Phase
from surfaces.surface_interface import ISurface
from utils.logger import get_logger, LogCategory
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.LAYER)


class AnimationLayer:
    """
    Animated text layer

    • start() resets transient style, then runs the recipe in its own task
    • stop() cancels the loop; the last rendered frame stays on the surface
    • hiding stops the loop but keeps kind / params / phase
    """

    # Style properties a recipe may leave behind
    TRANSIENT_STYLES = ("transform", "opacity", "glow", "left", "top", "filter", "perspective")

    # Consecutive failing ticks before the loop gives up
    MAX_STEP_FAILURES = 30

    def __init__(
        self,
        layer_id: int,
        surface: ISurface,
        clock: Clock,
        rng: random.Random,
        viewport: Optional[DisplayConfig] = None,
    ):
        self.surface = surface
        self.clock = clock
        self.rng = rng
        self.viewport = viewport or DisplayConfig()

        # Phase is drawn once here and never again
        self.state = LayerState(id=layer_id, phase=Phase.sample(rng))

        self._motion: Optional[BaseMotion] = None
        self._handle: Optional[TaskHandle] = None

    # ============================================================
    # Properties
    # ============================================================

    @property
    def id(self) -> int:
        return self.state.id

    @property
    def kind(self) -> Optional[AnimationKind]:
        return self.state.kind

    @property
    def params(self) -> LayerParams:
        return self.state.params

    @property
    def visible(self) -> bool:
        return self.state.visible

    @property
    def handle(self) -> Optional[TaskHandle]:
        return self._handle

    def is_running(self) -> bool:
        return self._handle is not None and not self._handle.done

    # ============================================================
    # Core control methods
    # ============================================================

    def start(self, kind, params: Optional[LayerParams] = None) -> bool:
        """
        (Re)start the layer with an animation kind.

        Unknown kinds are logged and ignored; the layer is left stopped.

        Returns:
            True if the frame loop was started
        """
        self.stop()

        try:
            resolved = resolve_kind(kind)
        except UnknownKindError as e:
            log.warn(f"Layer {self.id}: {e.message}", available=e.details["available"])
            return False

        self._reset_transient_style()
        if params is not None:
            self.set_params(params)

        self.state.kind = resolved
        self.state.clock = 0.0
        self.state.ticks = 0

        self._motion = create_motion(resolved, self.state, self.rng, self.viewport)
        self.state.running = True
        self._handle = spawn(
            self._run_loop(self._motion),
            category=TaskCategory.ANIMATION,
            description=f"Layer {self.id} {resolved.value}",
        )

        log.info(f"Started {resolved.value} on layer {self.id}", speed=self.state.params.speed)
        return True

    def stop(self) -> bool:
        """
        Halt updates. Idempotent; returns False if nothing was running.
        """
        self.state.running = False
        handle, self._handle = self._handle, None
        if handle is None:
            return False
        cancelled = handle.cancel()
        if cancelled:
            log.debug(f"Stopped layer {self.id}")
        return cancelled

    def set_visible(self, visible: bool) -> None:
        """
        Show or hide the layer.

        Showing again resumes the same kind and params; phase is kept.
        """
        if visible:
            self.state.visible = True
            self.surface.show()
            if self.state.kind is not None and not self.is_running():
                self.start(self.state.kind)
        else:
            self.state.visible = False
            self.surface.hide()
            self.stop()

    def toggle(self) -> bool:
        """Flip visibility; returns the new visibility"""
        self.set_visible(not self.state.visible)
        return self.state.visible

    def set_content(self, content: str) -> None:
        self.state.content = content
        self.surface.set_text(content)

    def set_params(self, params: Optional[LayerParams] = None, **changes: Any) -> LayerParams:
        """
        Apply params live. Speed is read by the recipe every tick; colour,
        font size and position go to the surface immediately.
        """
        new_params = params if params is not None else self.state.params.updated(**changes)
        self.state.params = new_params
        self._apply_static_style()
        return new_params

    def clear(self) -> None:
        """Stop, hide and blank the layer"""
        self.stop()
        self.state.visible = False
        self.state.kind = None
        self._motion = None
        self.surface.hide()
        self.set_content("")
        self._reset_transient_style()
        self.surface.set_style(opacity=1)

    def snapshot(self) -> Dict[str, Any]:
        return Serializer.layer_to_dict(self.state)

    # ============================================================
    # Internal
    # ============================================================

    def _apply_static_style(self) -> None:
        params = self.state.params
        self.surface.set_style(
            color=params.color,
            fontSize=params.font_size,
            position=params.position.value,
        )

    def _reset_transient_style(self) -> None:
        self.surface.clear_style(*self.TRANSIENT_STYLES)
        self._apply_static_style()

    def _commit(self, frame: MotionFrame) -> None:
        if not frame.is_finite():
            log.warn(f"Layer {self.id}: dropped non-finite frame", tick=self.state.ticks)
            return
        self.surface.set_style(**frame.to_style())

    async def _run_loop(self, motion: BaseMotion) -> None:
        """Tick the recipe once per display frame until cancelled."""
        frames = 0
        failures = 0
        try:
            while True:
                try:
                    self._commit(motion.step())
                    frames += 1
                    failures = 0
                except Exception as e:
                    failures += 1
                    if failures == 1:
                        log.error(f"Layer {self.id} step error: {e}", kind=motion.KIND.value)
                    if failures >= self.MAX_STEP_FAILURES:
                        log.error(
                            f"Layer {self.id} stopped after {failures} failed frames",
                            kind=motion.KIND.value,
                        )
                        self.state.running = False
                        return
                await self.clock.next_frame()
        except asyncio.CancelledError:
            log.debug(f"Layer {self.id} loop cancelled after {frames} frames")
            raise
