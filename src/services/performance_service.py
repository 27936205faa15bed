"""
Performance Service

The session object the input layer (keyboard, HTTP API) talks to. Wires the
LayerEngine, TransitionEngine, EffectScheduler and AutoAdvanceScheduler
together, owns the current background index and publishes notifications on
the EventBus.

Switches are serialized: a request while one is in flight raises
SwitchInProgressError and leaves the current index alone.
"""

import asyncio
import random
from typing import Any, Awaitable, Dict, List, Optional, Union

from engine.auto_advance import AutoAdvanceScheduler
from engine.clock import Clock
from engine.effect_scheduler import EffectScheduler
from engine.layer_engine import LayerEngine
from engine.transition_engine import TransitionEngine
from lifecycle.task_registry import TaskCategory, spawn
from models.config import PerformanceConfig, SurfaceConfig
from models.enums import TransitionMode
from models.errors import AddressingError, SwitchInProgressError
from models.events import (
    AutoAdvanceChangedEvent,
    EffectTriggeredEvent,
    IntervalChangedEvent,
    LayerAnimationChangedEvent,
    LayerParamsChangedEvent,
    LayerVisibilityChangedEvent,
    SurfaceSwitchedEvent,
)
from models.layer import LayerParams
from models.schedule import IntervalBounds
from models.transition import TransitionRun
from services.event_bus import EventBus
from surfaces.surface_interface import ISurfaceProvider
from utils.logger import get_logger, LogCategory
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.SYSTEM)

OVERLAY_SURFACE_ID = "effect-overlay"


class PerformanceService:
    """
    Orchestrator for one live performance session

    Example:
        service = PerformanceService(config, surfaces, clock, event_bus)
        await service.start()

        await service.switch_to(2)                 # transition per config
        await service.set_animation(0, "spiral")
        await service.trigger_effect("flash")
    """

    def __init__(
        self,
        config: PerformanceConfig,
        surfaces: ISurfaceProvider,
        clock: Clock,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.surfaces = surfaces
        self.clock = clock
        self.event_bus = event_bus or EventBus()
        self.rng = rng or random.Random(config.seed)

        self.surface_configs: List[SurfaceConfig] = list(config.surfaces)
        for surface_config in self.surface_configs:
            surfaces.add(surface_config.id)

        self.transition_mode: TransitionMode = config.transitions.mode
        self._current_index = self._first_active_index()
        self._switching = False

        self.layers = LayerEngine(
            surfaces,
            clock,
            rng=self._child_rng(),
            viewport=config.display,
            layer_count=max(LayerEngine.DEFAULT_LAYER_COUNT, len(config.texts)),
        )
        self.transitions = TransitionEngine(
            surfaces,
            clock,
            rng=self._child_rng(),
            default_transition=config.transitions.default_transition,
        )
        self.effects = EffectScheduler(
            surfaces.add(OVERLAY_SURFACE_ID),
            clock,
            rng=self._child_rng(),
        )
        self.auto_advance = AutoAdvanceScheduler(
            self.random_switch,
            clock,
            rng=self._child_rng(),
            bounds=config.transitions.interval,
        )

        self._show_only_current()

        log.info(
            "PerformanceService initialized",
            surfaces=len(self.surface_configs),
            layers=len(self.layers),
            mode=self.transition_mode.value,
        )

    def _child_rng(self) -> random.Random:
        return random.Random(self.rng.getrandbits(64))

    # ============================================================
    # Lifecycle
    # ============================================================

    async def start(self) -> None:
        """Apply configured texts and start auto mode if configured"""
        for index, text in enumerate(self.config.texts):
            if text.content:
                await self.add_or_update_layer(index, text.content, text.animation, text.params)

        if self.config.transitions.auto_mode:
            await self.start_auto_advance()

        log.info("Performance started", current=self.current_surface_id)

    async def shutdown(self) -> None:
        self.auto_advance.stop()
        self.transitions.cancel()
        self.effects.cancel_all()
        stopped = self.layers.stop_all()
        log.info("Performance stopped", layers_stopped=stopped)

    # ============================================================
    # Background surfaces
    # ============================================================

    @property
    def current_index(self) -> Optional[int]:
        return self._current_index

    @property
    def current_surface_id(self) -> Optional[str]:
        if self._current_index is None:
            return None
        return self.surface_configs[self._current_index].id

    def is_switching(self) -> bool:
        return self._switching

    def active_indices(self) -> List[int]:
        return [i for i, s in enumerate(self.surface_configs) if s.active]

    def _first_active_index(self) -> Optional[int]:
        for i, surface_config in enumerate(self.surface_configs):
            if surface_config.active:
                return i
        return None

    def _show_only_current(self) -> None:
        for i, surface_config in enumerate(self.surface_configs):
            surface = self.surfaces.get(surface_config.id)
            if i == self._current_index:
                surface.set_style(opacity=1.0)
                surface.show()
            else:
                surface.hide()

    def _validate_surface_index(self, index: int) -> SurfaceConfig:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self.surface_configs):
            raise AddressingError("surface index", index, list(range(len(self.surface_configs))))
        surface_config = self.surface_configs[index]
        if not surface_config.active:
            raise AddressingError("surface index (inactive)", index, self.active_indices())
        return surface_config

    def choose_transition(self) -> Optional[str]:
        """Random registered transition in random mode, else the default (None)"""
        if self.transition_mode is TransitionMode.RANDOM:
            return self.transitions.random_transition()
        return None

    def set_transition_mode(self, mode: Union[TransitionMode, str]) -> TransitionMode:
        self.transition_mode = TransitionMode(mode)
        log.info(f"Transition mode: {self.transition_mode.value}")
        return self.transition_mode

    def set_default_transition(self, name: str) -> bool:
        return self.transitions.set_default_transition(name)

    async def switch_to(self, index: int, transition: Optional[str] = None) -> Optional[TransitionRun]:
        """
        Switch the background to surface `index`.

        Returns the completed TransitionRun, or None when `index` is already
        current. The switch runs in its own task: cancelling the caller (auto
        mode turned off, a dropped HTTP request) leaves it to complete.

        Raises:
            AddressingError: index out of range or inactive
            SwitchInProgressError: another switch is in flight
            ConfigurationError: no transition resolves
        """
        target = self._validate_surface_index(index)
        if self._switching:
            raise SwitchInProgressError(
                "A background switch is already in progress",
                details={"requested": index, "current": self._current_index},
            )
        if index == self._current_index:
            log.debug(f"Surface {index} already current")
            return None

        name, _ = self.transitions.resolve(transition if transition is not None else self.choose_transition())

        self._switching = True
        handle = spawn(
            self._run_switch(name, index, target.id),
            category=TaskCategory.TRANSITION,
            description=f"Background switch → {target.id}",
        )
        return await asyncio.shield(handle.task)

    async def _run_switch(self, name: str, index: int, incoming_id: str) -> TransitionRun:
        from_index = self._current_index
        try:
            run = await self.transitions.execute_transition(name, self.current_surface_id, incoming_id)
            self._current_index = index
        finally:
            self._switching = False

        log.info(f"Switched {from_index} → {index}", transition=run.name)
        await self.event_bus.publish(SurfaceSwitchedEvent(from_index, index, run.name))
        return run

    async def execute_transition(self, name: Optional[str], to_index: int) -> Optional[TransitionRun]:
        """Switch to `to_index` with a named transition, bypassing the mode"""
        return await self.switch_to(to_index, transition=name)

    def register_transition(self, name: str, behavior) -> None:
        self.transitions.register_transition(name, behavior)

    async def random_switch(self) -> Optional[TransitionRun]:
        """Switch to a random active surface other than the current one"""
        candidates = [i for i in self.active_indices() if i != self._current_index]
        if not candidates:
            log.warn("No other surfaces available for random switch")
            return None
        return await self.switch_to(self.rng.choice(candidates))

    async def next_surface(self) -> Optional[TransitionRun]:
        """Switch to the next active surface, wrapping around"""
        count = len(self.surface_configs)
        if count == 0:
            log.warn("No surfaces configured")
            return None
        start = -1 if self._current_index is None else self._current_index
        for offset in range(1, count + 1):
            candidate = (start + offset) % count
            if self.surface_configs[candidate].active:
                return await self.switch_to(candidate)
        log.warn("No valid surface found for next switch")
        return None

    # ============================================================
    # Text layers
    # ============================================================

    @staticmethod
    def _coerce_params(params: Union[LayerParams, Dict[str, Any], None]) -> Optional[LayerParams]:
        if params is None or isinstance(params, LayerParams):
            return params
        return LayerParams.from_dict(params)

    async def add_or_update_layer(
        self,
        index: int,
        content: str,
        kind=None,
        params: Union[LayerParams, Dict[str, Any], None] = None,
    ) -> Dict[str, Any]:
        layer = self.layers.add_or_update_layer(index, content, kind, self._coerce_params(params))
        await self.event_bus.publish(LayerVisibilityChangedEvent(index, layer.visible))
        if layer.kind is not None and layer.visible:
            await self.event_bus.publish(
                LayerAnimationChangedEvent(index, layer.kind, layer.params.to_dict())
            )
        return layer.snapshot()

    async def toggle_layer(self, index: int) -> bool:
        visible = self.layers.toggle_layer(index)
        await self.event_bus.publish(LayerVisibilityChangedEvent(index, visible))
        return visible

    async def set_animation(
        self,
        index: int,
        kind,
        params: Union[LayerParams, Dict[str, Any], None] = None,
    ) -> bool:
        started = self.layers.set_animation(index, kind, self._coerce_params(params))
        if started:
            layer = self.layers.layer(index)
            await self.event_bus.publish(
                LayerAnimationChangedEvent(index, layer.kind, layer.params.to_dict())
            )
        return started

    async def set_layer_params(self, index: int, **changes: Any) -> LayerParams:
        params = self.layers.set_params(index, **changes)
        await self.event_bus.publish(LayerParamsChangedEvent(index, params.to_dict()))
        return params

    async def reset_animations(self) -> int:
        return self.layers.reset_animations()

    async def clear_layers(self) -> None:
        self.layers.clear_layers()
        for layer in self.layers.layers:
            await self.event_bus.publish(LayerVisibilityChangedEvent(layer.id, False))

    def layer_visibility(self) -> List[bool]:
        return self.layers.layer_visibility()

    async def adjust_text_speed(self, multiplier: float) -> List[float]:
        speeds = self.layers.scale_text_speed(multiplier)
        for layer in self.layers.layers:
            await self.event_bus.publish(LayerParamsChangedEvent(layer.id, layer.params.to_dict()))
        return speeds

    # ============================================================
    # Effects
    # ============================================================

    async def trigger_effect(self, kind, duration_ms: Optional[float] = None) -> Awaitable[None]:
        """
        Trigger an overlay pulse. Returns the pulse's completion awaitable
        without waiting on it.
        """
        done = self.effects.trigger(kind, duration_ms)
        pulse = self.effects.active_pulse
        await self.event_bus.publish(EffectTriggeredEvent(pulse.kind, pulse.duration_ms))
        return done

    # ============================================================
    # Auto-advance
    # ============================================================

    async def start_auto_advance(self) -> None:
        self.auto_advance.start()
        self.config.transitions.auto_mode = True
        await self.event_bus.publish(AutoAdvanceChangedEvent(True))

    async def stop_auto_advance(self) -> None:
        self.auto_advance.stop()
        self.config.transitions.auto_mode = False
        await self.event_bus.publish(AutoAdvanceChangedEvent(False))

    async def toggle_auto_advance(self) -> bool:
        if self.auto_advance.enabled:
            await self.stop_auto_advance()
        else:
            await self.start_auto_advance()
        return self.auto_advance.enabled

    async def adjust_interval_bounds(self, min_ms: float, max_ms: float) -> IntervalBounds:
        """Raises InvalidIntervalError and keeps the prior bounds on bad input"""
        bounds = self.auto_advance.set_bounds(min_ms, max_ms)
        self.config.transitions.interval = bounds
        await self.event_bus.publish(IntervalChangedEvent(bounds.min_ms, bounds.max_ms))
        return bounds

    async def scale_interval(self, multiplier: float) -> IntervalBounds:
        scaled = self.auto_advance.bounds.scaled(multiplier)
        return await self.adjust_interval_bounds(scaled.min_ms, scaled.max_ms)

    # ============================================================
    # Introspection
    # ============================================================

    def status(self) -> Dict[str, Any]:
        last = self.transitions.last_run
        return {
            "current_index": self._current_index,
            "current_surface": self.current_surface_id,
            "switching": self._switching,
            "surfaces": [
                {"index": i, "id": s.id, "title": s.title, "active": s.active}
                for i, s in enumerate(self.surface_configs)
            ],
            "transition_mode": self.transition_mode.value,
            "default_transition": self.transitions.default_transition,
            "last_transition": last.name if last else None,
            "auto_advance": self.auto_status(),
            "overlay": Serializer.to_jsonable(self.effects.state),
            "layers": self.layers.snapshot(),
        }

    def auto_status(self) -> Dict[str, Any]:
        state = self.auto_advance.state
        return {
            "enabled": state.enabled,
            "interval": Serializer.interval_to_dict(state.bounds),
            "switches": state.switches,
            "last_delay_ms": state.last_delay_ms,
        }
