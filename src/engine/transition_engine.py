"""
Transition Engine

Runs exactly one background hand-off at a time between two named surfaces.

Adds over the bare registry:
- default transition with a single bounded fallback
- surface validation before anything is mutated
- rejection of a second request while one is running
- is_active() / wait_for_idle() for synchronization
"""

import asyncio
import random
from typing import List, Optional, Tuple

from engine.clock import Clock
from engine.transitions import TransitionBehavior, TransitionContext, TransitionRegistry
from lifecycle.task_registry import TaskCategory, TaskHandle, spawn
from models.enums import TransitionStatus
from models.errors import AddressingError, ConfigurationError, SwitchInProgressError
from models.transition import TransitionRun
from surfaces.surface_interface import ISurface, ISurfaceProvider
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TRANSITION)


class TransitionEngine:
    """
    Background transition state machine

    Example:
        engine = TransitionEngine(surfaces, clock)

        # Cross-fade player-0 → player-2
        await engine.execute_transition("fade", "player-0", "player-2")

        # Unknown name falls back to the default once
        await engine.execute_transition("nonexistent", "player-2", "player-1")
    """

    def __init__(
        self,
        surfaces: ISurfaceProvider,
        clock: Clock,
        rng: Optional[random.Random] = None,
        registry: Optional[TransitionRegistry] = None,
        default_transition: str = "fade",
    ):
        self.surfaces = surfaces
        self.clock = clock
        self.rng = rng or random.Random()
        self.registry = registry or TransitionRegistry()
        self.default_transition = default_transition

        self._current: Optional[TransitionRun] = None
        self._last: Optional[TransitionRun] = None
        self._handle: Optional[TaskHandle] = None

        if default_transition not in self.registry:
            log.warn(f"Default transition '{default_transition}' is not registered")

        log.info(
            "TransitionEngine initialized",
            default=default_transition,
            available=self.registry.names(),
        )

    # ============================================================
    # State
    # ============================================================

    def is_active(self) -> bool:
        """Return True if a transition is currently running"""
        return self._current is not None and self._current.is_running

    @property
    def current_run(self) -> Optional[TransitionRun]:
        return self._current if self.is_active() else None

    @property
    def last_run(self) -> Optional[TransitionRun]:
        return self._last

    async def wait_for_idle(self) -> None:
        """Wait until the running transition (if any) completes"""
        handle = self._handle
        if handle is not None:
            await handle.wait()

    # ============================================================
    # Registry passthrough
    # ============================================================

    def register_transition(self, name: str, behavior: TransitionBehavior) -> None:
        self.registry.register(name, behavior)

    def available_transitions(self) -> List[str]:
        return self.registry.names()

    def random_transition(self) -> str:
        return self.registry.random_name(self.rng)

    def set_default_transition(self, name: str) -> bool:
        """Unknown names are logged and the previous default is kept"""
        if name not in self.registry:
            log.warn(f"Transition '{name}' not found, keeping '{self.default_transition}'")
            return False
        self.default_transition = name
        log.info(f"Default transition set to: {name}")
        return True

    # ============================================================
    # Execution
    # ============================================================

    def resolve(self, name: Optional[str]) -> Tuple[str, TransitionBehavior]:
        """
        Resolve a name to (name, behavior).

        None means the default. A missing name falls back to the default
        exactly once; a missing default raises ConfigurationError.
        """
        requested = name or self.default_transition
        behavior = self.registry.get(requested)
        if behavior is not None:
            return requested, behavior

        log.warn(f"Transition '{requested}' not found, using default '{self.default_transition}'")
        behavior = self.registry.get(self.default_transition)
        if behavior is None:
            raise ConfigurationError(
                f"Default transition '{self.default_transition}' is not registered",
                details={"requested": requested, "available": self.registry.names()},
            )
        return self.default_transition, behavior

    def _surface(self, surface_id: Optional[str]) -> Optional[ISurface]:
        if surface_id is None:
            return None
        if not self.surfaces.has(surface_id):
            raise AddressingError("surface", surface_id, self.surfaces.ids())
        return self.surfaces.get(surface_id)

    async def execute_transition(
        self,
        name: Optional[str],
        outgoing_id: Optional[str],
        incoming_id: Optional[str],
    ) -> TransitionRun:
        """
        Run one hand-off and return its completed TransitionRun.

        Raises:
            ConfigurationError: neither name nor default resolves
            AddressingError: unknown surface id (nothing mutated)
            SwitchInProgressError: a transition is already running
        """
        resolved_name, behavior = self.resolve(name)
        outgoing = self._surface(outgoing_id)
        incoming = self._surface(incoming_id)

        if self.is_active():
            raise SwitchInProgressError(
                "A transition is already running",
                details={"running": self._current.name, "requested": resolved_name},
            )

        run = TransitionRun(name=resolved_name, outgoing=outgoing_id, incoming=incoming_id)
        self._current = run

        run.status = TransitionStatus.RUNNING
        run.started_at = self.clock.now_ms()
        log.debug(f"Transition {resolved_name}: {outgoing_id} → {incoming_id}")

        ctx = TransitionContext(clock=self.clock, rng=self.rng)
        handle = spawn(
            behavior(outgoing, incoming, ctx),
            category=TaskCategory.TRANSITION,
            description=f"Transition {resolved_name} {outgoing_id} → {incoming_id}",
        )
        handle.task.add_done_callback(lambda _task, run=run: self._finish(run, handle))
        self._handle = handle

        # Cancelling the caller must not abort a half-written hand-off
        await asyncio.shield(handle.task)

        log.info(
            f"Transition {resolved_name} complete",
            incoming=incoming_id,
            duration_ms=round(run.duration_ms or 0, 1),
        )
        return run

    def _finish(self, run: TransitionRun, handle: TaskHandle) -> None:
        run.status = TransitionStatus.DONE
        run.finished_at = self.clock.now_ms()
        self._last = run
        if self._handle is handle:
            self._handle = None

    def cancel(self) -> bool:
        """Abort the running transition (shutdown)"""
        if self._handle is None:
            return False
        return self._handle.cancel()
