"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import Dict, List, Optional, Set

from lifecycle.task_registry import TaskCategory, TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)

# A failure in one of these ends the process
CRITICAL_CATEGORIES: Set[TaskCategory] = {TaskCategory.API, TaskCategory.INPUT}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(PerformanceShutdownHandler(service))
        coordinator.register(APIServerShutdownHandler(api_wrapper))
        coordinator.register(AllTasksCancellationHandler())

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        self._handlers: List = []
        self._shutdown_event: Optional[asyncio.Event] = None
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have a shutdown_priority (int) and an async shutdown().
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT / SIGTERM handlers that trigger shutdown"""
        self._ensure_event()
        shutdown_event = self._shutdown_event

        def signal_handler(sig: signal.Signals) -> None:
            self._shutdown_trigger["reason"] = sig.name
            log.info(f"Signal {sig.name} received → triggering shutdown")
            shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        """Trigger shutdown from code (keyboard quit key, tests)"""
        self._ensure_event()
        self._shutdown_trigger["reason"] = reason
        log.info(f"Shutdown requested: {reason}")
        self._shutdown_event.set()

    def _ensure_event(self) -> None:
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()

    def _check_critical_task_failures(self) -> bool:
        for record in TaskRegistry.instance().failed():
            if record.info.category in CRITICAL_CATEGORIES:
                log.error(
                    f"❌ Critical task failed: {record.info.description}",
                    task_category=record.info.category.name,
                )
                self._shutdown_trigger["reason"] = f"Task failure: {record.info.description}"
                return True
        return False

    async def _wait_once(self) -> bool:
        """
        Wait for the shutdown signal or any critical task to finish.

        Returns True when shutdown should proceed.
        """
        critical_tasks = [
            r.task for r in TaskRegistry.instance().active()
            if r.info.category in CRITICAL_CATEGORIES
        ]
        if not critical_tasks:
            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=0.2)
                return True
            except asyncio.TimeoutError:
                return False

        shutdown_waiter = asyncio.create_task(self._shutdown_event.wait())
        try:
            done, _ = await asyncio.wait(
                set(critical_tasks) | {shutdown_waiter},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if shutdown_waiter in done:
                return True
            # A critical task ended; only a failure ends the process
            return self._check_critical_task_failures()
        finally:
            if not shutdown_waiter.done():
                shutdown_waiter.cancel()

    async def wait_for_shutdown(self) -> None:
        """Return once a signal, request_shutdown() or a critical failure occurs"""
        self._ensure_event()
        while not self._shutdown_event.is_set():
            if self._check_critical_task_failures():
                return
            if await self._wait_once():
                return

    async def shutdown_all(self) -> None:
        """
        Run every handler in descending priority order.

        Each handler gets timeout_per_handler seconds; the whole sequence is
        abandoned after total_timeout. A failing handler does not stop the
        ones after it.
        """
        log.info("🛑 Initiating graceful shutdown sequence...")
        log.info(f"   Reason: {self._shutdown_trigger.get('reason') or 'UNKNOWN'}")

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"⚠️  Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {handler_name} shutdown complete")
            except asyncio.TimeoutError:
                log.error(f"⚠️  {handler_name} shutdown timeout ({self._timeout_per_handler}s)")
            except asyncio.CancelledError:
                log.warn("Shutdown sequence was cancelled")
                raise
            except Exception as e:
                log.error(f"❌ Error shutting down {handler_name}: {e}")

        log.info("✓ Shutdown sequence complete")

    def get_handler(self, handler_type: type):
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
