"""
main_asyncio.py — Application entry point for the performance engine
--------------------------------------------------------------------

Responsible for:
- loading configuration and building the services
- wiring dependencies (Dependency Injection)
- starting keyboard input and the control API
- graceful shutdown on Ctrl +C or fatal errors
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX
# ---------------------------------------------------------------------------

# Set UTF-8 encoding for output BEFORE any imports (fixes Unicode symbol rendering)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio

from api.dependencies import set_service_container
from api.main import create_app
from controllers import KeyboardController
from engine.clock import AsyncioClock
from inputs.keyboard import start_keyboard
from lifecycle import ShutdownCoordinator
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import (
    AllTasksCancellationHandler,
    APIServerShutdownHandler,
    PerformanceShutdownHandler,
)
from lifecycle.task_registry import TaskCategory, spawn
from managers import ConfigManager
from models.enums import LogCategory, LogLevel
from services import EventBus, PerformanceService, ServiceContainer
from services.middleware import log_middleware
from surfaces import VirtualSurfaceProvider
from utils.logger import get_logger, configure_logger

# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------

log = get_logger().for_category(LogCategory.SYSTEM)
configure_logger(LogLevel.DEBUG)


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main():
    """Main async entry point (dependency injection and event loop startup)."""

    log.info("Starting performance engine...")

    # ========================================================================
    # 1. INFRASTRUCTURE
    # ========================================================================

    log.info("Loading configuration...")
    config_manager = ConfigManager()
    config = config_manager.load()

    log.info("Initializing event bus...")
    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    clock = AsyncioClock(fps=config.display.fps)
    surfaces = VirtualSurfaceProvider()

    # ========================================================================
    # 2. PERFORMANCE SERVICE
    # ========================================================================

    log.info("Initializing performance service...")
    performance = PerformanceService(config, surfaces, clock, event_bus)

    # ========================================================================
    # 3. SERVICE CONTAINER
    # ========================================================================

    services = ServiceContainer(
        performance=performance,
        event_bus=event_bus,
        surfaces=surfaces,
        clock=clock,
        config_manager=config_manager,
    )

    # Register service container with API for dependency injection
    set_service_container(services)
    log.info("Service container registered with API")

    # ========================================================================
    # 4. KEYBOARD
    # ========================================================================

    if config.keyboard.enabled:
        log.info("Initializing keyboard input...")
        KeyboardController(services, custom_mappings=config.keyboard.custom_mappings)
        spawn(
            start_keyboard(event_bus),
            category=TaskCategory.INPUT,
            description="Keyboard input adapter",
        )

    # ========================================================================
    # 5. API SERVER
    # ========================================================================

    api_wrapper = None
    if config.api.enabled:
        log.info("Starting API server task...")
        api_wrapper = APIServerWrapper(create_app(), host=config.api.host, port=config.api.port)
        spawn(
            api_wrapper.start(),
            category=TaskCategory.API,
            description="FastAPI/Uvicorn Server",
        )

    # ========================================================================
    # 6. START PERFORMANCE
    # ========================================================================

    await performance.start()

    # ========================================================================
    # 7. SHUTDOWN COORDINATOR
    # ========================================================================

    log.info("Initializing shutdown system...")

    coordinator = ShutdownCoordinator()
    coordinator.register(PerformanceShutdownHandler(performance))
    if api_wrapper is not None:
        coordinator.register(APIServerShutdownHandler(api_wrapper))
    coordinator.register(AllTasksCancellationHandler())

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    log.info("🏁 Application initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()
    log.info("👋 Performance engine shut down cleanly.")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
