import asyncio
from typing import List

from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory
from .adapters.base import IKeyboardAdapter
from .adapters.dummy import DummyKeyboardAdapter

log = get_logger().for_category(LogCategory.INPUT)


async def start_keyboard(event_bus: EventBus) -> None:
    """
    Run the first keyboard adapter that works.

    Priority:
    1. STDIN (SSH / terminal)
    2. Dummy (fallback, API-only control)
    """
    adapters: List[IKeyboardAdapter] = []

    try:
        from .adapters.stdin import StdinKeyboardAdapter
        adapters.append(StdinKeyboardAdapter(event_bus))
    except ImportError as e:
        # termios / tty are POSIX-only
        log.info("STDIN adapter not available", reason=str(e))

    adapters.append(DummyKeyboardAdapter(event_bus))

    for adapter in adapters:
        try:
            log.info("Starting keyboard adapter", adapter=adapter.__class__.__name__)
            await adapter.run()
            return
        except asyncio.CancelledError:
            raise
        except Exception as e:
            log.warn(
                "Keyboard adapter failed, falling back",
                adapter=adapter.__class__.__name__,
                reason=str(e),
            )

    log.error("No keyboard adapter could be started")
    raise RuntimeError("Keyboard input unavailable")
