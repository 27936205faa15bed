from __future__ import annotations

from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from lifecycle.api_server_wrapper import APIServerWrapper

log = get_logger().for_category(LogCategory.SHUTDOWN)


class APIServerShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the control API (FastAPI + Uvicorn).

    Uses APIServerWrapper.stop(), which sets force_exit so the Starlette
    lifespan task cannot keep the port bound.

    Priority: 90 (after the performance, before task cancellation)
    """

    def __init__(self, api_wrapper: "APIServerWrapper"):
        self.api_wrapper = api_wrapper

    @property
    def shutdown_priority(self) -> int:
        return 90

    async def shutdown(self) -> None:
        log.info("Stopping API server...")

        if not self.api_wrapper.is_running:
            log.debug("API server not running")
            return

        try:
            await self.api_wrapper.stop()
        except Exception as e:
            log.error(f"Error stopping API server: {e}")
