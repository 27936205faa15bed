from __future__ import annotations

from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.performance_service import PerformanceService

log = get_logger().for_category(LogCategory.SHUTDOWN)


class PerformanceShutdownHandler(IShutdownHandler):
    """
    Stops the auto-advance timer, any running transition, pending effect
    reverts and every text layer loop.

    Priority: 130 (first, before the API goes away)
    """

    def __init__(self, service: "PerformanceService"):
        self.service = service

    @property
    def shutdown_priority(self) -> int:
        return 130

    async def shutdown(self) -> None:
        log.info("Stopping performance...")
        await self.service.shutdown()
