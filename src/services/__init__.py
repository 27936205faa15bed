"""Services layer"""

from .event_bus import EventBus
from .performance_service import PerformanceService
from .service_container import ServiceContainer

__all__ = [
    "EventBus",
    "PerformanceService",
    "ServiceContainer",
]
