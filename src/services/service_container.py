"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass

from engine.clock import Clock
from managers.config_manager import ConfigManager
from services.event_bus import EventBus
from services.performance_service import PerformanceService
from surfaces.surface_interface import ISurfaceProvider


@dataclass
class ServiceContainer:
    """
    Everything controllers and API endpoints need, in one place.

    Usage:
        services = ServiceContainer(
            performance=performance_service,
            event_bus=event_bus,
            surfaces=surfaces,
            clock=clock,
            config_manager=config_manager,
        )

        controller = KeyboardController(services)

        @router.get("/layers")
        async def list_layers(services = Depends(get_service_container)):
            return services.performance.layers.snapshot()
    """

    performance: PerformanceService
    event_bus: EventBus
    surfaces: ISurfaceProvider
    clock: Clock
    config_manager: ConfigManager
