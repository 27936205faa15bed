"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. main_asyncio.py creates the ServiceContainer during initialization
2. main_asyncio.py calls set_service_container() after creation
3. Endpoints use get_service_container() / get_performance() via Depends()

Example:
    @router.get("/layers")
    async def list_layers(performance: PerformanceService = Depends(get_performance)):
        return performance.layers.snapshot()
"""

from typing import Optional

from fastapi import Depends, HTTPException, status

from services.performance_service import PerformanceService
from services.service_container import ServiceContainer

# Set by main_asyncio.py (or a test fixture)
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """Store (or clear, with None) the service container for API access"""
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing the service container.

    Raises:
        HTTPException: 503 Service Unavailable if services not initialized
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized. Performance may still be starting."
        )
    return _service_container


async def get_performance(services: ServiceContainer = Depends(get_service_container)) -> PerformanceService:
    return services.performance
