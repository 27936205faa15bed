"""
Auto-advance endpoints - jittered automatic background switching
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_performance
from api.schemas.performance import AutoStatusResponse, IntervalRequest, ScaleRequest
from services.performance_service import PerformanceService

router = APIRouter(prefix="/auto", tags=["Auto-advance"])


@router.get("", response_model=AutoStatusResponse, summary="Auto-advance status")
async def get_status(performance: PerformanceService = Depends(get_performance)) -> AutoStatusResponse:
    return AutoStatusResponse(**performance.auto_status())


@router.post("/start", response_model=AutoStatusResponse, summary="Start auto-advance")
async def start(performance: PerformanceService = Depends(get_performance)) -> AutoStatusResponse:
    await performance.start_auto_advance()
    return AutoStatusResponse(**performance.auto_status())


@router.post("/stop", response_model=AutoStatusResponse, summary="Stop auto-advance")
async def stop(performance: PerformanceService = Depends(get_performance)) -> AutoStatusResponse:
    await performance.stop_auto_advance()
    return AutoStatusResponse(**performance.auto_status())


@router.post("/toggle", response_model=AutoStatusResponse, summary="Toggle auto-advance")
async def toggle(performance: PerformanceService = Depends(get_performance)) -> AutoStatusResponse:
    await performance.toggle_auto_advance()
    return AutoStatusResponse(**performance.auto_status())


@router.put(
    "/interval",
    response_model=AutoStatusResponse,
    summary="Set the jitter window",
    description="422 INVALID_INTERVAL if min >= max or min < 1000; the previous window is kept."
)
async def set_interval(
    request: IntervalRequest,
    performance: PerformanceService = Depends(get_performance)
) -> AutoStatusResponse:
    await performance.adjust_interval_bounds(request.min_ms, request.max_ms)
    return AutoStatusResponse(**performance.auto_status())


@router.post("/scale", response_model=AutoStatusResponse, summary="Scale the jitter window")
async def scale(
    request: ScaleRequest,
    performance: PerformanceService = Depends(get_performance)
) -> AutoStatusResponse:
    await performance.scale_interval(request.multiplier)
    return AutoStatusResponse(**performance.auto_status())
