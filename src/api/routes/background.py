"""
Background endpoints - switching between background surfaces
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from api.dependencies import get_performance
from api.schemas.performance import BackgroundResponse, SurfaceResponse, SwitchRequest, SwitchResponse
from models.transition import TransitionRun
from services.performance_service import PerformanceService

router = APIRouter(prefix="/background", tags=["Background"])


def _switched(performance: PerformanceService, run: Optional[TransitionRun]) -> SwitchResponse:
    return SwitchResponse(
        switched=run is not None,
        current_index=performance.current_index,
        transition=run.name if run else None,
        duration_ms=run.duration_ms if run else None,
    )


@router.get("", response_model=BackgroundResponse, summary="Background surfaces and current index")
async def get_background(performance: PerformanceService = Depends(get_performance)) -> BackgroundResponse:
    return BackgroundResponse(
        current_index=performance.current_index,
        switching=performance.is_switching(),
        surfaces=[
            SurfaceResponse(index=i, id=s.id, title=s.title, active=s.active)
            for i, s in enumerate(performance.surface_configs)
        ],
    )


@router.post(
    "/switch/{index}",
    response_model=SwitchResponse,
    summary="Switch to a surface",
    description="409 SWITCH_IN_PROGRESS while another switch runs; 404 for an invalid or inactive index."
)
async def switch_to(
    index: int,
    request: Optional[SwitchRequest] = Body(None),
    performance: PerformanceService = Depends(get_performance)
) -> SwitchResponse:
    transition = request.transition if request else None
    return _switched(performance, await performance.switch_to(index, transition))


@router.post("/random", response_model=SwitchResponse, summary="Switch to a random other surface")
async def random_switch(performance: PerformanceService = Depends(get_performance)) -> SwitchResponse:
    return _switched(performance, await performance.random_switch())


@router.post("/next", response_model=SwitchResponse, summary="Switch to the next active surface")
async def next_surface(performance: PerformanceService = Depends(get_performance)) -> SwitchResponse:
    return _switched(performance, await performance.next_surface())
