"""
Transition endpoints - available transitions, default, mode and manual runs
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_performance
from api.schemas.performance import (
    SwitchResponse,
    TransitionDefaultRequest,
    TransitionExecuteRequest,
    TransitionListResponse,
    TransitionModeRequest,
)
from models.errors import UnknownKindError
from services.performance_service import PerformanceService

router = APIRouter(prefix="/transitions", tags=["Transitions"])


def _listing(performance: PerformanceService) -> TransitionListResponse:
    return TransitionListResponse(
        available=performance.transitions.available_transitions(),
        default=performance.transitions.default_transition,
        mode=performance.transition_mode,
        active=performance.transitions.is_active(),
    )


@router.get("", response_model=TransitionListResponse, summary="List transitions")
async def list_transitions(performance: PerformanceService = Depends(get_performance)) -> TransitionListResponse:
    return _listing(performance)


@router.post(
    "/execute",
    response_model=SwitchResponse,
    summary="Switch background with a named transition",
    description="Unknown names fall back to the default transition. Returns once the hand-off completes."
)
async def execute_transition(
    request: TransitionExecuteRequest,
    performance: PerformanceService = Depends(get_performance)
) -> SwitchResponse:
    run = await performance.execute_transition(request.name, request.to_index)
    return SwitchResponse(
        switched=run is not None,
        current_index=performance.current_index,
        transition=run.name if run else None,
        duration_ms=run.duration_ms if run else None,
    )


@router.put("/default", response_model=TransitionListResponse, summary="Set the default transition")
async def set_default_transition(
    request: TransitionDefaultRequest,
    performance: PerformanceService = Depends(get_performance)
) -> TransitionListResponse:
    if not performance.set_default_transition(request.name):
        raise UnknownKindError("transition", request.name, performance.transitions.available_transitions())
    return _listing(performance)


@router.put("/mode", response_model=TransitionListResponse, summary="Fixed or random transition per switch")
async def set_mode(
    request: TransitionModeRequest,
    performance: PerformanceService = Depends(get_performance)
) -> TransitionListResponse:
    performance.set_transition_mode(request.mode)
    return _listing(performance)
