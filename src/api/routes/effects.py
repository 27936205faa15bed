"""
Effect endpoints - one-shot overlay pulses
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from api.dependencies import get_performance
from api.schemas.performance import EffectRequest, EffectResponse, OverlayResponse
from models.enums import EffectKind
from services.performance_service import PerformanceService
from utils.serialization import Serializer

router = APIRouter(prefix="/effects", tags=["Effects"])


@router.get("", response_model=OverlayResponse, summary="Overlay state and available effects")
async def get_overlay(performance: PerformanceService = Depends(get_performance)) -> OverlayResponse:
    effects = performance.effects
    return OverlayResponse(
        available=[kind.value for kind in EffectKind],
        overlay=Serializer.to_jsonable(effects.state),
        durations_ms={kind.value: float(ms) for kind, ms in effects.durations_ms.items()},
    )


@router.post(
    "/{kind}",
    response_model=EffectResponse,
    summary="Trigger an effect",
    description="Returns immediately; the overlay reverts on its own. A newer effect preempts an older one."
)
async def trigger_effect(
    kind: str,
    request: Optional[EffectRequest] = Body(None),
    performance: PerformanceService = Depends(get_performance)
) -> EffectResponse:
    duration = request.duration_ms if request else None
    await performance.trigger_effect(kind, duration)
    pulse = performance.effects.active_pulse
    return EffectResponse(kind=pulse.kind.value, duration_ms=pulse.duration_ms, background=pulse.background)
