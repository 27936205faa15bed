"""
Layer endpoints - text layer content, animation, parameters and visibility
"""

from typing import List

from fastapi import APIRouter, Depends

from animations.registry import resolve_kind
from api.dependencies import get_performance
from api.schemas.layer import (
    LayerAnimationRequest,
    LayerListResponse,
    LayerParamsSchema,
    LayerResetResponse,
    LayerResponse,
    LayerToggleResponse,
    LayerUpdateRequest,
    SpeedScaleRequest,
    SpeedScaleResponse,
)
from models.layer import LayerParams
from services.performance_service import PerformanceService
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/layers", tags=["Layers"])


def _merged_params(performance: PerformanceService, index: int, schema: LayerParamsSchema) -> LayerParams:
    return performance.layers.layer(index).params.updated(**schema.changes())


@router.get("", response_model=LayerListResponse, summary="List text layers")
async def list_layers(performance: PerformanceService = Depends(get_performance)) -> LayerListResponse:
    layers = [LayerResponse(**snapshot) for snapshot in performance.layers.snapshot()]
    return LayerListResponse(layers=layers, count=len(layers))


@router.get("/visibility", response_model=List[bool], summary="Visibility of every layer")
async def layer_visibility(performance: PerformanceService = Depends(get_performance)) -> List[bool]:
    return performance.layer_visibility()


@router.get("/{index}", response_model=LayerResponse, summary="Get one text layer")
async def get_layer(index: int, performance: PerformanceService = Depends(get_performance)) -> LayerResponse:
    return LayerResponse(**performance.layers.layer(index).snapshot())


@router.put(
    "/{index}",
    response_model=LayerResponse,
    summary="Set layer content",
    description="Non-empty content shows the layer and (re)starts its animation; empty content hides it."
)
async def update_layer(
    index: int,
    request: LayerUpdateRequest,
    performance: PerformanceService = Depends(get_performance)
) -> LayerResponse:
    kind = resolve_kind(request.animation) if request.animation else None
    params = _merged_params(performance, index, request.params) if request.params else None
    snapshot = await performance.add_or_update_layer(index, request.content, kind, params)
    return LayerResponse(**snapshot)


@router.post("/{index}/toggle", response_model=LayerToggleResponse, summary="Toggle layer visibility")
async def toggle_layer(index: int, performance: PerformanceService = Depends(get_performance)) -> LayerToggleResponse:
    visible = await performance.toggle_layer(index)
    return LayerToggleResponse(id=index, visible=visible)


@router.put(
    "/{index}/animation",
    response_model=LayerResponse,
    summary="Change layer animation",
    description="Unknown animation kinds are rejected with 404 UNKNOWN_KIND; the layer is left untouched."
)
async def set_animation(
    index: int,
    request: LayerAnimationRequest,
    performance: PerformanceService = Depends(get_performance)
) -> LayerResponse:
    performance.layers.layer(index)
    kind = resolve_kind(request.animation)
    params = _merged_params(performance, index, request.params) if request.params else None
    await performance.set_animation(index, kind, params)
    return LayerResponse(**performance.layers.layer(index).snapshot())


@router.patch("/{index}/params", response_model=LayerResponse, summary="Update layer parameters")
async def update_params(
    index: int,
    request: LayerParamsSchema,
    performance: PerformanceService = Depends(get_performance)
) -> LayerResponse:
    await performance.set_layer_params(index, **request.changes())
    return LayerResponse(**performance.layers.layer(index).snapshot())


@router.post("/speed", response_model=SpeedScaleResponse, summary="Scale every layer's speed")
async def scale_speed(
    request: SpeedScaleRequest,
    performance: PerformanceService = Depends(get_performance)
) -> SpeedScaleResponse:
    speeds = await performance.adjust_text_speed(request.multiplier)
    return SpeedScaleResponse(speeds=speeds)


@router.post("/reset", response_model=LayerResetResponse, summary="Restart every animated layer")
async def reset_animations(performance: PerformanceService = Depends(get_performance)) -> LayerResetResponse:
    return LayerResetResponse(restarted=await performance.reset_animations())


@router.post("/clear", response_model=LayerListResponse, summary="Stop, hide and blank every layer")
async def clear_layers(performance: PerformanceService = Depends(get_performance)) -> LayerListResponse:
    await performance.clear_layers()
    layers = [LayerResponse(**snapshot) for snapshot in performance.layers.snapshot()]
    return LayerListResponse(layers=layers, count=len(layers))
