"""
Performance schemas - transitions, effects, background switching, auto-advance
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from models.enums import TransitionMode


# ===== Transitions =====

class TransitionListResponse(BaseModel):
    available: List[str]
    default: str
    mode: TransitionMode
    active: bool


class TransitionExecuteRequest(BaseModel):
    to_index: int = Field(description="Background surface index to switch to")
    name: Optional[str] = Field(None, description="Transition name; omitted = configured default")


class TransitionDefaultRequest(BaseModel):
    name: str


class TransitionModeRequest(BaseModel):
    mode: TransitionMode


# ===== Background =====

class SwitchRequest(BaseModel):
    transition: Optional[str] = Field(None, description="Transition name; omitted = per transition mode")


class SwitchResponse(BaseModel):
    switched: bool
    current_index: Optional[int]
    transition: Optional[str] = None
    duration_ms: Optional[float] = None


class SurfaceResponse(BaseModel):
    index: int
    id: str
    title: str
    active: bool


class BackgroundResponse(BaseModel):
    current_index: Optional[int]
    switching: bool
    surfaces: List[SurfaceResponse]


# ===== Effects =====

class EffectRequest(BaseModel):
    duration_ms: Optional[float] = Field(None, ge=0, description="Override the effect's default duration")


class EffectResponse(BaseModel):
    kind: str
    duration_ms: float
    background: Optional[str] = None


class OverlayResponse(BaseModel):
    available: List[str]
    overlay: Dict[str, Any]
    durations_ms: Dict[str, float]


# ===== Auto-advance =====

class IntervalSchema(BaseModel):
    min: float
    max: float


class AutoStatusResponse(BaseModel):
    enabled: bool
    interval: IntervalSchema
    switches: int
    last_delay_ms: Optional[float] = None


class IntervalRequest(BaseModel):
    min_ms: float = Field(description="Lower bound (>= 1000)")
    max_ms: float = Field(description="Upper bound (> min_ms)")


class ScaleRequest(BaseModel):
    multiplier: float = Field(gt=0, description="0.8 = faster switching, 1.2 = slower")
