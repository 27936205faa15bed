from dataclasses import dataclass
from typing import Any, Dict, Optional

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource
from models.enums import AnimationKind, EffectKind


@dataclass(init=False)
class LayerAnimationChangedEvent(Event):
    layer_id: int
    kind: Optional[AnimationKind]
    params: Dict[str, Any]

    def __init__(self, layer_id: int, kind: Optional[AnimationKind], params: Dict[str, Any]):
        super().__init__(
            type=EventType.LAYER_ANIMATION_CHANGED,
            source=EventSource.LAYER_ENGINE,
        )
        self.layer_id = layer_id
        self.kind = kind
        self.params = params


@dataclass(init=False)
class LayerVisibilityChangedEvent(Event):
    layer_id: int
    visible: bool

    def __init__(self, layer_id: int, visible: bool):
        super().__init__(
            type=EventType.LAYER_VISIBILITY_CHANGED,
            source=EventSource.LAYER_ENGINE,
        )
        self.layer_id = layer_id
        self.visible = visible


@dataclass(init=False)
class LayerParamsChangedEvent(Event):
    layer_id: int
    params: Dict[str, Any]

    def __init__(self, layer_id: int, params: Dict[str, Any]):
        super().__init__(
            type=EventType.LAYER_PARAMS_CHANGED,
            source=EventSource.LAYER_ENGINE,
        )
        self.layer_id = layer_id
        self.params = params


@dataclass(init=False)
class SurfaceSwitchedEvent(Event):
    """Published once a background hand-off has visually completed"""
    from_index: int
    to_index: int
    transition: str

    def __init__(self, from_index: int, to_index: int, transition: str):
        super().__init__(
            type=EventType.SURFACE_SWITCHED,
            source=EventSource.TRANSITION_ENGINE,
        )
        self.from_index = from_index
        self.to_index = to_index
        self.transition = transition


@dataclass(init=False)
class EffectTriggeredEvent(Event):
    kind: EffectKind
    duration_ms: float

    def __init__(self, kind: EffectKind, duration_ms: float):
        super().__init__(
            type=EventType.EFFECT_TRIGGERED,
            source=EventSource.EFFECT_SCHEDULER,
        )
        self.kind = kind
        self.duration_ms = duration_ms


@dataclass(init=False)
class AutoAdvanceChangedEvent(Event):
    enabled: bool

    def __init__(self, enabled: bool):
        super().__init__(
            type=EventType.AUTO_ADVANCE_CHANGED,
            source=EventSource.AUTO_ADVANCE,
        )
        self.enabled = enabled


@dataclass(init=False)
class IntervalChangedEvent(Event):
    min_ms: float
    max_ms: float

    def __init__(self, min_ms: float, max_ms: float):
        super().__init__(
            type=EventType.INTERVAL_CHANGED,
            source=EventSource.AUTO_ADVANCE,
        )
        self.min_ms = min_ms
        self.max_ms = max_ms
