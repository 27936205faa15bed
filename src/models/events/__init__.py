"""
Event system for the performance engine

Input events come from keyboard adapters; notification events are published
by the engine so that UIs can mirror switch completions and layer visibility.
"""

# Event type, base class, and sources
from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource, KeyboardSource

# Input events
from models.events.hardware import KeyboardKeyPressEvent

# Engine notifications
from models.events.performance_events import (
    LayerAnimationChangedEvent,
    LayerVisibilityChangedEvent,
    LayerParamsChangedEvent,
    SurfaceSwitchedEvent,
    EffectTriggeredEvent,
    AutoAdvanceChangedEvent,
    IntervalChangedEvent,
)

__all__ = [
    # Type, base, and sources
    "EventType",
    "Event",
    "EventSource",
    "KeyboardSource",

    # Input
    "KeyboardKeyPressEvent",

    # Notifications
    "LayerAnimationChangedEvent",
    "LayerVisibilityChangedEvent",
    "LayerParamsChangedEvent",
    "SurfaceSwitchedEvent",
    "EffectTriggeredEvent",
    "AutoAdvanceChangedEvent",
    "IntervalChangedEvent",
]
