from enum import Enum, auto


class EventType(Enum):
    # Input
    KEYBOARD_KEYPRESS = auto()

    # Text layers
    LAYER_ANIMATION_CHANGED = auto()
    LAYER_VISIBILITY_CHANGED = auto()
    LAYER_PARAMS_CHANGED = auto()

    # Background surfaces
    SURFACE_SWITCHED = auto()

    # Overlay
    EFFECT_TRIGGERED = auto()

    # Auto-advance
    AUTO_ADVANCE_CHANGED = auto()
    INTERVAL_CHANGED = auto()
