from enum import Enum, auto


class KeyboardSource(Enum):
    STDIN = auto()
    API = auto()


class EventSource(Enum):
    """Event source identifiers for application events"""
    INPUT = auto()              # Keyboard / remote inputs
    LAYER_ENGINE = auto()       # Text layer changes
    TRANSITION_ENGINE = auto()  # Background switches
    EFFECT_SCHEDULER = auto()   # Overlay pulses
    AUTO_ADVANCE = auto()       # Auto-advance timer
    APPLICATION = auto()        # Generic application events
