"""
Enums for the performance engine
"""

from enum import Enum, auto


class AnimationKind(Enum):
    """
    Text layer animation kinds

    Value is the wire name used in config files, the HTTP API and
    keyboard mappings (e.g. "randomMove", "3dRotate").
    """
    SCROLL = "scroll"
    VERTICAL = "vertical"
    ROTATE = "rotate"
    BLINK = "blink"
    NEON = "neon"
    WAVE = "wave"
    GLITCH = "glitch"
    RANDOM_MOVE = "randomMove"
    ZOOM = "zoom"
    RAINBOW = "rainbow"
    CHAOS = "chaos"
    ROTATE_3D = "3dRotate"
    SPIRAL = "spiral"

    @classmethod
    def parse(cls, value) -> "AnimationKind":
        """Accept enum, wire name ("randomMove") or member name ("RANDOM_MOVE")"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for kind in cls:
                if kind.value == value or kind.name == value.upper():
                    return kind
        raise ValueError(f"Unknown AnimationKind: {value}")


class LayerPosition(Enum):
    """Vertical anchor of a text layer"""
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class TransitionStatus(Enum):
    """Lifecycle of a single transition run"""
    PENDING = auto()
    RUNNING = auto()
    DONE = auto()


class TransitionMode(Enum):
    """How the orchestrator picks a transition for a background switch"""
    FIXED = "fixed"      # Always the configured default
    RANDOM = "random"    # Random registered transition per switch


class EffectKind(Enum):
    """One-shot overlay pulses"""
    FLASH = "flash"
    GLITCH = "glitch"
    COLOR_SHIFT = "colorShift"
    BLACKOUT = "blackout"
    WHITEOUT = "whiteout"

    @classmethod
    def parse(cls, value) -> "EffectKind":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for kind in cls:
                if kind.value == value or kind.name == value.upper():
                    return kind
        raise ValueError(f"Unknown EffectKind: {value}")


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    ANIMATION = auto()   # Motion recipes
    LAYER = auto()       # Text layer start/stop/params
    TRANSITION = auto()  # Background surface hand-offs
    EFFECT = auto()      # Overlay pulses
    SCHEDULER = auto()   # Auto-advance timer
    SURFACE = auto()     # Surface provider writes
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors
    INPUT = auto()       # Keyboard adapters and key bindings

    API = auto()
    TASK = auto()
    SHUTDOWN = auto()

    GENERAL = auto()    # Default general category
