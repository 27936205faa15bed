"""
Models package - Data models for the performance engine
"""

from .enums import (
    AnimationKind,
    LayerPosition,
    TransitionStatus,
    TransitionMode,
    EffectKind,
    LogLevel,
    LogCategory,
)
from .errors import (
    PerformanceError,
    AddressingError,
    UnknownKindError,
    ConfigurationError,
    InvalidIntervalError,
    SwitchInProgressError,
)
from .layer import Phase, LayerParams, LayerState
from .frame import MotionFrame, FrameAnchor
from .transition import TransitionConfig, TransitionRun
from .effect import EffectPulse, OverlayState
from .schedule import IntervalBounds, ScheduleState

__all__ = [
    'AnimationKind',
    'LayerPosition',
    'TransitionStatus',
    'TransitionMode',
    'EffectKind',
    'LogLevel',
    'LogCategory',
    'PerformanceError',
    'AddressingError',
    'UnknownKindError',
    'ConfigurationError',
    'InvalidIntervalError',
    'SwitchInProgressError',
    'Phase',
    'LayerParams',
    'LayerState',
    'MotionFrame',
    'FrameAnchor',
    'TransitionConfig',
    'TransitionRun',
    'EffectPulse',
    'OverlayState',
    'IntervalBounds',
    'ScheduleState',
]
