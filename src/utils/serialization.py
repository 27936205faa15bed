"""
Serialization utilities - Central enum and model serialization for JSON API

Provides conversion between:
- Enums ↔ Strings (AnimationKind, EffectKind, TransitionMode, ...)
- Engine models ↔ Dicts (LayerState, IntervalBounds, Event payloads)

Single source of truth for event logging and HTTP API compatibility.
"""

from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from models.layer import LayerState
from models.schedule import IntervalBounds

T = TypeVar('T', bound=Enum)


class Serializer:
    """Central enum and model serialization for JSON API"""

    # ========================================================================
    # ENUM SERIALIZATION
    # ========================================================================

    @staticmethod
    def enum_to_str(value: Optional[Enum]) -> Optional[str]:
        """Convert any enum to string name"""
        return value.name if value else None

    @staticmethod
    def to_str(value) -> Optional[str]:
        """
        Polymorphic conversion: handles both Enum and str types

        Wire-valued enums (AnimationKind "randomMove") serialize to their
        value, everything else to str().
        """
        if value is None:
            return None
        if isinstance(value, Enum):
            return value.value if isinstance(value.value, str) else value.name
        return str(value)

    @staticmethod
    def str_to_enum(value: str, enum_type: Type[T]) -> T:
        """Convert member name or wire value to enum, raise ValueError if invalid"""
        for member in enum_type:
            if member.name == value or member.value == value:
                return member
        raise ValueError(f"Invalid {enum_type.__name__}: {value}")

    # ========================================================================
    # GENERIC
    # ========================================================================

    @classmethod
    def to_jsonable(cls, value: Any) -> Any:
        """Recursively convert enums/dataclasses/containers to JSON-safe values"""
        if isinstance(value, Enum):
            return cls.to_str(value)
        if is_dataclass(value) and not isinstance(value, type):
            return cls.to_jsonable(asdict(value))
        if isinstance(value, dict):
            return {cls.to_str(k) if isinstance(k, Enum) else k: cls.to_jsonable(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [cls.to_jsonable(v) for v in value]
        return value

    # ========================================================================
    # ENGINE MODELS
    # ========================================================================

    @staticmethod
    def layer_to_dict(state: LayerState) -> Dict[str, Any]:
        return {
            "id": state.id,
            "content": state.content,
            "animation": state.kind.value if state.kind else None,
            "params": state.params.to_dict(),
            "visible": state.visible,
            "running": state.running,
            "clock": round(state.clock, 4),
            "ticks": state.ticks,
        }

    @staticmethod
    def interval_to_dict(bounds: IntervalBounds) -> Dict[str, Any]:
        return {"min": bounds.min_ms, "max": bounds.max_ms}
