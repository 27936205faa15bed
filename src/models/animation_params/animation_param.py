from __future__ import annotations
from typing import Any
from abc import ABC, abstractmethod


class AnimationParam(ABC):
    """
    Base class for layer parameters the performer can change live.

    A param knows its name and its valid range; layers only ever store
    values that went through clamp().
    """

    key: str
    label: str
    default: Any

    @abstractmethod
    def clamp(self, value: Any) -> Any:
        """Clamp value to valid range"""
        ...

    def scale(self, current: Any, multiplier: float) -> Any:
        """Multiply current value and clamp"""
        return self.clamp(current * multiplier)
