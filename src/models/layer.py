"""
Text layer models

LayerState is owned exclusively by one AnimationLayer. Phase is drawn once
at layer creation and never changes afterwards.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from models.animation_params import SPEED
from models.enums import AnimationKind, LayerPosition

TWO_PI = math.pi * 2


@dataclass(frozen=True)
class Phase:
    """Per-layer random phase offsets (radians, uniform in [0, 2π))"""
    x: float
    y: float
    rotation: float
    scale: float

    @classmethod
    def sample(cls, rng: random.Random) -> "Phase":
        return cls(
            x=rng.random() * TWO_PI,
            y=rng.random() * TWO_PI,
            rotation=rng.random() * TWO_PI,
            scale=rng.random() * TWO_PI,
        )


@dataclass(frozen=True)
class LayerParams:
    """
    Styling and motion parameters of one text layer

    Attributes:
        speed: Motion multiplier, clamped to [0.1, 10]
        color: CSS-like colour string used for text and glow
        font_size: CSS-like size string ("48px")
        position: Vertical anchor (top / center / bottom)
    """
    speed: float = 1.0
    color: str = "#ffffff"
    font_size: str = "48px"
    position: LayerPosition = LayerPosition.TOP

    def __post_init__(self):
        object.__setattr__(self, "speed", SPEED.clamp(self.speed))
        if not isinstance(self.position, LayerPosition):
            object.__setattr__(self, "position", LayerPosition(self.position))

    def updated(self, **changes) -> "LayerParams":
        """Return a copy with the given non-None fields replaced"""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LayerParams":
        """Build from config/API dict (accepts fontSize or font_size)"""
        data = data or {}
        kwargs: Dict[str, Any] = {}
        if data.get("speed") is not None:
            kwargs["speed"] = float(data["speed"])
        if data.get("color"):
            kwargs["color"] = data["color"]
        font_size = data.get("fontSize", data.get("font_size"))
        if font_size:
            kwargs["font_size"] = font_size
        if data.get("position"):
            kwargs["position"] = LayerPosition(data["position"])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "speed": self.speed,
            "color": self.color,
            "fontSize": self.font_size,
            "position": self.position.value,
        }


@dataclass
class LayerState:
    """
    Mutable runtime state of one text layer

    Invariants:
    - clock never decreases while running; reset only on explicit start
    - phase is fixed for the lifetime of the layer
    """
    id: int
    phase: Phase
    params: LayerParams = field(default_factory=LayerParams)
    kind: Optional[AnimationKind] = None
    content: str = ""
    clock: float = 0.0
    ticks: int = 0
    running: bool = False
    visible: bool = False
