"""
Overlay effect models

An EffectPulse is a one-shot, self-expiring overlay state. Pulses never
queue: the newest pulse owns the overlay until it expires or is preempted.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from models.enums import EffectKind

DEFAULT_DURATIONS_MS: Dict[EffectKind, int] = {
    EffectKind.FLASH: 200,
    EffectKind.GLITCH: 500,
    EffectKind.COLOR_SHIFT: 300,
    EffectKind.BLACKOUT: 1000,
    EffectKind.WHITEOUT: 1000,
}

COLOR_SHIFT_PALETTE: Tuple[str, ...] = (
    "#ff0000", "#00ff00", "#0000ff", "#ff00ff", "#ffff00", "#00ffff",
)

# Overlay CSS class per effect (renderer-side styling hook)
EFFECT_CLASSES: Dict[EffectKind, str] = {
    EffectKind.FLASH: "flash-effect",
    EffectKind.GLITCH: "glitch-effect",
    EffectKind.COLOR_SHIFT: "color-shift-effect",
    EffectKind.BLACKOUT: "blackout-effect active",
    EffectKind.WHITEOUT: "whiteout-effect active",
}

FIXED_BACKGROUNDS: Dict[EffectKind, str] = {
    EffectKind.BLACKOUT: "#000000",
    EffectKind.WHITEOUT: "#ffffff",
}


@dataclass(frozen=True)
class EffectPulse:
    kind: EffectKind
    started_at: float
    duration_ms: float
    token: int
    background: Optional[str] = None

    @property
    def expires_at(self) -> float:
        return self.started_at + self.duration_ms


@dataclass(frozen=True)
class OverlayState:
    """What the overlay currently shows (kind None = neutral)"""
    kind: Optional[EffectKind] = None
    css_class: str = "effect-overlay"
    background: Optional[str] = None

    @property
    def is_neutral(self) -> bool:
        return self.kind is None

    @classmethod
    def neutral(cls) -> "OverlayState":
        return cls()

    @classmethod
    def for_pulse(cls, pulse: EffectPulse) -> "OverlayState":
        return cls(
            kind=pulse.kind,
            css_class=f"effect-overlay {EFFECT_CLASSES[pulse.kind]}",
            background=pulse.background,
        )
