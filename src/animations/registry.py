"""
Animation registry

Maps every AnimationKind to its recipe class.
"""

import random
from typing import Dict, Optional, Type

from animations.base import BaseMotion
from animations.glitch import GlitchMotion
from animations.pulse import BlinkMotion, NeonMotion, RainbowMotion, ZoomMotion
from animations.spin import Rotate3DMotion, RotateMotion
from animations.travel import RandomMoveMotion, ScrollMotion, SpiralMotion, VerticalMotion
from animations.wave import ChaosMotion, WaveMotion
from models.config import DisplayConfig
from models.enums import AnimationKind
from models.errors import UnknownKindError
from models.layer import LayerState


def _build_animation_registry() -> Dict[AnimationKind, Type[BaseMotion]]:
    """Build animation registry keyed by each recipe's KIND"""
    classes = [
        ScrollMotion,
        VerticalMotion,
        RotateMotion,
        BlinkMotion,
        NeonMotion,
        WaveMotion,
        GlitchMotion,
        RandomMoveMotion,
        ZoomMotion,
        RainbowMotion,
        ChaosMotion,
        Rotate3DMotion,
        SpiralMotion,
    ]
    return {cls.KIND: cls for cls in classes}


ANIMATIONS: Dict[AnimationKind, Type[BaseMotion]] = _build_animation_registry()


def resolve_kind(kind) -> AnimationKind:
    """Parse a kind (enum, wire name or member name) or raise UnknownKindError"""
    try:
        return AnimationKind.parse(kind)
    except ValueError:
        raise UnknownKindError("animation", kind, [k.value for k in ANIMATIONS]) from None


def create_motion(
    kind,
    state: LayerState,
    rng: random.Random,
    viewport: Optional[DisplayConfig] = None
) -> BaseMotion:
    """
    Create a recipe instance for one layer.

    Raises:
        UnknownKindError: kind is not a registered animation
    """
    resolved = resolve_kind(kind)
    motion_class = ANIMATIONS.get(resolved)
    if motion_class is None:
        raise UnknownKindError("animation", kind, [k.value for k in ANIMATIONS])
    return motion_class(state, rng, viewport)
