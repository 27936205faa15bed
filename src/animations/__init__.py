"""
Text layer motion recipes

- motion: pure primitives (floating, displacement, rotation, scale, opacity)
- base: BaseMotion, one instance per layer
- travel, pulse, spin, wave, glitch: recipes, one per AnimationKind
- registry: ANIMATIONS map and create_motion()
"""

from .base import BaseMotion
from .registry import ANIMATIONS, create_motion, resolve_kind

__all__ = [
    "BaseMotion",
    "ANIMATIONS",
    "create_motion",
    "resolve_kind",
]
