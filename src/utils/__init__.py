"""
Utility functions for the performance engine
"""

from .colors import (
    is_css_color,
    hex_to_rgb,
    rgb_to_hex,
)

__all__ = [
    'is_css_color',
    'hex_to_rgb',
    'rgb_to_hex',
]
