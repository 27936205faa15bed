"""
Color utilities

Pure functions for the CSS-like colour strings carried by text layer params
("#ff00aa", "#fff", "rgb(255, 0, 0)", "hsl(120, 100%, 60%)", "white").
"""

import re
from typing import Tuple

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_RE = re.compile(r"^(rgb|rgba|hsl|hsla)\(\s*[-\d.%,\s/]+\)$", re.IGNORECASE)
_NAME_RE = re.compile(r"^[a-zA-Z]+$")


def is_css_color(value: str) -> bool:
    """
    Loose CSS colour check

    Accepts hex (3/4/6/8 digits), rgb()/rgba()/hsl()/hsla() and bare
    keywords. Keywords are not checked against the CSS list; the renderer
    decides what "papayawhip" means.

    Example:
        is_css_color("#ff0000")        # True
        is_css_color("hsl(120, 50%)")  # True
        is_css_color("#12")            # False
    """
    if not isinstance(value, str):
        return False
    value = value.strip()
    return bool(_HEX_RE.match(value) or _FUNC_RE.match(value) or _NAME_RE.match(value))


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """
    Convert "#rgb" / "#rrggbb" to an RGB tuple (0-255)

    Raises:
        ValueError: not a 3 or 6 digit hex colour
    """
    digits = value.strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6 or not _HEX_RE.match("#" + digits):
        raise ValueError(f"Not a hex colour: {value}")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """(255, 0, 170) → "#ff00aa" (components clamped to 0-255)"""
    r, g, b = (max(0, min(255, int(c))) for c in (r, g, b))
    return f"#{r:02x}{g:02x}{b:02x}"
