"""
Motion frame model

One MotionFrame is the output of a single animation tick: everything the
presentation surface needs to place and style one text layer.

✔ relative anchor - x/y are offsets from the layer's resting position
✔ absolute anchor - x/y are viewport coordinates (left/top), centred on the text
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class FrameAnchor(Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


@dataclass(frozen=True)
class MotionFrame:
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    scale: float = 1.0
    opacity: Optional[float] = None
    hue: Optional[float] = None
    color: Optional[str] = None
    glow_radius: Optional[float] = None
    glow_color: Optional[str] = None
    rgb_split: float = 0.0
    skew_x: float = 0.0
    rotate_x: float = 0.0
    rotate_y: float = 0.0
    perspective: Optional[float] = None
    anchor: FrameAnchor = FrameAnchor.RELATIVE

    def is_finite(self) -> bool:
        values = [self.x, self.y, self.rotation, self.scale, self.rgb_split,
                  self.skew_x, self.rotate_x, self.rotate_y]
        for optional in (self.opacity, self.hue, self.glow_radius):
            if optional is not None:
                values.append(optional)
        return all(math.isfinite(v) for v in values)

    def transform_css(self) -> str:
        """Render transform the way a CSS renderer expects it"""
        parts = []
        if self.anchor is FrameAnchor.ABSOLUTE:
            parts.append("translate(-50%, -50%)")
        else:
            parts.append(f"translate({self.x:.2f}px, {self.y:.2f}px)")
        if self.perspective is not None:
            parts.append(f"perspective({self.perspective:.0f}px)")
            parts.append(f"rotateX({self.rotate_x:.2f}deg)")
            parts.append(f"rotateY({self.rotate_y:.2f}deg)")
            parts.append(f"rotateZ({self.rotation:.2f}deg)")
        else:
            if self.skew_x:
                parts.append(f"skew({self.skew_x:.2f}deg)")
            parts.append(f"rotate({self.rotation:.2f}deg)")
        parts.append(f"scale({self.scale:.3f})")
        return " ".join(parts)

    def to_style(self) -> Dict[str, Any]:
        """
        Convert to surface style properties.

        Only properties the frame actually drives are included, so a
        recipe that does not touch opacity leaves the surface value alone.
        """
        style: Dict[str, Any] = {"transform": self.transform_css()}
        if self.anchor is FrameAnchor.ABSOLUTE:
            style["left"] = f"{self.x:.2f}px"
            style["top"] = f"{self.y:.2f}px"
        if self.opacity is not None:
            style["opacity"] = self.opacity
        if self.color is not None:
            style["color"] = self.color
        if self.glow_radius is not None:
            style["glow"] = {
                "radius": self.glow_radius,
                "color": self.glow_color,
                "rgb_split": self.rgb_split,
            }
        elif self.rgb_split:
            style["glow"] = {"radius": 0.0, "color": None, "rgb_split": self.rgb_split}
        if self.perspective is not None:
            style["perspective"] = f"{self.perspective:.0f}px"
        return style
