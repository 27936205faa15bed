"""
Presentation surfaces

Abstraction over whatever actually renders text layers, background players
and the effect overlay. The engine only ever writes style properties and
visibility through ISurface.
"""

from .surface_interface import ISurface, ISurfaceProvider
from .virtual_surface import VirtualSurface, VirtualSurfaceProvider

__all__ = [
    "ISurface",
    "ISurfaceProvider",
    "VirtualSurface",
    "VirtualSurfaceProvider",
]
