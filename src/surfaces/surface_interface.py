# surfaces/surface_interface.py
"""
ISurface / ISurfaceProvider Protocols
=====================================
Renderer abstraction for presentation surfaces.
Minimal contract for any renderer (browser bridge, compositor, virtual).
"""

from __future__ import annotations
from typing import Any, Iterable, List, Protocol


class ISurface(Protocol):
    """
    Protocol defining the minimal surface interface.

    All implementations must provide:
    - id: stable surface identifier
    - visible: current visibility
    - set_style: buffer style properties (transform, opacity, ...)
    - clear_style: remove style properties (renderer default applies)
    - show / hide: toggle visibility
    - set_text: replace displayed text (text layers only)
    """

    @property
    def id(self) -> str:
        ...

    @property
    def visible(self) -> bool:
        ...

    def set_style(self, **props: Any) -> None:
        """Set one or more style properties."""
        ...

    def clear_style(self, *names: str) -> None:
        """Remove style properties; no names clears everything."""
        ...

    def get_style(self, name: str, default: Any = None) -> Any:
        ...

    def show(self) -> None:
        ...

    def hide(self) -> None:
        ...

    def set_text(self, text: str) -> None:
        ...


class ISurfaceProvider(Protocol):
    """Lookup of surfaces by id."""

    def has(self, surface_id: str) -> bool:
        ...

    def get(self, surface_id: str) -> ISurface:
        """Return the surface or raise KeyError."""
        ...

    def ids(self) -> List[str]:
        ...

    def add(self, surface_id: str) -> ISurface:
        ...

    def add_many(self, surface_ids: Iterable[str]) -> List[ISurface]:
        ...
