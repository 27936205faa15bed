from __future__ import annotations
from typing import Any, Dict, Iterable, List

from surfaces.surface_interface import ISurface, ISurfaceProvider


class VirtualSurface(ISurface):
    """In-memory surface: records style, visibility and text"""

    def __init__(self, surface_id: str, visible: bool = False):
        self._id = surface_id
        self._visible = visible
        self._style: Dict[str, Any] = {}
        self.text = ""
        self.writes = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def style(self) -> Dict[str, Any]:
        return dict(self._style)

    def set_style(self, **props: Any) -> None:
        self._style.update(props)
        self.writes += 1

    def clear_style(self, *names: str) -> None:
        if not names:
            self._style.clear()
        else:
            for name in names:
                self._style.pop(name, None)
        self.writes += 1

    def get_style(self, name: str, default: Any = None) -> Any:
        return self._style.get(name, default)

    def show(self) -> None:
        self._visible = True

    def hide(self) -> None:
        self._visible = False

    def set_text(self, text: str) -> None:
        self.text = text

    def snapshot(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "visible": self._visible,
            "text": self.text,
            "style": self.style,
        }

    def __repr__(self) -> str:
        return f"VirtualSurface({self._id!r}, visible={self._visible})"


class VirtualSurfaceProvider(ISurfaceProvider):

    def __init__(self, surface_ids: Iterable[str] = ()):
        self._surfaces: Dict[str, VirtualSurface] = {}
        self.add_many(surface_ids)

    def has(self, surface_id: str) -> bool:
        return surface_id in self._surfaces

    def get(self, surface_id: str) -> VirtualSurface:
        return self._surfaces[surface_id]

    def ids(self) -> List[str]:
        return list(self._surfaces.keys())

    def add(self, surface_id: str) -> VirtualSurface:
        if surface_id not in self._surfaces:
            self._surfaces[surface_id] = VirtualSurface(surface_id)
        return self._surfaces[surface_id]

    def add_many(self, surface_ids: Iterable[str]) -> List[VirtualSurface]:
        return [self.add(sid) for sid in surface_ids]

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        return {sid: s.snapshot() for sid, s in self._surfaces.items()}
