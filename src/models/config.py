"""
Configuration models

Typed view over the YAML configuration. The engine treats these purely as
initial-state input; ConfigManager owns loading, defaults and validation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.enums import TransitionMode
from models.layer import LayerParams
from models.schedule import IntervalBounds


@dataclass
class SurfaceConfig:
    """One background surface slot (video player)"""
    id: str
    title: str = ""
    url: str = ""
    active: bool = True


@dataclass
class TextLayerConfig:
    """Initial content and animation of one text layer"""
    content: str = ""
    animation: str = "scroll"
    params: LayerParams = field(default_factory=LayerParams)


@dataclass
class TransitionSettings:
    interval: IntervalBounds = field(default_factory=IntervalBounds)
    mode: TransitionMode = TransitionMode.RANDOM
    auto_mode: bool = True
    default_transition: str = "fade"


@dataclass
class DisplayConfig:
    """Viewport used by absolute-position recipes and scroll wrapping"""
    width: int = 1920
    height: int = 1080
    fps: int = 60


@dataclass
class KeyboardConfig:
    enabled: bool = True
    custom_mappings: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ApiConfig:
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class PerformanceConfig:
    surfaces: List[SurfaceConfig] = field(default_factory=list)
    texts: List[TextLayerConfig] = field(default_factory=list)
    transitions: TransitionSettings = field(default_factory=TransitionSettings)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keyboard: KeyboardConfig = field(default_factory=KeyboardConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    seed: Optional[int] = None
