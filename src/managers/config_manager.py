"""
Config Manager

Loads the YAML configuration (with optional include: list), fills in missing
sections from built-in defaults, validates it and exposes a typed
PerformanceConfig.
"""

import copy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from engine.transitions import TransitionRegistry
from models.config import (
    ApiConfig,
    DisplayConfig,
    KeyboardConfig,
    PerformanceConfig,
    SurfaceConfig,
    TextLayerConfig,
    TransitionSettings,
)
from models.enums import TransitionMode
from models.errors import ConfigurationError
from models.layer import LayerParams
from models.schedule import MIN_INTERVAL_FLOOR_MS, IntervalBounds
from utils.colors import is_css_color
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent

DEFAULT_CONFIG: Dict[str, Any] = {
    "surfaces": [
        {"title": "Video 1", "url": "", "active": True},
        {"title": "Video 2", "url": "", "active": True},
        {"title": "Video 3", "url": "", "active": True},
        {"title": "Video 4", "url": "", "active": True},
    ],
    "texts": [
        {
            "content": "",
            "animation": "scroll",
            "params": {"speed": 1, "color": "#ffffff", "font_size": "48px", "position": "top"},
        },
        {
            "content": "",
            "animation": "vertical",
            "params": {"speed": 1, "color": "#00ff00", "font_size": "36px", "position": "center"},
        },
        {
            "content": "",
            "animation": "blink",
            "params": {"speed": 1, "color": "#ff00ff", "font_size": "32px", "position": "bottom"},
        },
    ],
    "transitions": {
        "interval": {"min": 2000, "max": 10000},
        "type": "random",
        "auto_mode": True,
        "default_transition": "fade",
    },
    "display": {"width": 1920, "height": 1080, "fps": 60},
    "keyboard": {"enabled": True, "custom_mappings": {}},
    "api": {"enabled": True, "host": "0.0.0.0", "port": 8000},
    "seed": None,
}

# Sections merged key by key; lists (surfaces, texts) replace wholesale
DICT_SECTIONS = ("transitions", "display", "keyboard", "api")


class ConfigManager:
    """
    YAML configuration manager

    Example:
        config_manager = ConfigManager()
        config = config_manager.load()      # PerformanceConfig

        config.transitions.auto_mode = False
        config_manager.save(config)
    """

    def __init__(self, config_path: Union[str, Path] = "config/config.yaml"):
        """
        Args:
            config_path: Path to config.yaml; relative paths resolve against src/
        """
        path = Path(config_path)
        self.config_path = path if path.is_absolute() else SRC_DIR / path
        self.data: Dict[str, Any] = {}
        self.config: Optional[PerformanceConfig] = None

    # ============================================================
    # Loading
    # ============================================================

    def load(self) -> PerformanceConfig:
        """
        Load, merge, validate and build.

        Any failure (missing file, bad YAML, validation errors) is logged and
        the built-in defaults are used instead.
        """
        try:
            raw = self._read_yaml(self.config_path)
            if "include" in raw:
                log.info("Using include-based configuration")
                raw = self._load_with_includes(raw["include"], self.config_path.parent)
            data = self.merge_with_defaults(raw)

            errors = self.validate(data)
            if errors:
                raise ConfigurationError("Invalid configuration", details={"errors": errors})

            config = self.build(data)
            self.data = data
            log.info(f"Loaded {self.config_path.name}", surfaces=len(data["surfaces"]), texts=len(data["texts"]))

        except (OSError, yaml.YAMLError, ConfigurationError, ValueError, TypeError, KeyError, AttributeError) as ex:
            log.error("Failed to load config", error=str(ex), error_type=type(ex).__name__)
            if isinstance(ex, ConfigurationError):
                for message in ex.details.get("errors", []):
                    log.error(f"  {message}")
            log.warn("Falling back to built-in defaults")
            self.data = copy.deepcopy(DEFAULT_CONFIG)
            config = self.build(self.data)

        self.config = config
        return self.config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path.name} must contain a mapping")
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """Merge several YAML files, later files winning per top-level key"""
        merged: Dict[str, Any] = {}
        for filename in include_list:
            file_data = self._read_yaml(config_dir / filename)
            merged.update(file_data)
            log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
        return merged

    # ============================================================
    # Merge / validate / build
    # ============================================================

    @staticmethod
    def merge_with_defaults(raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Fill in missing sections and keys from DEFAULT_CONFIG"""
        raw = raw or {}
        merged = copy.deepcopy(DEFAULT_CONFIG)
        for key, value in raw.items():
            if key in DICT_SECTIONS and isinstance(value, dict):
                merged[key].update(copy.deepcopy(value))
            else:
                merged[key] = copy.deepcopy(value)

        interval = (raw.get("transitions") or {}).get("interval")
        if isinstance(interval, dict):
            merged["transitions"]["interval"] = {**DEFAULT_CONFIG["transitions"]["interval"], **interval}
        return merged

    @staticmethod
    def validate(data: Dict[str, Any]) -> List[str]:
        """Return a list of human-readable problems (empty when valid)"""
        errors: List[str] = []

        surfaces = data.get("surfaces")
        if not isinstance(surfaces, list) or not surfaces:
            errors.append("surfaces: at least one surface is required")

        texts = data.get("texts")
        if not isinstance(texts, list):
            errors.append("texts: must be a list")
            texts = []
        for i, text in enumerate(texts):
            if not isinstance(text, dict):
                errors.append(f"Text {i + 1}: must be a mapping")
                continue
            params = text.get("params") or {}
            speed = params.get("speed")
            if speed is not None and (not isinstance(speed, (int, float)) or not 0 <= speed <= 10):
                errors.append(f"Text {i + 1}: speed must be between 0 and 10")
            color = params.get("color")
            if color is not None and not is_css_color(color):
                errors.append(f"Text {i + 1}: '{color}' is not a CSS colour")

        transitions = data.get("transitions") or {}
        interval = transitions.get("interval") or {}
        lo, hi = interval.get("min"), interval.get("max")
        if not isinstance(lo, (int, float)) or not isinstance(hi, (int, float)):
            errors.append("Transition interval: min and max must be numbers")
        else:
            if lo >= hi:
                errors.append("Transition interval: min must be less than max")
            if lo < MIN_INTERVAL_FLOOR_MS:
                errors.append(f"Transition interval: min must be at least {MIN_INTERVAL_FLOOR_MS}ms")

        mode = transitions.get("type")
        if mode not in [m.value for m in TransitionMode]:
            errors.append(f"Transition type: '{mode}' is not one of {[m.value for m in TransitionMode]}")

        default = transitions.get("default_transition")
        if default not in TransitionRegistry.BUILTINS:
            errors.append(f"Default transition: '{default}' is not one of {list(TransitionRegistry.BUILTINS)}")

        return errors

    @staticmethod
    def build(data: Dict[str, Any]) -> PerformanceConfig:
        surfaces = [
            SurfaceConfig(
                id=s.get("id") or f"player-{i}",
                title=s.get("title") or f"Video {i + 1}",
                url=s.get("url") or "",
                active=bool(s.get("active", True)),
            )
            for i, s in enumerate(data["surfaces"])
        ]

        texts = [
            TextLayerConfig(
                content=t.get("content") or "",
                animation=t.get("animation") or "scroll",
                params=LayerParams.from_dict(t.get("params")),
            )
            for t in data["texts"]
        ]

        tr = data["transitions"]
        transitions = TransitionSettings(
            interval=IntervalBounds(tr["interval"]["min"], tr["interval"]["max"]),
            mode=TransitionMode(tr["type"]),
            auto_mode=bool(tr["auto_mode"]),
            default_transition=tr["default_transition"],
        )

        kb = data["keyboard"]
        api = data["api"]
        return PerformanceConfig(
            surfaces=surfaces,
            texts=texts,
            transitions=transitions,
            display=DisplayConfig(**data["display"]),
            keyboard=KeyboardConfig(enabled=bool(kb["enabled"]), custom_mappings=dict(kb["custom_mappings"] or {})),
            api=ApiConfig(enabled=bool(api["enabled"]), host=api["host"], port=int(api["port"])),
            seed=data.get("seed"),
        )

    # ============================================================
    # Saving
    # ============================================================

    @staticmethod
    def to_dict(config: PerformanceConfig) -> Dict[str, Any]:
        return {
            "surfaces": [
                {"id": s.id, "title": s.title, "url": s.url, "active": s.active}
                for s in config.surfaces
            ],
            "texts": [
                {
                    "content": t.content,
                    "animation": t.animation,
                    "params": {
                        "speed": t.params.speed,
                        "color": t.params.color,
                        "font_size": t.params.font_size,
                        "position": t.params.position.value,
                    },
                }
                for t in config.texts
            ],
            "transitions": {
                "interval": {
                    "min": config.transitions.interval.min_ms,
                    "max": config.transitions.interval.max_ms,
                },
                "type": config.transitions.mode.value,
                "auto_mode": config.transitions.auto_mode,
                "default_transition": config.transitions.default_transition,
            },
            "display": {
                "width": config.display.width,
                "height": config.display.height,
                "fps": config.display.fps,
            },
            "keyboard": {
                "enabled": config.keyboard.enabled,
                "custom_mappings": dict(config.keyboard.custom_mappings),
            },
            "api": {"enabled": config.api.enabled, "host": config.api.host, "port": config.api.port},
            "seed": config.seed,
        }

    def save(self, config: Optional[PerformanceConfig] = None, path: Union[str, Path, None] = None) -> Path:
        """Write the configuration back as YAML"""
        config = config or self.config
        if config is None:
            raise ConfigurationError("Nothing to save: load() has not been called")
        target = Path(path) if path is not None else self.config_path
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(config), f, sort_keys=False, allow_unicode=True)
        log.info(f"Config saved to {target}")
        return target

    def reset_to_default(self) -> PerformanceConfig:
        self.data = copy.deepcopy(DEFAULT_CONFIG)
        self.config = self.build(self.data)
        log.info("Config reset to defaults")
        return self.config
