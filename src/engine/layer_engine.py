"""
Layer Engine

Owns the fixed set of AnimationLayers and routes index-addressed
operations to them. An index outside the set raises AddressingError
before anything is touched.
"""

import random
from typing import Any, Dict, List, Optional

from engine.animation_layer import AnimationLayer
from engine.clock import Clock
from models.animation_params import SPEED
from models.config import DisplayConfig
from models.errors import AddressingError
from models.layer import LayerParams
from surfaces.surface_interface import ISurfaceProvider
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.LAYER)


class LayerEngine:
    """
    Fixed set of text layers (3 by default)

    Each layer gets its own Random derived from the engine rng, so one seed
    reproduces every layer's phase and glitch pattern.
    """

    DEFAULT_LAYER_COUNT = 3
    SURFACE_PREFIX = "text-layer-"

    def __init__(
        self,
        surfaces: ISurfaceProvider,
        clock: Clock,
        rng: Optional[random.Random] = None,
        viewport: Optional[DisplayConfig] = None,
        layer_count: int = DEFAULT_LAYER_COUNT,
    ):
        self.surfaces = surfaces
        self.clock = clock
        self.rng = rng or random.Random()
        self.viewport = viewport or DisplayConfig()

        self.layers: List[AnimationLayer] = []
        for i in range(layer_count):
            surface = surfaces.add(f"{self.SURFACE_PREFIX}{i}")
            layer_rng = random.Random(self.rng.getrandbits(64))
            self.layers.append(AnimationLayer(i, surface, clock, layer_rng, self.viewport))

        log.info("LayerEngine initialized", layers=layer_count)

    # ============================================================
    # Addressing
    # ============================================================

    def __len__(self) -> int:
        return len(self.layers)

    def layer(self, index: int) -> AnimationLayer:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self.layers):
            raise AddressingError("layer index", index, list(range(len(self.layers))))
        return self.layers[index]

    # ============================================================
    # Operations
    # ============================================================

    def add_or_update_layer(
        self,
        index: int,
        content: str,
        kind=None,
        params: Optional[LayerParams] = None,
    ) -> AnimationLayer:
        """
        Set content and params; non-empty content shows the layer and
        (re)starts its animation, empty content hides and stops it.
        """
        layer = self.layer(index)

        layer.set_content(content)
        if params is not None:
            layer.set_params(params)

        if content:
            layer.state.visible = True
            layer.surface.show()
            target = kind if kind is not None else layer.kind
            if target is not None:
                layer.start(target)
        else:
            layer.set_visible(False)

        return layer

    def toggle_layer(self, index: int) -> bool:
        layer = self.layer(index)
        visible = layer.toggle()
        log.info(f"Layer {index} {'shown' if visible else 'hidden'}")
        return visible

    def set_animation(self, index: int, kind, params: Optional[LayerParams] = None) -> bool:
        return self.layer(index).start(kind, params)

    def set_params(self, index: int, **changes: Any) -> LayerParams:
        return self.layer(index).set_params(**changes)

    def stop_layer(self, index: int) -> bool:
        return self.layer(index).stop()

    def reset_animations(self) -> int:
        """Restart every visible layer that has an animation kind; returns how many"""
        count = 0
        for layer in self.layers:
            if layer.kind is not None and layer.visible:
                layer.start(layer.kind)
                count += 1
        log.info("Animations reset", restarted=count)
        return count

    def clear_layers(self) -> None:
        for layer in self.layers:
            layer.clear()
        log.info("All layers cleared")

    def scale_text_speed(self, multiplier: float) -> List[float]:
        """Multiply every layer's speed (clamped to [0.1, 10]); restarts running kinds"""
        speeds = []
        for layer in self.layers:
            new_speed = SPEED.scale(layer.params.speed, multiplier)
            layer.set_params(speed=new_speed)
            if layer.kind is not None and layer.visible:
                layer.start(layer.kind)
            speeds.append(layer.params.speed)
        log.info("Text speed scaled", multiplier=multiplier, speeds=[round(s, 2) for s in speeds])
        return speeds

    def layer_visibility(self) -> List[bool]:
        return [layer.visible for layer in self.layers]

    def stop_all(self) -> int:
        return sum(1 for layer in self.layers if layer.stop())

    def snapshot(self) -> List[Dict[str, Any]]:
        return [layer.snapshot() for layer in self.layers]
