"""
Keyboard Controller

Maps KeyboardKeyPressEvents to PerformanceService actions. Actions run as
tracked tasks so a slow transition never blocks the input adapter; errors
from an action are logged and never reach the adapter.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, TYPE_CHECKING

from lifecycle.task_registry import TaskCategory, TaskHandle, spawn
from models.enums import EffectKind
from models.errors import PerformanceError
from models.events import EventType, KeyboardKeyPressEvent
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.service_container import ServiceContainer

log = get_logger().for_category(LogCategory.INPUT)

# Auto-advance: UP shortens the interval, DOWN lengthens it
INTERVAL_FASTER = 0.8
INTERVAL_SLOWER = 1.2
# Text: RIGHT speeds layers up, LEFT slows them down
TEXT_FASTER = 1.2
TEXT_SLOWER = 0.8


@dataclass(frozen=True)
class KeyBinding:
    action: str
    param: Any = None
    description: str = ""


DEFAULT_KEY_MAP: Dict[str, KeyBinding] = {
    # Background
    "1": KeyBinding("switch_surface", 0, "Switch to video 1"),
    "2": KeyBinding("switch_surface", 1, "Switch to video 2"),
    "3": KeyBinding("switch_surface", 2, "Switch to video 3"),
    "4": KeyBinding("switch_surface", 3, "Switch to video 4"),
    "SPACE": KeyBinding("random_switch", description="Random switch"),
    "ENTER": KeyBinding("next_surface", description="Next video"),

    # Effects
    "Q": KeyBinding("glitch_effect", description="Glitch effect"),
    "W": KeyBinding("flash_effect", description="Flash effect"),
    "E": KeyBinding("color_shift", description="Colour shift"),
    "X": KeyBinding("blackout", description="Blackout"),
    "C": KeyBinding("whiteout", description="Whiteout"),

    # Text
    "A": KeyBinding("toggle_text", 0, "Toggle text 1"),
    "S": KeyBinding("toggle_text", 1, "Toggle text 2"),
    "D": KeyBinding("toggle_text", 2, "Toggle text 3"),
    "R": KeyBinding("reset_animations", description="Reset animations"),

    # System
    "M": KeyBinding("toggle_mode", description="Toggle auto / manual"),
    "H": KeyBinding("toggle_help", description="Show key bindings"),

    # Speed
    "UP": KeyBinding("increase_speed", description="Switch faster"),
    "DOWN": KeyBinding("decrease_speed", description="Switch slower"),
    "LEFT": KeyBinding("decrease_text_speed", description="Text slower"),
    "RIGHT": KeyBinding("increase_text_speed", description="Text faster"),
}

# Browser-style key names accepted in custom mappings
KEY_ALIASES = {
    " ": "SPACE",
    "ARROWUP": "UP",
    "ARROWDOWN": "DOWN",
    "ARROWLEFT": "LEFT",
    "ARROWRIGHT": "RIGHT",
    "RETURN": "ENTER",
    "ESC": "ESCAPE",
}


def normalize_key(key: str) -> str:
    if key == " ":
        return "SPACE"
    upper = key.strip().upper()
    return KEY_ALIASES.get(upper, upper)


class KeyboardController:
    """
    Key → action dispatcher

    Example:
        controller = KeyboardController(services, custom_mappings={"N": "next_surface"})
        await event_bus.publish(KeyboardKeyPressEvent("SPACE"))   # random switch
    """

    def __init__(self, services: "ServiceContainer", custom_mappings: Optional[Dict[str, Any]] = None):
        self.services = services
        self.performance = services.performance
        self.enabled = True
        self.help_visible = False
        self._pending: List[TaskHandle] = []

        self._actions: Dict[str, Callable[[Any], Awaitable[Any]]] = {
            "switch_surface": self._switch_surface,
            "random_switch": lambda _: self.performance.random_switch(),
            "next_surface": lambda _: self.performance.next_surface(),
            "glitch_effect": lambda _: self._effect(EffectKind.GLITCH),
            "flash_effect": lambda _: self._effect(EffectKind.FLASH),
            "color_shift": lambda _: self._effect(EffectKind.COLOR_SHIFT),
            "blackout": lambda _: self._effect(EffectKind.BLACKOUT),
            "whiteout": lambda _: self._effect(EffectKind.WHITEOUT),
            "toggle_text": self._toggle_text,
            "reset_animations": lambda _: self.performance.reset_animations(),
            "toggle_mode": lambda _: self.performance.toggle_auto_advance(),
            "toggle_help": self._toggle_help,
            "increase_speed": lambda _: self.performance.scale_interval(INTERVAL_FASTER),
            "decrease_speed": lambda _: self.performance.scale_interval(INTERVAL_SLOWER),
            "increase_text_speed": lambda _: self.performance.adjust_text_speed(TEXT_FASTER),
            "decrease_text_speed": lambda _: self.performance.adjust_text_speed(TEXT_SLOWER),
        }

        self.key_map: Dict[str, KeyBinding] = dict(DEFAULT_KEY_MAP)
        if custom_mappings:
            self.update_mappings(custom_mappings)

        services.event_bus.subscribe(EventType.KEYBOARD_KEYPRESS, self.handle_key)
        log.info("KeyboardController subscribed to EventBus", bindings=len(self.key_map))

    # ============================================================
    # Mappings
    # ============================================================

    @property
    def actions(self) -> List[str]:
        return list(self._actions.keys())

    def register_key(self, key: str, action: str, param: Any = None, description: str = "") -> None:
        if action not in self._actions:
            raise ValueError(f"Unknown keyboard action '{action}'")
        self.key_map[normalize_key(key)] = KeyBinding(action, param, description)
        log.debug(f"Key registered: {normalize_key(key)} -> {action}")

    def update_mappings(self, mappings: Dict[str, Any]) -> None:
        """
        Defaults plus overrides. Values are an action name or a mapping
        with action / param / description. Unknown actions are skipped.
        """
        self.key_map = dict(DEFAULT_KEY_MAP)
        for key, value in mappings.items():
            if isinstance(value, str):
                value = {"action": value}
            try:
                self.register_key(
                    str(key),
                    value.get("action"),
                    value.get("param"),
                    value.get("description", ""),
                )
            except (ValueError, AttributeError) as e:
                log.warn(f"Ignoring key mapping '{key}': {e}")

    def reset_to_default(self) -> None:
        self.key_map = dict(DEFAULT_KEY_MAP)

    def keys_for_action(self, action: str) -> List[str]:
        return [key for key, binding in self.key_map.items() if binding.action == action]

    def help_lines(self) -> List[str]:
        return [f"{key:>6}  {binding.description or binding.action}" for key, binding in self.key_map.items()]

    def enable(self) -> None:
        self.enabled = True
        log.info("Keyboard enabled")

    def disable(self) -> None:
        self.enabled = False
        log.info("Keyboard disabled")

    # ============================================================
    # Dispatch
    # ============================================================

    def handle_key(self, event: KeyboardKeyPressEvent) -> Optional[TaskHandle]:
        """Look up the binding and run its action in the background"""
        if not self.enabled or "CTRL" in event.modifiers:
            return None

        key = normalize_key(event.key)
        binding = self.key_map.get(key)
        if binding is None:
            log.debug(f"Unbound key: {key}")
            return None

        log.info(f"Key {key} → {binding.action}", param=binding.param)
        handle = spawn(
            self._run_action(binding),
            category=TaskCategory.GENERAL,
            description=f"Key {key} → {binding.action}",
        )
        self._pending = [h for h in self._pending if not h.done]
        self._pending.append(handle)
        return handle

    async def _run_action(self, binding: KeyBinding) -> None:
        try:
            await self._actions[binding.action](binding.param)
        except PerformanceError as e:
            log.warn(f"{binding.action} rejected: {e.message}", code=e.code)
        except Exception as e:
            log.error(f"{binding.action} failed: {e}")

    async def wait_idle(self) -> None:
        """Wait for every dispatched action to finish"""
        for handle in list(self._pending):
            await handle.wait()
        self._pending = [h for h in self._pending if not h.done]

    # ============================================================
    # Actions
    # ============================================================

    async def _switch_surface(self, index: int) -> None:
        await self.performance.switch_to(index)

    async def _toggle_text(self, index: int) -> None:
        await self.performance.toggle_layer(index)

    async def _effect(self, kind: EffectKind) -> None:
        await self.performance.trigger_effect(kind)

    async def _toggle_help(self, _param: Any = None) -> None:
        self.help_visible = not self.help_visible
        if self.help_visible:
            log.info("Key bindings", details=self.help_lines())
