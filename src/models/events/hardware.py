"""Input events (keyboard)"""

from dataclasses import dataclass
from typing import List, Optional

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource, KeyboardSource


@dataclass(init=False)
class KeyboardKeyPressEvent(Event):
    """Keyboard key press event"""
    key: str
    modifiers: List[str]
    keyboard: KeyboardSource

    def __init__(self, key: str, modifiers: Optional[List[str]] = None, keyboard: KeyboardSource = KeyboardSource.STDIN):
        """
        Args:
            key: The key that was pressed ('A', 'SPACE', 'UP', ...)
            modifiers: List of modifier keys (e.g., ['CTRL', 'SHIFT'])
            keyboard: Where the input came from
        """
        super().__init__(
            type=EventType.KEYBOARD_KEYPRESS,
            source=EventSource.INPUT,
        )
        self.key = key
        self.modifiers = modifiers or []
        self.keyboard = keyboard
