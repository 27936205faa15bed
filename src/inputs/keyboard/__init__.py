from .adapters.base import IKeyboardAdapter
from .adapters.dummy import DummyKeyboardAdapter
from .factory import start_keyboard

__all__ = [
    "IKeyboardAdapter",
    "DummyKeyboardAdapter",
    "start_keyboard",
]
