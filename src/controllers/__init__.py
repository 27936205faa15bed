from .keyboard_controller import KeyboardController, KeyBinding, DEFAULT_KEY_MAP

__all__ = [
    'KeyboardController',
    'KeyBinding',
    'DEFAULT_KEY_MAP',
]
