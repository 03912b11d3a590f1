"""Input handling for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, KEYMAP, Keypad, key_for_name

__all__ = [
    "KEY_COUNT",
    "KEYMAP",
    "Keypad",
    "key_for_name",
]
