"""Logical 16-key CHIP-8 keypad and its physical keyboard mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Physical layout:
#   1 2 3 4        1 2 3 C
#   Q W E R   ->   4 5 6 D
#   A S D F        7 8 9 E
#   Z X C V        A 0 B F
KEYMAP: Mapping[str, int] = {
    "x": 0x0,
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "z": 0xA,
    "c": 0xB,
    "4": 0xC,
    "r": 0xD,
    "f": 0xE,
    "v": 0xF,
}


def key_for_name(name: str) -> Optional[int]:
    """Return the logical key for a pygame key name, or ``None`` if unmapped."""

    return KEYMAP.get(name.lower())


@dataclass
class Keypad:
    """Tracks held keys and keys pressed since the last frame boundary."""

    _held: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    _fresh: set[int] = field(default_factory=set)

    def press(self, key: int) -> None:
        self._validate(key)
        if not self._held[key]:
            self._fresh.add(key)
        self._held[key] = True
        if debug_enabled("input"):
            debug_log("input", "keypad_press=%X", key)

    def release(self, key: int) -> None:
        self._validate(key)
        self._held[key] = False
        if debug_enabled("input"):
            debug_log("input", "keypad_release=%X", key)

    def is_held(self, key: int) -> bool:
        self._validate(key)
        return self._held[key]

    def fresh_press(self) -> Optional[int]:
        """Lowest key pressed since the last :meth:`end_frame`, if any."""

        if not self._fresh:
            return None
        return min(self._fresh)

    def end_frame(self) -> None:
        self._fresh.clear()

    def reset(self) -> None:
        self._held = [False] * KEY_COUNT
        self._fresh.clear()

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._held)

    @staticmethod
    def _validate(key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"keypad key out of range: {key}")
