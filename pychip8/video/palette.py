"""Palette definitions for CHIP-8 rendering."""

from __future__ import annotations

from typing import Sequence, Tuple

RGBColor = Tuple[int, int, int]


DEFAULT_FOREGROUND = 0xFFCC01
DEFAULT_BACKGROUND = 0x996700


def rgb_from_int(value: int) -> RGBColor:
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def parse_hex_color(text: str) -> int:
    """Parse a ``RRGGBB`` string (optionally prefixed with ``#``)."""

    cleaned = text.strip().lstrip("#")
    if len(cleaned) != 6 or any(c not in "0123456789abcdefABCDEF" for c in cleaned):
        raise ValueError(f"expected six hex digits, got {text!r}")
    return int(cleaned, 16)


DEFAULT_PALETTE: Tuple[RGBColor, RGBColor] = (
    rgb_from_int(DEFAULT_BACKGROUND),
    rgb_from_int(DEFAULT_FOREGROUND),
)


def validate_palette(palette: Sequence[RGBColor]) -> Tuple[RGBColor, RGBColor]:
    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    if any(len(color) != 3 for color in palette):
        raise ValueError("palette entries must be RGB tuples")
    return tuple(tuple(int(channel) & 0xFF for channel in color) for color in palette)  # type: ignore[return-value]
