"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_START, FONTSET, GLYPH_BYTES, GLYPH_COUNT, glyph_address
from .framebuffer import ROW_BYTES, SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer
from .palette import DEFAULT_PALETTE, parse_hex_color, rgb_from_int, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "FrameBuffer",
    "Renderer",
    "RenderResult",
    "FONTSET",
    "FONT_START",
    "GLYPH_BYTES",
    "GLYPH_COUNT",
    "glyph_address",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "ROW_BYTES",
    "DEFAULT_PALETTE",
    "parse_hex_color",
    "rgb_from_int",
    "validate_palette",
]
