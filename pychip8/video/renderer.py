"""Convert framebuffer snapshots into RGB images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import ROW_BYTES, SCREEN_HEIGHT, SCREEN_WIDTH
from .palette import DEFAULT_PALETTE, RGBColor, validate_palette


@dataclass
class RenderResult:
    """RGB888 image produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale a packed 64x32 bitmap into an RGB image with a two-colour palette."""

    def __init__(self, palette: Sequence[RGBColor] = DEFAULT_PALETTE) -> None:
        background, foreground = validate_palette(palette)
        self._background = bytes(background)
        self._foreground = bytes(foreground)

    def render(self, frame: bytes, *, scale: int = 1) -> RenderResult:
        if len(frame) != ROW_BYTES * SCREEN_HEIGHT:
            raise ValueError(f"frame must be {ROW_BYTES * SCREEN_HEIGHT} bytes, got {len(frame)}")
        scale = max(1, int(scale))
        on = self._foreground * scale
        off = self._background * scale

        out = bytearray()
        for y in range(SCREEN_HEIGHT):
            row = frame[y * ROW_BYTES : (y + 1) * ROW_BYTES]
            line = bytearray()
            for x in range(SCREEN_WIDTH):
                line += on if row[x // 8] & (0x80 >> (x % 8)) else off
            out += bytes(line) * scale

        return RenderResult(SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale, bytes(out))
