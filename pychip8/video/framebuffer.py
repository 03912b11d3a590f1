"""Packed 1-bit framebuffer with CHIP-8 sprite blitting."""

from __future__ import annotations

from typing import Iterable, Iterator

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
ROW_BYTES = SCREEN_WIDTH // 8


class FrameBuffer:
    """64x32 monochrome bitmap stored as 8 pixels per byte, row-major.

    Bit 7 of each byte is the leftmost pixel. Sprites wrap horizontally
    within their row and are clipped at the bottom edge.
    """

    def __init__(self) -> None:
        self._data = bytearray(ROW_BYTES * SCREEN_HEIGHT)

    def clear(self) -> None:
        self._data[:] = bytes(len(self._data))

    def draw_sprite(self, sprite: Iterable[int], x: int, y: int) -> bool:
        """XOR ``sprite`` rows onto the screen; return True on collision."""

        x %= SCREEN_WIDTH
        y %= SCREEN_HEIGHT
        collision = False
        for row, value in enumerate(sprite):
            if self._blit_row(value & 0xFF, x, y + row):
                collision = True
        return collision

    def _blit_row(self, value: int, x: int, y: int) -> bool:
        if y >= SCREEN_HEIGHT:
            return False

        base = y * ROW_BYTES
        first = base + x // 8
        second = base + (x // 8 + 1) % ROW_BYTES
        shift = x % 8

        old_first = self._data[first]
        old_second = self._data[second]

        self._data[first] = old_first ^ (value >> shift)
        self._data[second] ^= (value << (8 - shift)) & 0xFF

        # A pixel was erased when a bit set before is clear now.
        erased = (old_first & ~self._data[first]) | (old_second & ~self._data[second])
        return erased != 0

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT):
            raise IndexError(f"pixel ({x}, {y}) outside {SCREEN_WIDTH}x{SCREEN_HEIGHT}")
        return bool(self._data[y * ROW_BYTES + x // 8] & (0x80 >> (x % 8)))

    def rows(self) -> Iterator[bytes]:
        for y in range(SCREEN_HEIGHT):
            yield bytes(self._data[y * ROW_BYTES : (y + 1) * ROW_BYTES])

    def snapshot(self) -> bytes:
        return bytes(self._data)

    def lit_pixels(self) -> int:
        return sum(bin(value).count("1") for value in self._data)
