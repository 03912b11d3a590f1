"""Sprite blitting tests for the packed framebuffer."""

from __future__ import annotations

import pytest

from pychip8.video import FrameBuffer, SCREEN_HEIGHT, SCREEN_WIDTH


def lit_columns(fb: FrameBuffer, y: int) -> list[int]:
    return [x for x in range(SCREEN_WIDTH) if fb.get_pixel(x, y)]


def test_first_draw_has_no_collision() -> None:
    fb = FrameBuffer()

    assert fb.draw_sprite(b"\xF0\x90\xF0", 3, 4) is False
    assert lit_columns(fb, 4) == [3, 4, 5, 6]
    assert lit_columns(fb, 5) == [3, 6]


def test_second_draw_erases_and_collides() -> None:
    fb = FrameBuffer()
    sprite = b"\xFF\x81\xFF"

    fb.draw_sprite(sprite, 10, 7)
    assert fb.draw_sprite(sprite, 10, 7) is True
    assert fb.lit_pixels() == 0


def test_unaligned_sprite_spans_two_bytes() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(b"\xFF", 5, 0)

    assert lit_columns(fb, 0) == list(range(5, 13))


def test_sprite_wraps_horizontally_on_same_row() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(b"\xFF", 60, 2)

    assert lit_columns(fb, 2) == [0, 1, 2, 3, 60, 61, 62, 63]
    assert lit_columns(fb, 3) == []


def test_wrapped_part_reports_collision() -> None:
    fb = FrameBuffer()
    assert fb.draw_sprite(b"\x80", 1, 0) is False

    # Columns 58..63 then 0..1; column 1 was lit.
    assert fb.draw_sprite(b"\xFF", 58, 0) is True
    assert lit_columns(fb, 0) == [0, 58, 59, 60, 61, 62, 63]


def test_rows_past_bottom_are_clipped() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(b"\xFF\xFF\xFF\xFF", 0, 31)

    assert lit_columns(fb, 31) == list(range(8))
    for y in range(0, 3):
        assert lit_columns(fb, y) == []


def test_start_coordinates_wrap() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(b"\x80", SCREEN_WIDTH + 2, SCREEN_HEIGHT + 1)

    assert fb.get_pixel(2, 1)


def test_clear_and_snapshot() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(b"\x80", 0, 0)
    snap = fb.snapshot()

    fb.clear()

    assert snap[0] == 0x80
    assert next(iter(fb.rows())) == bytes(8)
    assert fb.snapshot() == bytes(256)


def test_get_pixel_bounds() -> None:
    fb = FrameBuffer()

    with pytest.raises(IndexError):
        fb.get_pixel(SCREEN_WIDTH, 0)
