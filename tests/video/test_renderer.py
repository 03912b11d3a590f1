"""Unit tests for the CHIP-8 video renderer."""

from __future__ import annotations

import pytest

from pychip8.video import FrameBuffer, Renderer, parse_hex_color, rgb_from_int, validate_palette

BG = (0x10, 0x20, 0x30)
FG = (0xF0, 0xE0, 0xD0)


def test_render_lit_pixel() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(b"\xC0", 0, 0)
    result = Renderer((BG, FG)).render(fb.snapshot())

    assert (result.width, result.height) == (64, 32)
    assert result.get_pixel(0, 0) == FG
    assert result.get_pixel(1, 0) == FG
    assert result.get_pixel(2, 0) == BG
    assert result.get_pixel(0, 1) == BG


def test_render_scale_factor() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(b"\x80", 63, 31)
    result = Renderer((BG, FG)).render(fb.snapshot(), scale=3)

    assert (result.width, result.height) == (192, 96)
    assert result.get_pixel(189, 93) == FG
    assert result.get_pixel(191, 95) == FG
    assert result.get_pixel(188, 95) == BG


def test_render_rejects_wrong_size() -> None:
    with pytest.raises(ValueError):
        Renderer().render(b"\x00" * 10)


def test_parse_hex_color() -> None:
    assert parse_hex_color("ffcc01") == 0xFFCC01
    assert parse_hex_color("#996700") == 0x996700
    assert rgb_from_int(0xFFCC01) == (0xFF, 0xCC, 0x01)
    with pytest.raises(ValueError):
        parse_hex_color("fcc01")
    with pytest.raises(ValueError):
        parse_hex_color("gg0000")


def test_validate_palette_requires_two_rgb_entries() -> None:
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0)])
    assert validate_palette([(256, 0, 0), (1, 2, 3)]) == ((0, 0, 0), (1, 2, 3))
