"""Tests for the logical CHIP-8 keypad."""

from __future__ import annotations

import pytest

from pychip8.io import KEYMAP, Keypad, key_for_name


def test_press_and_release() -> None:
    keypad = Keypad()

    keypad.press(0xA)
    assert keypad.is_held(0xA)

    keypad.release(0xA)
    assert not keypad.is_held(0xA)


def test_fresh_press_is_lowest_and_cleared_per_frame() -> None:
    keypad = Keypad()
    keypad.press(0xC)
    keypad.press(0x4)

    assert keypad.fresh_press() == 0x4

    keypad.end_frame()
    assert keypad.fresh_press() is None
    assert keypad.is_held(0xC)


def test_holding_a_key_does_not_repeat_fresh_press() -> None:
    keypad = Keypad()
    keypad.press(0x1)
    keypad.end_frame()

    keypad.press(0x1)

    assert keypad.fresh_press() is None


def test_invalid_key_rejected() -> None:
    keypad = Keypad()

    with pytest.raises(ValueError):
        keypad.press(16)
    with pytest.raises(ValueError):
        keypad.is_held(-1)


def test_reset_clears_state() -> None:
    keypad = Keypad()
    keypad.press(0x2)
    keypad.reset()

    assert keypad.snapshot() == (False,) * 16
    assert keypad.fresh_press() is None


def test_keymap_covers_all_keys() -> None:
    assert sorted(KEYMAP.values()) == list(range(16))
    assert key_for_name("X") == 0x0
    assert key_for_name("v") == 0xF
    assert key_for_name("space") is None
