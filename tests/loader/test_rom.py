"""Tests for CHIP-8 ROM ingestion."""

from __future__ import annotations

import io

import pytest

from pychip8.bus import Memory
from pychip8.loader import MAX_ROM_SIZE, RomLoadError, load_rom, load_rom_from_stream, read_rom_file


def test_load_rom_copies_to_program_start() -> None:
    memory = Memory()

    count = load_rom(b"\x00\xE0\x12\x00", memory)

    assert count == 4
    assert memory.load16(0x200) == 0x00E0
    assert memory.load16(0x202) == 0x1200
    assert memory.load8(0x1FF) == 0


def test_load_rom_from_stream() -> None:
    memory = Memory()

    load_rom_from_stream(io.BytesIO(b"\xA2\x2A"), memory)

    assert memory.load16(0x200) == 0xA22A


def test_oversized_rom_raises_before_writing() -> None:
    memory = Memory()

    with pytest.raises(RomLoadError):
        load_rom(b"\xFF" * (MAX_ROM_SIZE + 1), memory)

    assert memory.load8(0x200) == 0


def test_read_rom_file(tmp_path) -> None:
    rom_path = tmp_path / "game.ch8"
    rom_path.write_bytes(b"\x60\x01")

    assert read_rom_file(rom_path) == b"\x60\x01"


def test_read_rom_file_errors(tmp_path) -> None:
    with pytest.raises(RomLoadError):
        read_rom_file(tmp_path / "missing.ch8")

    empty = tmp_path / "empty.ch8"
    empty.write_bytes(b"")
    with pytest.raises(RomLoadError):
        read_rom_file(empty)

    large = tmp_path / "large.ch8"
    large.write_bytes(bytes(MAX_ROM_SIZE + 1))
    with pytest.raises(RomLoadError):
        read_rom_file(large)
