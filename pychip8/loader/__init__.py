"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .rom import (
    MAX_ROM_SIZE,
    PROGRAM_START,
    RomLoadError,
    load_rom,
    load_rom_from_stream,
    read_rom_file,
)

__all__ = [
    "MAX_ROM_SIZE",
    "PROGRAM_START",
    "RomLoadError",
    "load_rom",
    "load_rom_from_stream",
    "read_rom_file",
]
