"""ROM ingestion for CHIP-8 programs."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MEMORY_SIZE, Memory, MemoryAccessError
from pychip8.cpu.core import PROGRAM_START

MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START


class RomLoadError(Exception):
    """Raised when a ROM cannot be read or does not fit into memory."""


def load_rom(data: bytes, memory: Memory, *, start: int = PROGRAM_START) -> int:
    """Copy ``data`` into ``memory`` at ``start`` and return the byte count."""

    payload = bytes(data)
    try:
        memory.load_image(start, payload)
    except MemoryAccessError as exc:
        raise RomLoadError(
            f"ROM of {len(payload)} bytes does not fit at {start:#05x} (max {len(memory) - start})"
        ) from exc
    return len(payload)


def load_rom_from_stream(stream: BinaryIO, memory: Memory, *, start: int = PROGRAM_START) -> int:
    return load_rom(stream.read(), memory, start=start)


def read_rom_file(path: Path) -> bytes:
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError as exc:
        raise RomLoadError(f"ROM file not found: {path}") from exc
    except OSError as exc:
        raise RomLoadError(f"couldn't read ROM file {path}: {exc}") from exc
    if not data:
        raise RomLoadError(f"ROM file is empty: {path}")
    if len(data) > MAX_ROM_SIZE:
        raise RomLoadError(f"ROM file {path} is {len(data)} bytes, limit is {MAX_ROM_SIZE}")
    return data
