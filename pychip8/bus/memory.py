"""Flat 4 KB memory for the CHIP-8 interpreter.

The CHIP-8 address space is a single RAM block: the built-in font lives at the
bottom, programs are loaded at ``0x200`` and everything is writable. Unlike
the CPU registers, addresses are never wrapped; any access outside the block
is reported as a :class:`MemoryAccessError`.
"""

from __future__ import annotations

from typing import Iterable

MEMORY_SIZE = 0x1000


class MemoryAccessError(Exception):
    """Raised when a read or write falls outside the 4 KB address space."""


class Memory:
    """Byte-addressable RAM with bounds-checked access."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size <= 0:
            raise ValueError("memory size must be positive")
        self._size = size
        self._data = bytearray(size)

    def __len__(self) -> int:
        return self._size

    def _check(self, address: int, length: int = 1) -> None:
        if address < 0 or address + length > self._size:
            if length == 1:
                raise MemoryAccessError(f"address {address:#05x} outside memory (0x000-{self._size - 1:#05x})")
            raise MemoryAccessError(
                f"block {address:#05x}+{length} outside memory (0x000-{self._size - 1:#05x})"
            )

    def load8(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian instruction word starting at ``address``."""

        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def read_block(self, address: int, length: int) -> bytes:
        self._check(address, length)
        return bytes(self._data[address : address + length])

    def load_image(self, address: int, data: Iterable[int]) -> None:
        """Copy ``data`` into memory, rejecting blocks that do not fit entirely."""

        payload = bytes(data)
        if not payload:
            return
        self._check(address, len(payload))
        self._data[address : address + len(payload)] = payload

    def clear(self) -> None:
        self._data[:] = bytes(self._size)

    def snapshot(self) -> bytes:
        return bytes(self._data)

    def dump_lines(self, start: int = 0, length: int | None = None) -> list[str]:
        if length is None:
            length = self._size - start
        if length <= 0:
            return []
        self._check(start, length)
        end = start + length
        lines: list[str] = []
        for addr in range(start, end, 16):
            chunk = self._data[addr : min(addr + 16, end)]
            hex_part = " ".join(f"{value:02X}" for value in chunk)
            lines.append(f"{addr:03X}: {hex_part}")
        return lines
