"""Unit tests for the CHIP-8 memory block."""

import pytest

from pychip8.bus import MEMORY_SIZE, Memory, MemoryAccessError


def test_store_and_load_every_boundary() -> None:
    memory = Memory()

    for address in (0x000, 0x001, 0x200, 0xFFE, 0xFFF):
        memory.store8(address, address & 0xFF)
        assert memory.load8(address) == address & 0xFF


def test_store_masks_to_byte() -> None:
    memory = Memory()
    memory.store8(0x300, 0x1AB)

    assert memory.load8(0x300) == 0xAB


@pytest.mark.parametrize("address", [MEMORY_SIZE, MEMORY_SIZE + 1, -1])
def test_out_of_range_access_raises(address: int) -> None:
    memory = Memory()

    with pytest.raises(MemoryAccessError):
        memory.load8(address)
    with pytest.raises(MemoryAccessError):
        memory.store8(address, 0)


def test_load16_is_big_endian() -> None:
    memory = Memory()
    memory.load_image(0x200, b"\x12\x34")

    assert memory.load16(0x200) == 0x1234


def test_load16_needs_two_bytes() -> None:
    memory = Memory()

    assert memory.load16(0xFFE) == 0x0000
    with pytest.raises(MemoryAccessError):
        memory.load16(0xFFF)


def test_load_image_rejects_overflow_without_writing() -> None:
    memory = Memory()

    with pytest.raises(MemoryAccessError):
        memory.load_image(0xFFE, b"\x01\x02\x03")

    assert memory.load8(0xFFE) == 0
    assert memory.load8(0xFFF) == 0


def test_read_block_and_dump() -> None:
    memory = Memory()
    memory.load_image(0x010, bytes(range(20)))

    assert memory.read_block(0x012, 3) == b"\x02\x03\x04"
    lines = memory.dump_lines(0x010, 20)
    assert lines[0].startswith("010: 00 01 02")
    assert lines[1] == "020: 10 11 12 13"
