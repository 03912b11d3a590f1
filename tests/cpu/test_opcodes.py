"""Tests for the four-tier instruction decoder."""

from __future__ import annotations

import pytest

from pychip8.cpu import Chip8CPU, CPUError
from pychip8.cpu.opcodes import (
    DEFAULT_INSTRUCTIONS,
    MASK_DIRECT,
    MASK_FULL,
    MASK_LAST_BYTE,
    Instruction,
    Opcode,
    OpcodeTable,
    build_decode_tables,
    decode,
    describe,
)
from pychip8.bus import Memory
from pychip8.video import FrameBuffer


def test_every_opcode_has_exactly_one_instruction() -> None:
    assert len(Opcode) == 34
    assert {instr.opcode for instr in DEFAULT_INSTRUCTIONS} == set(Opcode)
    assert len(DEFAULT_INSTRUCTIONS) == len(Opcode)


@pytest.mark.parametrize(
    "word, opcode",
    [
        (0x00E0, Opcode.CLEAR),
        (0x00EE, Opcode.RETURN),
        (0x1ABC, Opcode.JUMP),
        (0x2ABC, Opcode.CALL),
        (0x3A12, Opcode.SKIP_IF_EQUAL),
        (0x4A12, Opcode.SKIP_IF_NOT_EQUAL),
        (0x5AB0, Opcode.SKIP_IF_REGS_EQUAL),
        (0x6A12, Opcode.LOAD_IMMEDIATE),
        (0x7A12, Opcode.ADD_IMMEDIATE),
        (0x8AB0, Opcode.LOAD),
        (0x8AB1, Opcode.OR),
        (0x8AB2, Opcode.AND),
        (0x8AB3, Opcode.XOR),
        (0x8AB4, Opcode.ADD),
        (0x8AB5, Opcode.SUBTRACT),
        (0x8AB6, Opcode.SHIFT_RIGHT),
        (0x8AB7, Opcode.SUBTRACT_NEGATIVE),
        (0x8ABE, Opcode.SHIFT_LEFT),
        (0x9AB0, Opcode.SKIP_IF_REGS_NOT_EQUAL),
        (0xAABC, Opcode.LOAD_ADDRESS),
        (0xBABC, Opcode.JUMP_PLUS_V0),
        (0xCA12, Opcode.RANDOM),
        (0xDAB5, Opcode.DRAW),
        (0xEA9E, Opcode.SKIP_IF_KEY),
        (0xEAA1, Opcode.SKIP_IF_NOT_KEY),
        (0xFA07, Opcode.LOAD_DELAY),
        (0xFA0A, Opcode.LOAD_KEY),
        (0xFA15, Opcode.SET_DELAY),
        (0xFA18, Opcode.SET_SOUND),
        (0xFA1E, Opcode.ADD_TO_I),
        (0xFA29, Opcode.LOAD_DIGIT),
        (0xFA33, Opcode.STORE_BCD),
        (0xFA55, Opcode.STORE_REGS),
        (0xFA65, Opcode.LOAD_REGS),
    ],
)
def test_decode_each_opcode(word: int, opcode: Opcode) -> None:
    decoded = decode(word)

    assert decoded is not None
    assert decoded.opcode is opcode


def test_operand_fields() -> None:
    decoded = decode(0xD12F)

    assert decoded is not None
    assert (decoded.x, decoded.y, decoded.n) == (0x1, 0x2, 0xF)
    assert decoded.nn == 0x2F
    assert decoded.nnn == 0x12F


@pytest.mark.parametrize("word", [0x0000, 0x00E1, 0x0FFF, 0x5AB1, 0x8AB8, 0x9AB1, 0xEA9F, 0xFA00, 0xFFFF])
def test_unknown_words_do_not_decode(word: int) -> None:
    assert decode(word) is None


def test_describe() -> None:
    assert describe(0x3A12) == "Skip next instruction if VA == 18"
    assert describe(0xFFFF) == "Unknown instruction FFFF"


def test_table_rejects_duplicates() -> None:
    table = OpcodeTable(MASK_DIRECT)
    instruction = Instruction(Opcode.JUMP, "JP", MASK_DIRECT, "Jump")
    table.register(instruction)

    with pytest.raises(ValueError):
        table.register(instruction)


def test_instruction_validates_mask() -> None:
    with pytest.raises(ValueError):
        Instruction(Opcode.OR, "OR", MASK_DIRECT, "bits outside mask")


def test_cpu_requires_a_handler_for_every_opcode() -> None:
    class PartialCPU(Chip8CPU):
        op_draw = None

    with pytest.raises(CPUError):
        PartialCPU(Memory(), FrameBuffer())


def test_build_decode_tables_groups_by_mask() -> None:
    jump = Instruction(Opcode.JUMP, "JP", MASK_DIRECT, "Jump")
    clear = Instruction(Opcode.CLEAR, "CLS", MASK_FULL, "Clear")

    tables = build_decode_tables([jump, clear])

    assert tables[MASK_DIRECT] == {0x1000: jump}
    assert tables[MASK_FULL] == {0x00E0: clear}
    assert tables[MASK_LAST_BYTE] == {}

    with pytest.raises(ValueError):
        build_decode_tables([jump, jump])


def test_register_all_checks_table_mask() -> None:
    table = OpcodeTable(MASK_FULL)

    with pytest.raises(ValueError):
        table.register_all([Instruction(Opcode.JUMP, "JP", MASK_DIRECT, "Jump")])
