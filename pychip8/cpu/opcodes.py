"""Opcode metadata and the four-tier CHIP-8 instruction decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, Iterable, Mapping, Sequence


class Opcode(Enum):
    """Every instruction of the base CHIP-8 set, valued by its masked pattern."""

    CLEAR = 0x00E0
    RETURN = 0x00EE
    JUMP = 0x1000
    CALL = 0x2000
    SKIP_IF_EQUAL = 0x3000
    SKIP_IF_NOT_EQUAL = 0x4000
    SKIP_IF_REGS_EQUAL = 0x5000
    LOAD_IMMEDIATE = 0x6000
    ADD_IMMEDIATE = 0x7000
    LOAD = 0x8000
    OR = 0x8001
    AND = 0x8002
    XOR = 0x8003
    ADD = 0x8004
    SUBTRACT = 0x8005
    SHIFT_RIGHT = 0x8006
    SUBTRACT_NEGATIVE = 0x8007
    SHIFT_LEFT = 0x800E
    SKIP_IF_REGS_NOT_EQUAL = 0x9000
    LOAD_ADDRESS = 0xA000
    JUMP_PLUS_V0 = 0xB000
    RANDOM = 0xC000
    DRAW = 0xD000
    SKIP_IF_KEY = 0xE09E
    SKIP_IF_NOT_KEY = 0xE0A1
    LOAD_DELAY = 0xF007
    LOAD_KEY = 0xF00A
    SET_DELAY = 0xF015
    SET_SOUND = 0xF018
    ADD_TO_I = 0xF01E
    LOAD_DIGIT = 0xF029
    STORE_BCD = 0xF033
    STORE_REGS = 0xF055
    LOAD_REGS = 0xF065


MASK_DIRECT: Final[int] = 0xF000
MASK_FULL: Final[int] = 0xFFFF
MASK_LAST_NIBBLE: Final[int] = 0xF00F
MASK_LAST_BYTE: Final[int] = 0xF0FF


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 opcode.

    ``description`` is a ``str.format`` template over the operand fields
    ``x``, ``y``, ``n``, ``nn`` and ``nnn``.
    """

    opcode: Opcode
    mnemonic: str
    mask: int
    description: str

    def __post_init__(self) -> None:
        if self.mask not in (MASK_DIRECT, MASK_FULL, MASK_LAST_NIBBLE, MASK_LAST_BYTE):
            raise ValueError(f"unsupported mask {self.mask:#06x} for {self.mnemonic}")
        if self.opcode.value & self.mask != self.opcode.value:
            raise ValueError(f"opcode {self.opcode.value:#06x} has bits outside mask {self.mask:#06x}")


@dataclass(frozen=True)
class DecodedInstruction:
    """A fetched word paired with its instruction metadata."""

    word: int
    instruction: Instruction

    @property
    def opcode(self) -> Opcode:
        return self.instruction.opcode

    @property
    def x(self) -> int:
        return (self.word >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.word >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.word & 0xF

    @property
    def nn(self) -> int:
        return self.word & 0xFF

    @property
    def nnn(self) -> int:
        return self.word & 0xFFF

    def describe(self) -> str:
        return self.instruction.description.format(x=self.x, y=self.y, n=self.n, nn=self.nn, nnn=self.nnn)


class OpcodeTable:
    """Builder for one decode tier keyed by masked instruction words."""

    def __init__(self, mask: int) -> None:
        self.mask = mask
        self._entries: Dict[int, Instruction] = {}

    def register(self, instruction: Instruction) -> None:
        if instruction.mask != self.mask:
            raise ValueError(f"{instruction.mnemonic} uses mask {instruction.mask:#06x}, table expects {self.mask:#06x}")
        key = instruction.opcode.value
        if key in self._entries:
            existing = self._entries[key]
            raise ValueError(f"opcode {key:#06x} already registered as {existing.mnemonic}")
        self._entries[key] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Mapping[int, Instruction]:
        return dict(self._entries)


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    # Full-word match under 0x0
    Instruction(Opcode.CLEAR, "CLS", MASK_FULL, "Clear the display"),
    Instruction(Opcode.RETURN, "RET", MASK_FULL, "Return from a subroutine"),
    # Fully determined by the top nibble
    Instruction(Opcode.JUMP, "JP", MASK_DIRECT, "Jump to location {nnn:03X}"),
    Instruction(Opcode.CALL, "CALL", MASK_DIRECT, "Call subroutine at {nnn:03X}"),
    Instruction(Opcode.SKIP_IF_EQUAL, "SE", MASK_DIRECT, "Skip next instruction if V{x:X} == {nn}"),
    Instruction(Opcode.SKIP_IF_NOT_EQUAL, "SNE", MASK_DIRECT, "Skip next instruction if V{x:X} != {nn}"),
    Instruction(Opcode.LOAD_IMMEDIATE, "LD", MASK_DIRECT, "Set V{x:X} = {nn}"),
    Instruction(Opcode.ADD_IMMEDIATE, "ADD", MASK_DIRECT, "Add {nn} to V{x:X}"),
    Instruction(Opcode.LOAD_ADDRESS, "LD", MASK_DIRECT, "Load address {nnn:03X} to I"),
    Instruction(Opcode.JUMP_PLUS_V0, "JP", MASK_DIRECT, "Jump to location {nnn:03X} + V0"),
    Instruction(Opcode.RANDOM, "RND", MASK_DIRECT, "Set V{x:X} = random byte AND {nn}"),
    Instruction(Opcode.DRAW, "DRW", MASK_DIRECT, "Draw {n}-byte sprite from I at (V{x:X}, V{y:X})"),
    # Top nibble + low nibble
    Instruction(Opcode.SKIP_IF_REGS_EQUAL, "SE", MASK_LAST_NIBBLE, "Skip next instruction if V{x:X} == V{y:X}"),
    Instruction(Opcode.LOAD, "LD", MASK_LAST_NIBBLE, "Set V{x:X} = V{y:X}"),
    Instruction(Opcode.OR, "OR", MASK_LAST_NIBBLE, "Set V{x:X} = V{x:X} OR V{y:X}"),
    Instruction(Opcode.AND, "AND", MASK_LAST_NIBBLE, "Set V{x:X} = V{x:X} AND V{y:X}"),
    Instruction(Opcode.XOR, "XOR", MASK_LAST_NIBBLE, "Set V{x:X} = V{x:X} XOR V{y:X}"),
    Instruction(Opcode.ADD, "ADD", MASK_LAST_NIBBLE, "Add V{y:X} to V{x:X}"),
    Instruction(Opcode.SUBTRACT, "SUB", MASK_LAST_NIBBLE, "Subtract V{y:X} from V{x:X}"),
    Instruction(Opcode.SHIFT_RIGHT, "SHR", MASK_LAST_NIBBLE, "Set V{x:X} = V{y:X} shifted right by 1"),
    Instruction(Opcode.SUBTRACT_NEGATIVE, "SUBN", MASK_LAST_NIBBLE, "Set V{x:X} = V{y:X} - V{x:X}"),
    Instruction(Opcode.SHIFT_LEFT, "SHL", MASK_LAST_NIBBLE, "Set V{x:X} = V{y:X} shifted left by 1"),
    Instruction(Opcode.SKIP_IF_REGS_NOT_EQUAL, "SNE", MASK_LAST_NIBBLE, "Skip next instruction if V{x:X} != V{y:X}"),
    # Top nibble + low byte
    Instruction(Opcode.SKIP_IF_KEY, "SKP", MASK_LAST_BYTE, "Skip next instruction if key V{x:X} is pressed"),
    Instruction(Opcode.SKIP_IF_NOT_KEY, "SKNP", MASK_LAST_BYTE, "Skip next instruction if key V{x:X} is not pressed"),
    Instruction(Opcode.LOAD_DELAY, "LD", MASK_LAST_BYTE, "Set V{x:X} to delay timer value"),
    Instruction(Opcode.LOAD_KEY, "LD", MASK_LAST_BYTE, "Wait for a key press, store the key in V{x:X}"),
    Instruction(Opcode.SET_DELAY, "LD", MASK_LAST_BYTE, "Set delay timer to V{x:X}"),
    Instruction(Opcode.SET_SOUND, "LD", MASK_LAST_BYTE, "Set sound timer to V{x:X}"),
    Instruction(Opcode.ADD_TO_I, "ADD", MASK_LAST_BYTE, "Add V{x:X} to I"),
    Instruction(Opcode.LOAD_DIGIT, "LD", MASK_LAST_BYTE, "Set I to the sprite for digit V{x:X}"),
    Instruction(Opcode.STORE_BCD, "LD", MASK_LAST_BYTE, "Store BCD of V{x:X} at I, I+1 and I+2"),
    Instruction(Opcode.STORE_REGS, "LD", MASK_LAST_BYTE, "Store V0 through V{x:X} in memory starting at I"),
    Instruction(Opcode.LOAD_REGS, "LD", MASK_LAST_BYTE, "Read V0 through V{x:X} from memory starting at I"),
)


def build_decode_tables(instructions: Iterable[Instruction]) -> Mapping[int, Mapping[int, Instruction]]:
    """Group instructions into one lookup table per mask."""

    instructions = tuple(instructions)
    tables = {mask: OpcodeTable(mask) for mask in (MASK_DIRECT, MASK_FULL, MASK_LAST_NIBBLE, MASK_LAST_BYTE)}
    for mask, table in tables.items():
        table.register_all(instruction for instruction in instructions if instruction.mask == mask)
    return {mask: table.freeze() for mask, table in tables.items()}


DECODE_TABLES: Mapping[int, Mapping[int, Instruction]] = build_decode_tables(DEFAULT_INSTRUCTIONS)

# Top nibbles whose opcode is not fully determined by the first tier.
SECOND_TIER_MASKS: Mapping[int, int] = {
    0x0: MASK_FULL,
    0x5: MASK_LAST_NIBBLE,
    0x8: MASK_LAST_NIBBLE,
    0x9: MASK_LAST_NIBBLE,
    0xE: MASK_LAST_BYTE,
    0xF: MASK_LAST_BYTE,
}


def decode(word: int) -> DecodedInstruction | None:
    """Decode a 16-bit word, returning ``None`` for unknown instructions."""

    word &= 0xFFFF
    mask = SECOND_TIER_MASKS.get(word >> 12, MASK_DIRECT)
    instruction = DECODE_TABLES[mask].get(word & mask)
    if instruction is None:
        return None
    return DecodedInstruction(word, instruction)


def describe(word: int) -> str:
    decoded = decode(word)
    if decoded is None:
        return f"Unknown instruction {word & 0xFFFF:04X}"
    return decoded.describe()
