"""CHIP-8 execution engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Protocol, Tuple

from pychip8.bus import Memory
from pychip8.utils import InstructionHistory, debug_enabled, debug_log
from pychip8.video import FrameBuffer, GLYPH_COUNT, glyph_address

from .opcodes import DecodedInstruction, Opcode, decode

PROGRAM_START = 0x200
INSTRUCTION_BYTES = 2
REGISTER_COUNT = 16
STACK_SIZE = 16
KEY_COUNT = 16


class CPUError(Exception):
    """Base error for fatal execution failures."""


class UnknownInstructionError(CPUError):
    """Raised when a fetched word matches no known instruction."""

    def __init__(self, word: int, pc: int) -> None:
        super().__init__(f"unknown instruction {word:04X} at {pc:03X}")
        self.word = word
        self.pc = pc


class StackOverflowError(CPUError):
    """Raised when a call is made with all 16 stack slots in use."""


class StackUnderflowError(CPUError):
    """Raised when returning with an empty stack."""


class InvalidDigitError(CPUError):
    """Raised when a font glyph is requested for a value above 0xF."""


class InvalidKeyError(CPUError):
    """Raised when a key query names a key above 0xF."""


class KeypadLike(Protocol):
    def is_held(self, key: int) -> bool:
        ...

    def fresh_press(self) -> Optional[int]:
        ...


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        ...


class _NoKeypad:
    def is_held(self, key: int) -> bool:
        return False

    def fresh_press(self) -> Optional[int]:
        return None


@dataclass
class CPUState:
    """Register file, timers and call stack."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x000
    pc: int = PROGRAM_START
    dt: int = 0
    st: int = 0
    sp: int = 0
    stack: list[int] = field(default_factory=lambda: [0] * STACK_SIZE)

    def clone(self) -> "CPUState":
        return CPUState(bytearray(self.v), self.i, self.pc, self.dt, self.st, self.sp, list(self.stack))


@dataclass(frozen=True)
class CPUSnapshot:
    """Immutable view of the CPU handed to renderers."""

    pc: int
    i: int
    v: Tuple[int, ...]
    dt: int
    st: int
    sp: int
    stack: Tuple[int, ...]
    awaiting_key: bool


@dataclass
class Chip8CPU:
    """Fetch, decode and execute CHIP-8 instructions."""

    memory: Memory
    framebuffer: FrameBuffer
    keypad: KeypadLike = field(default_factory=_NoKeypad)
    rng: Optional[RandomSource] = None
    history: Optional[InstructionHistory] = None

    state: CPUState = field(default_factory=CPUState)
    awaiting_key_register: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random()
        self._handlers = self._bind_handlers()

    def _bind_handlers(self) -> Dict[Opcode, Callable[[DecodedInstruction], None]]:
        handlers: Dict[Opcode, Callable[[DecodedInstruction], None]] = {}
        missing: list[str] = []
        for opcode in Opcode:
            handler = getattr(self, f"op_{opcode.name.lower()}", None)
            if handler is None:
                missing.append(opcode.name)
            else:
                handlers[opcode] = handler
        if missing:
            raise CPUError(f"no handler for opcodes: {', '.join(missing)}")
        return handlers

    def reset(self) -> None:
        self.state = CPUState()
        self.awaiting_key_register = None
        if self.history is not None:
            self.history.clear()

    @property
    def awaiting_key(self) -> bool:
        return self.awaiting_key_register is not None

    def snapshot(self) -> CPUSnapshot:
        state = self.state
        return CPUSnapshot(
            pc=state.pc,
            i=state.i,
            v=tuple(state.v),
            dt=state.dt,
            st=state.st,
            sp=state.sp,
            stack=tuple(state.stack),
            awaiting_key=self.awaiting_key,
        )

    def step(self) -> None:
        """Execute a single cycle."""

        if self.awaiting_key_register is not None:
            self._poll_key()
            return

        pc = self.state.pc
        word = self.memory.load16(pc)
        decoded = decode(word)
        if decoded is None:
            raise UnknownInstructionError(word, pc)

        if self.history is not None:
            self.history.record(pc, word, decoded.describe())
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%03X word=%04X %s", pc, word, decoded.instruction.mnemonic)

        self.state.pc = pc + INSTRUCTION_BYTES
        self._handlers[decoded.opcode](decoded)

    def tick_timers(self) -> Tuple[bool, bool]:
        """Decrement both countdowns once; return ``(tone_active, tone_stopped)``."""

        state = self.state
        if state.dt:
            state.dt -= 1
        if not state.st:
            return False, False
        state.st -= 1
        return True, state.st == 0

    # ------------------------------------------------------------------
    # Helpers

    def _skip(self) -> None:
        self.state.pc += INSTRUCTION_BYTES

    def _poll_key(self) -> None:
        key = self.keypad.fresh_press()
        if key is None:
            return
        register = self.awaiting_key_register
        self.state.v[register] = key & 0xF
        self.awaiting_key_register = None
        if debug_enabled("input"):
            debug_log("input", "key_wait_done V%X=%X", register, key)

    def _key_held(self, key: int) -> bool:
        if not 0 <= key < KEY_COUNT:
            raise InvalidKeyError(f"checked status of invalid key {key:#04x}")
        return self.keypad.is_held(key)

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_clear(self, _: DecodedInstruction) -> None:
        self.framebuffer.clear()

    def op_return(self, _: DecodedInstruction) -> None:
        state = self.state
        if state.sp == 0:
            raise StackUnderflowError("return with empty stack")
        state.sp -= 1
        state.pc = state.stack[state.sp]

    def op_jump(self, instr: DecodedInstruction) -> None:
        self.state.pc = instr.nnn

    def op_call(self, instr: DecodedInstruction) -> None:
        state = self.state
        if state.sp == STACK_SIZE:
            raise StackOverflowError(f"call to {instr.nnn:03X} with full stack")
        state.stack[state.sp] = state.pc
        state.sp += 1
        state.pc = instr.nnn

    def op_skip_if_equal(self, instr: DecodedInstruction) -> None:
        if self.state.v[instr.x] == instr.nn:
            self._skip()

    def op_skip_if_not_equal(self, instr: DecodedInstruction) -> None:
        if self.state.v[instr.x] != instr.nn:
            self._skip()

    def op_skip_if_regs_equal(self, instr: DecodedInstruction) -> None:
        if self.state.v[instr.x] == self.state.v[instr.y]:
            self._skip()

    def op_load_immediate(self, instr: DecodedInstruction) -> None:
        self.state.v[instr.x] = instr.nn

    def op_add_immediate(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        v[instr.x] = (v[instr.x] + instr.nn) & 0xFF

    def op_load(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        v[instr.x] = v[instr.y]

    # The logic ops clear VF as on the original COSMAC VIP interpreter.
    def op_or(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        v[instr.x] |= v[instr.y]
        v[0xF] = 0

    def op_and(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        v[instr.x] &= v[instr.y]
        v[0xF] = 0

    def op_xor(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        v[instr.x] ^= v[instr.y]
        v[0xF] = 0

    def op_add(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        old = v[instr.x]
        v[instr.x] = (old + v[instr.y]) & 0xFF
        v[0xF] = 1 if old > v[instr.x] else 0

    def op_subtract(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        no_borrow = v[instr.x] >= v[instr.y]
        v[instr.x] = (v[instr.x] - v[instr.y]) & 0xFF
        v[0xF] = 1 if no_borrow else 0

    def op_shift_right(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        flag = v[instr.y] & 0x01
        v[instr.x] = v[instr.y] >> 1
        v[0xF] = flag

    def op_subtract_negative(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        no_borrow = v[instr.y] >= v[instr.x]
        v[instr.x] = (v[instr.y] - v[instr.x]) & 0xFF
        v[0xF] = 1 if no_borrow else 0

    def op_shift_left(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        flag = (v[instr.y] & 0x80) >> 7
        v[instr.x] = (v[instr.y] << 1) & 0xFF
        v[0xF] = flag

    def op_skip_if_regs_not_equal(self, instr: DecodedInstruction) -> None:
        if self.state.v[instr.x] != self.state.v[instr.y]:
            self._skip()

    def op_load_address(self, instr: DecodedInstruction) -> None:
        self.state.i = instr.nnn

    def op_jump_plus_v0(self, instr: DecodedInstruction) -> None:
        self.state.pc = instr.nnn + self.state.v[0x0]

    def op_random(self, instr: DecodedInstruction) -> None:
        value = self.rng.randrange(256)
        self.state.v[instr.x] = value & instr.nn

    def op_draw(self, instr: DecodedInstruction) -> None:
        v = self.state.v
        sprite = self.memory.read_block(self.state.i, instr.n)
        collision = self.framebuffer.draw_sprite(sprite, v[instr.x], v[instr.y])
        v[0xF] = 1 if collision else 0

    def op_skip_if_key(self, instr: DecodedInstruction) -> None:
        if self._key_held(self.state.v[instr.x]):
            self._skip()

    def op_skip_if_not_key(self, instr: DecodedInstruction) -> None:
        if not self._key_held(self.state.v[instr.x]):
            self._skip()

    def op_load_delay(self, instr: DecodedInstruction) -> None:
        self.state.v[instr.x] = self.state.dt

    def op_load_key(self, instr: DecodedInstruction) -> None:
        self.awaiting_key_register = instr.x
        self._poll_key()

    def op_set_delay(self, instr: DecodedInstruction) -> None:
        self.state.dt = self.state.v[instr.x]

    def op_set_sound(self, instr: DecodedInstruction) -> None:
        self.state.st = self.state.v[instr.x]

    def op_add_to_i(self, instr: DecodedInstruction) -> None:
        self.state.i = (self.state.i + self.state.v[instr.x]) & 0xFFFF

    def op_load_digit(self, instr: DecodedInstruction) -> None:
        digit = self.state.v[instr.x]
        if digit >= GLYPH_COUNT:
            raise InvalidDigitError(f"font glyph requested for {digit:#04x}")
        self.state.i = glyph_address(digit)

    def op_store_bcd(self, instr: DecodedInstruction) -> None:
        value = self.state.v[instr.x]
        address = self.state.i
        self.memory.store8(address, value // 100)
        self.memory.store8(address + 1, (value // 10) % 10)
        self.memory.store8(address + 2, value % 10)

    # Fx55/Fx65 leave I one past its old value, not past the block.
    def op_store_regs(self, instr: DecodedInstruction) -> None:
        state = self.state
        for index in range(instr.x + 1):
            self.memory.store8(state.i + index, state.v[index])
        state.i = (state.i + 1) & 0xFFFF

    def op_load_regs(self, instr: DecodedInstruction) -> None:
        state = self.state
        for index in range(instr.x + 1):
            state.v[index] = self.memory.load8(state.i + index)
        state.i = (state.i + 1) & 0xFFFF
