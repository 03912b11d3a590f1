"""CHIP-8 machine assembly and the frame loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from pychip8.bus import Memory
from pychip8.cpu import Chip8CPU, CPUSnapshot
from pychip8.cpu.core import RandomSource
from pychip8.io import Keypad
from pychip8.loader import load_rom
from pychip8.utils import InstructionHistory, debug_enabled, debug_log
from pychip8.video import FONT_START, FONTSET, FrameBuffer

FRAME_RATE = 60
DEFAULT_SPEED = 840


def instructions_per_frame(instructions_per_second: int) -> int:
    """Cycles executed per 60 Hz frame; speeds below 60 still run one."""

    if instructions_per_second >= FRAME_RATE:
        return instructions_per_second // FRAME_RATE
    return 1


def display_rate(instructions_per_second: int) -> int:
    """Frames per second the front end should target."""

    return max(1, min(FRAME_RATE, instructions_per_second))


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    instructions_per_second: int = DEFAULT_SPEED
    enable_history: bool = False
    history_size: int = 3
    rng: Optional[RandomSource] = None
    keypad: Optional[Keypad] = None


@dataclass(frozen=True)
class FrameResult:
    """Everything a front end needs to present one frame."""

    framebuffer: bytes
    tone_active: bool
    tone_stopped: bool
    cycles: int
    snapshot: Optional[CPUSnapshot] = None
    history: Tuple[str, ...] = ()


@dataclass
class Machine:
    """Aggregates memory, framebuffer, keypad and CPU and drives frames."""

    memory: Memory
    framebuffer: FrameBuffer
    keypad: Keypad
    cpu: Chip8CPU
    cycles_per_frame: int
    history: Optional[InstructionHistory] = None
    paused: bool = False
    frame_count: int = field(default=0)

    def reset(self) -> None:
        """Return CPU, screen and keypad to power-on state; memory is kept."""

        self.cpu.reset()
        self.framebuffer.clear()
        self.keypad.reset()
        self.paused = False
        self.frame_count = 0

    def load_rom(self, data: bytes) -> int:
        return load_rom(data, self.memory)

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        if debug_enabled("frame"):
            debug_log("frame", "paused=%s pc=%03X", self.paused, self.cpu.state.pc)
        return self.paused

    def run_frame(self) -> FrameResult:
        """Run one frame of cycles, tick the timers and return the frame."""

        if self.paused:
            # Presses made while paused are not carried into the next frame.
            self.keypad.end_frame()
            return self._emit(False, False, 0)
        return self._emulate(self.cycles_per_frame)

    def step(self) -> FrameResult:
        """Execute a single cycle while paused, as its own frame."""

        if not self.paused:
            raise RuntimeError("step is only available while paused")
        return self._emulate(1)

    def _emulate(self, cycles: int) -> FrameResult:
        cpu = self.cpu
        for _ in range(cycles):
            cpu.step()
        tone_active, tone_stopped = cpu.tick_timers()
        self.keypad.end_frame()
        self.frame_count += 1
        if debug_enabled("frame"):
            debug_log(
                "frame",
                "frame=%d cycles=%d dt=%d st=%d",
                self.frame_count,
                cycles,
                cpu.state.dt,
                cpu.state.st,
            )
        return self._emit(tone_active, tone_stopped, cycles)

    def _emit(self, tone_active: bool, tone_stopped: bool, cycles: int) -> FrameResult:
        snapshot = None
        history: Tuple[str, ...] = ()
        if self.history is not None:
            snapshot = self.cpu.snapshot()
            history = tuple(self.history.format_entries())
        return FrameResult(
            framebuffer=self.framebuffer.snapshot(),
            tone_active=tone_active,
            tone_stopped=tone_stopped,
            cycles=cycles,
            snapshot=snapshot,
            history=history,
        )


def create_machine(config: MachineConfig | None = None, rom: bytes | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the font loaded and, optionally, a ROM."""

    config = config or MachineConfig()
    memory = Memory()
    memory.load_image(FONT_START, FONTSET)

    framebuffer = FrameBuffer()
    keypad = config.keypad or Keypad()
    history = InstructionHistory(config.history_size) if config.enable_history else None

    cpu = Chip8CPU(memory, framebuffer, keypad, rng=config.rng, history=history)

    machine = Machine(
        memory=memory,
        framebuffer=framebuffer,
        keypad=keypad,
        cpu=cpu,
        cycles_per_frame=instructions_per_frame(config.instructions_per_second),
        history=history,
    )
    machine.reset()
    if rom is not None:
        machine.load_rom(rom)
    return machine
