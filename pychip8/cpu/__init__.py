"""CPU package for the CHIP-8 interpreter."""

from .core import (
    Chip8CPU,
    CPUError,
    CPUSnapshot,
    CPUState,
    InvalidDigitError,
    InvalidKeyError,
    StackOverflowError,
    StackUnderflowError,
    UnknownInstructionError,
)
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CPUSnapshot",
    "CPUError",
    "UnknownInstructionError",
    "StackOverflowError",
    "StackUnderflowError",
    "InvalidDigitError",
    "InvalidKeyError",
    "opcodes",
]
