"""Baseline tests ensuring the package skeleton loads correctly."""

import pychip8


def test_package_exports() -> None:
    for name in ("cpu", "bus", "video", "audio", "io", "system", "loader", "ui", "utils"):
        assert hasattr(pychip8, name), f"missing submodule: {name}"


def test_cpu_exports() -> None:
    from pychip8 import cpu

    for name in (
        "Chip8CPU",
        "CPUError",
        "UnknownInstructionError",
        "StackOverflowError",
        "StackUnderflowError",
        "InvalidDigitError",
        "InvalidKeyError",
    ):
        assert hasattr(cpu, name), f"cpu missing symbol: {name}"


def test_error_kinds_are_distinct() -> None:
    from pychip8.bus import MemoryAccessError
    from pychip8.cpu import CPUError, StackOverflowError, StackUnderflowError

    assert issubclass(StackOverflowError, CPUError)
    assert not issubclass(StackOverflowError, StackUnderflowError)
    assert not issubclass(MemoryAccessError, CPUError)
