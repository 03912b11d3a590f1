"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .machine import (
    FRAME_RATE,
    FrameResult,
    Machine,
    MachineConfig,
    create_machine,
    display_rate,
    instructions_per_frame,
)

__all__ = [
    "FRAME_RATE",
    "FrameResult",
    "Machine",
    "MachineConfig",
    "create_machine",
    "display_rate",
    "instructions_per_frame",
]
