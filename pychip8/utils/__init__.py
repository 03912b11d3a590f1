"""Utility helpers for the CHIP-8 interpreter."""

from .debug import debug_enabled, debug_log, reload_categories
from .trace import HistoryEntry, InstructionHistory

__all__ = [
    "debug_enabled",
    "debug_log",
    "reload_categories",
    "HistoryEntry",
    "InstructionHistory",
]
