"""Bounded history of recently executed instructions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .debug import debug_log


@dataclass(frozen=True)
class HistoryEntry:
    pc: int
    word: int
    description: str


class InstructionHistory:
    """Ring buffer that stores the last ``capacity`` fetched instructions."""

    def __init__(self, capacity: int = 3) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: List[HistoryEntry | None] = [None] * capacity
        self._index = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def record(self, pc: int, word: int, description: str) -> None:
        entry = HistoryEntry(pc & 0xFFFF, word & 0xFFFF, description)
        self._entries[self._index] = entry
        self._index = (self._index + 1) % self._capacity
        if self._size < self._capacity:
            self._size += 1

    def entries(self, limit: int | None = None) -> Iterable[HistoryEntry]:
        """Yield entries oldest first."""

        count = self._size if limit is None else min(self._size, max(limit, 0))
        for offset in range(count):
            index = (self._index - count + offset) % self._capacity
            entry = self._entries[index]
            if entry is not None:
                yield entry

    def last_entry(self) -> HistoryEntry | None:
        if self._size == 0:
            return None
        return self._entries[(self._index - 1) % self._capacity]

    def format_entries(self, limit: int | None = None) -> Sequence[str]:
        return [f"{entry.word:04X}: {entry.description}" for entry in self.entries(limit)]

    def dump(self, category: str, limit: int | None = None) -> None:
        for entry in self.entries(limit):
            debug_log(category, "pc=%03X %04X: %s", entry.pc, entry.word, entry.description)

    def clear(self) -> None:
        self._entries = [None] * self._capacity
        self._index = 0
        self._size = 0
