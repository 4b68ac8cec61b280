"""Bounded battle log -- the narration the presentation layer renders."""

from __future__ import annotations

from collections import deque
from typing import Iterator

LOG_CAPACITY = 8


class BattleLog:
    """Ordered FIFO of narration lines with a fixed capacity.

    Appending past capacity drops the oldest line, so the log always holds
    the most recent ``capacity`` lines in the order they were written.
    """

    def __init__(self, capacity: int = LOG_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"BattleLog capacity must be >= 1, got {capacity}")
        self._lines: deque[str] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._lines.maxlen or 0

    @property
    def lines(self) -> list[str]:
        """Snapshot of the current lines, oldest first."""
        return list(self._lines)

    def append(self, line: str) -> None:
        self._lines.append(line)

    def clear(self) -> None:
        self._lines.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"BattleLog(capacity={self.capacity}, lines={list(self._lines)!r})"
