"""Movement directions and the snake's body segment queue."""

from __future__ import annotations

import enum
from collections.abc import Iterator


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def arrow(self) -> str:
        """Arrow symbol stored on body cells laid down by this move."""
        return _ARROWS[self]

    @classmethod
    def from_delta(cls, dr: int, dc: int) -> Direction:
        """Return the direction for a unit (row, col) delta."""
        try:
            return cls((dr, dc))
        except ValueError:
            raise ValueError(
                f"({dr}, {dc}) is not a unit grid delta.",
            ) from None

    @classmethod
    def between(
        cls, source: tuple[int, int], target: tuple[int, int],
    ) -> Direction:
        """Return the direction that moves *source* onto adjacent *target*."""
        return cls.from_delta(target[0] - source[0], target[1] - source[1])

    @classmethod
    def from_arrow(cls, symbol: str) -> Direction | None:
        """Return the direction drawn by *symbol*, or ``None``."""
        return _FROM_ARROW.get(symbol)


_ARROWS: dict[Direction, str] = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}

_FROM_ARROW: dict[str, Direction] = {v: k for k, v in _ARROWS.items()}

ARROW_SYMBOLS = frozenset(_FROM_ARROW)


def shift(cell: tuple[int, int], direction: Direction) -> tuple[int, int]:
    """Return the cell one step from *cell* in *direction*."""
    dr, dc = direction.value
    return cell[0] + dr, cell[1] + dc


class BodySegmentQueue:
    """FIFO of body coordinates backed by two fixed buffers.

    Enqueues fill the write buffer from the back towards the front. Dequeues
    drain the read buffer in the same back-to-front order, so items leave in
    insertion order. Once the read buffer is exhausted the two buffers swap
    roles, which keeps both operations amortized O(1) without shifting or
    reallocating.

    The oldest segment (the tail) is dequeued first.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("Queue capacity must be at least 1.")
        self.capacity = capacity
        self._buffers: list[list[tuple[int, int] | None]] = [
            [None] * capacity,
            [None] * capacity,
        ]
        # Index of the next slot to read and the next slot to write, per
        # buffer. A buffer is drained once its read index reaches its
        # write index.
        self._read = [capacity - 1, capacity - 1]
        self._write = [capacity - 1, capacity - 1]
        self._current = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Yield segments oldest-first without consuming them."""
        cur, other = self._current, 1 - self._current
        for idx in range(self._read[cur], self._write[cur], -1):
            yield self._buffers[cur][idx]
        for idx in range(self.capacity - 1, self._write[other], -1):
            yield self._buffers[other][idx]

    def enqueue(self, item: tuple[int, int]) -> None:
        """Append *item* at the logical tail of the queue."""
        target = 1 - self._current
        if self._write[target] < 0:
            raise OverflowError(
                f"Body queue is full ({self.capacity} pending segments).",
            )
        self._buffers[target][self._write[target]] = item
        self._write[target] -= 1
        self._size += 1

    def dequeue(self) -> tuple[int, int] | None:
        """Remove and return the oldest item, or ``None`` when empty."""
        cur = self._current
        if self._read[cur] <= self._write[cur]:
            self._read[cur] = self.capacity - 1
            self._write[cur] = self.capacity - 1
            self._current = cur = 1 - cur
            if self._read[cur] <= self._write[cur]:
                return None

        item = self._buffers[cur][self._read[cur]]
        self._buffers[cur][self._read[cur]] = None
        self._read[cur] -= 1
        self._size -= 1
        return item
