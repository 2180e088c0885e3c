"""Apple spawning pool."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

logger = logging.getLogger(__name__)


class ApplePositionPool:
    """Set of vacant cells supporting O(1) random pick, removal and insertion.

    Every board cell lives in ``positions``. The first ``counter`` entries
    are the vacant, spawnable cells; the rest are occupied. ``slots`` maps a
    flattened cell index to its position in ``positions``, so a cell can be
    moved across the partition boundary with a single swap.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        size: int,
        occupied: Iterable[tuple[int, int]] = (),
        rng: np.random.Generator | None = None,
    ) -> None:
        if size < 1:
            raise ValueError("Pool size must be at least 1.")
        self.size = size
        self.rng = rng if rng is not None else np.random.default_rng()

        taken = set(occupied)
        cells = [(r, c) for r in range(size) for c in range(size)]
        vacant = [cell for cell in cells if cell not in taken]
        self.positions: list[tuple[int, int]] = vacant + [
            cell for cell in cells if cell in taken
        ]
        self.slots = np.empty(size * size, dtype=np.int64)
        for slot, cell in enumerate(self.positions):
            self.slots[self._key(cell)] = slot
        self.counter = len(vacant)

    def __len__(self) -> int:
        return self.counter

    def __contains__(self, cell: tuple[int, int]) -> bool:
        return self.slots[self._key(cell)] < self.counter

    def _key(self, cell: tuple[int, int]) -> int:
        return cell[0] * self.size + cell[1]

    def _exchange(self, a: int, b: int) -> None:
        """Swap the cells held in slots *a* and *b*."""
        cell_a, cell_b = self.positions[a], self.positions[b]
        self.positions[a], self.positions[b] = cell_b, cell_a
        self.slots[self._key(cell_a)] = b
        self.slots[self._key(cell_b)] = a

    def pick(self) -> tuple[int, int]:
        """Return a uniformly random vacant cell without removing it."""
        if self.counter == 0:
            logger.warning("No empty cells available for apple spawning.")
            raise LookupError("No vacant cells left to spawn an apple on.")
        return self.positions[int(self.rng.integers(self.counter))]

    def remove(self, cell: tuple[int, int]) -> bool:
        """Mark *cell* occupied. Returns False if it already was."""
        slot = int(self.slots[self._key(cell)])
        if slot >= self.counter:
            return False
        self.counter -= 1
        self._exchange(slot, self.counter)
        return True

    def insert(self, cell: tuple[int, int]) -> bool:
        """Mark *cell* vacant. Returns False if it already was."""
        slot = int(self.slots[self._key(cell)])
        if slot < self.counter:
            return False
        self._exchange(slot, self.counter)
        self.counter += 1
        return True

    def swap(
        self, occupied: tuple[int, int], vacated: tuple[int, int],
    ) -> None:
        """Occupy one vacant cell and free one occupied cell in one step.

        The two cells trade slots, so the vacant count is unchanged.
        """
        slot_in = int(self.slots[self._key(occupied)])
        slot_out = int(self.slots[self._key(vacated)])
        if slot_in >= self.counter or slot_out < self.counter:
            raise ValueError(
                f"Cannot swap {occupied} into and {vacated} out of the "
                "occupied set.",
            )
        self._exchange(slot_in, slot_out)

    def vacant(self) -> list[tuple[int, int]]:
        """Return the currently vacant cells in pool order."""
        return self.positions[:self.counter]

    def to_dict(self) -> dict:
        """Serialize pool state to a dictionary."""
        return {
            "size": self.size,
            "vacant": [list(p) for p in self.vacant()],
        }
