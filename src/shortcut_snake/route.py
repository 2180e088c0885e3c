"""Covering cycle over the board and the forward shortcut graph built on it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

logger = logging.getLogger(__name__)

# Neighbour probe order: right, left, down, up.
_NEIGHBOUR_DELTAS = ((0, 1), (0, -1), (1, 0), (-1, 0))


class UnsupportedBoardError(ValueError):
    """Raised for board sizes the covering cycle cannot be built for."""


def build_cycle(size: int) -> np.ndarray:
    """Return a ``(size, size)`` array of sequence numbers along the cycle.

    Starting at ``(0, 0)``, every column is swept over rows ``1..size-1``,
    downwards on even columns and upwards on odd ones. Row 0 is kept as the
    return lane and walked from the last column back to column 1, whose cell
    is adjacent to the start. Only even sizes close into a single cycle.
    """
    if size < 2 or size % 2:
        raise UnsupportedBoardError(
            f"A covering cycle needs an even board size, got {size}.",
        )

    route = np.zeros((size, size), dtype=np.int64)
    seq = 1
    for col in range(size):
        rows = range(1, size) if col % 2 == 0 else range(size - 1, 0, -1)
        for row in rows:
            route[row, col] = seq
            seq += 1
    for col in range(size - 1, 0, -1):
        route[0, col] = seq
        seq += 1
    return route


@dataclass(eq=False)
class RouteNode:
    """One cell of the cycle and the forward hops available from it."""

    sequence: int
    cell: tuple[int, int]
    edges: list[RouteNode] = field(default_factory=list, repr=False)

    def is_forward(self, other: RouteNode, total: int) -> bool:
        """Whether *other* lies ahead of this node along the cycle."""
        last = total - 1
        if self.sequence == last and other.sequence == 0:
            return True
        if self.sequence == 0 and other.sequence == last:
            return False
        return self.sequence < other.sequence

    def hop(self, other: RouteNode, total: int) -> int:
        """Cycle distance covered by moving from this node to *other*."""
        if self.sequence == total - 1 and other.sequence == 0:
            return 1
        return other.sequence - self.sequence


class RouteGraph:
    """Static route data for one board size.

    Every cell is numbered by its position along the covering cycle. Each
    node keeps the grid-adjacent cells that lie ahead of it, longest hop
    first, so callers can try shortcuts before the plain successor.
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self.total = size * size
        self.sequence = build_cycle(size)

        self.cells: list[tuple[int, int]] = [(0, 0)] * self.total
        for row in range(size):
            for col in range(size):
                self.cells[int(self.sequence[row, col])] = (row, col)

        self.nodes = [RouteNode(seq, cell) for seq, cell in enumerate(self.cells)]
        for node in self.nodes:
            row, col = node.cell
            for dr, dc in _NEIGHBOUR_DELTAS:
                r, c = row + dr, col + dc
                if not (0 <= r < size and 0 <= c < size):
                    continue
                neighbour = self.nodes[int(self.sequence[r, c])]
                if node.is_forward(neighbour, self.total):
                    node.edges.append(neighbour)
            node.edges.sort(key=lambda n, src=node: -src.hop(n, self.total))

        logger.debug(
            "Built route graph for %dx%d board with %d edges.",
            size, size, sum(len(n.edges) for n in self.nodes),
        )

    def sequence_of(self, cell: tuple[int, int]) -> int:
        return int(self.sequence[cell[0], cell[1]])

    def cell_of(self, sequence: int) -> tuple[int, int]:
        return self.cells[sequence]

    def node_at(self, cell: tuple[int, int]) -> RouteNode:
        return self.nodes[self.sequence_of(cell)]

    def successor(self, node: RouteNode) -> RouteNode:
        """Return the next node along the base cycle."""
        return self.nodes[(node.sequence + 1) % self.total]
