"""Grid representation for the snake board."""

from __future__ import annotations

import enum

import numpy as np

from shortcut_snake.snake import Direction

MIN_BOARD_SIZE = 5


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    HEAD = 1
    BODY = 2
    APPLE = 3


class Grid:
    """Square, NumPy-backed game board.

    Cell states are stored as integers for O(1) collision checks. Body
    cells additionally remember the arrow of the move that laid them down,
    which is what the board snapshot shows for them.
    Coordinates use (row, col) ordering consistent with NumPy indexing.
    """

    def __init__(self, size: int = 10) -> None:
        if size < MIN_BOARD_SIZE:
            raise ValueError(
                f"Board size must be at least {MIN_BOARD_SIZE}, got {size}.",
            )
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int8)
        self.arrows = np.full((size, size), Direction.RIGHT.arrow, dtype="<U1")

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether a coordinate lies within the board."""
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> CellType:
        """Return the cell type at the given coordinate."""
        return CellType(self.cells[row, col])

    def set(self, row: int, col: int, cell_type: CellType) -> None:
        """Set the cell type at the given coordinate."""
        self.cells[row, col] = cell_type

    def set_body(self, row: int, col: int, direction: Direction) -> None:
        """Mark a body segment laid down by a move in *direction*."""
        self.cells[row, col] = CellType.BODY
        self.arrows[row, col] = direction.arrow

    def count(self, cell_type: CellType) -> int:
        """Return how many cells currently hold *cell_type*."""
        return int(np.count_nonzero(self.cells == cell_type))

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary."""
        return {
            "size": self.size,
            "cells": self.cells.tolist(),
        }
