"""Step-based game engine composing grid, body queue, and apple pool."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from shortcut_snake.apple import ApplePositionPool
from shortcut_snake.grid import CellType, Grid
from shortcut_snake.snake import BodySegmentQueue, Direction, shift

logger = logging.getLogger(__name__)

HEAD_SYMBOL = "H"
APPLE_SYMBOL = "A"
EMPTY_SYMBOL = "X"


class Status(enum.Enum):
    """Outcome of a single tick. WIN and LOSS are terminal."""

    CONTINUE = "continue"
    WIN = "win"
    LOSS = "loss"

    @property
    def terminal(self) -> bool:
        return self is not Status.CONTINUE


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only, flattened view of the board.

    ``cells`` holds one symbol per cell in row-major order: ``H`` for the
    head, ``A`` for the apple, ``X`` for empty cells and an arrow for body
    segments. ``body`` lists the body coordinates from the segment behind
    the head to the tail.
    """

    board_size: int
    cells: str
    body: tuple[tuple[int, int], ...] = ()

    def symbol_at(self, row: int, col: int) -> str:
        return self.cells[row * self.board_size + col]

    def rows(self) -> list[str]:
        n = self.board_size
        return [self.cells[i:i + n] for i in range(0, n * n, n)]


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns the grid, the body queue, and the apple pool. Each call
    to :meth:`tick` applies one requested direction and returns the
    resulting :class:`Status`. The snake starts in the middle of the board
    heading right, with its body trailing to the left.
    """

    def __init__(
        self,
        board_size: int = 10,
        starting_body_size: int = 3,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = Grid(board_size)
        self.board_size = board_size

        middle = (board_size - 1) // 2
        if not 1 <= starting_body_size <= middle:
            raise ValueError(
                f"Starting body size must be between 1 and {middle} for a "
                f"{board_size}x{board_size} board, got {starting_body_size}.",
            )

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.body = BodySegmentQueue(board_size * board_size)
        self.head = (middle, middle)
        self.grid.set(middle, middle, CellType.HEAD)

        # Tail first, so the segment furthest from the head leaves first.
        for offset in range(starting_body_size, 0, -1):
            cell = (middle, middle - offset)
            self.body.enqueue(cell)
            self.grid.set_body(cell[0], cell[1], Direction.RIGHT)

        self.apple_pool = ApplePositionPool(
            board_size, occupied=[self.head, *self.body], rng=self.rng,
        )
        self.remaining = board_size * board_size - starting_body_size - 1
        self.apple: tuple[int, int] | None = None
        self._spawn_apple()

        self.score = 0
        self.ticks = 0
        self.status = Status.CONTINUE

    @property
    def body_length(self) -> int:
        return len(self.body)

    def tick(self, direction: Direction) -> Status:
        """Advance the game by one move in *direction*."""
        if self.status.terminal:
            return self.status

        old_head = self.head
        row, col = shift(old_head, direction)

        if not self.grid.in_bounds(row, col):
            return self._finish(Status.LOSS, "ran off the board")

        target = self.grid.get(row, col)

        if target == CellType.BODY:
            return self._finish(Status.LOSS, "ran into its body")

        if target == CellType.HEAD:
            return self.status

        self.ticks += 1

        if target == CellType.APPLE:
            self._advance_head((row, col), direction)
            self.apple = None
            self.score += 1
            self.remaining -= 1
            if self.remaining == 0:
                return self._finish(Status.WIN, "filled the board")
            self._spawn_apple()
            return self.status

        tail = self.body.dequeue()
        if tail is None:
            return self._finish(Status.WIN, "has no body left to move")
        self.grid.set(tail[0], tail[1], CellType.EMPTY)
        self._advance_head((row, col), direction)
        self.apple_pool.swap(occupied=(row, col), vacated=tail)
        return self.status

    def _advance_head(
        self, cell: tuple[int, int], direction: Direction,
    ) -> None:
        """Leave a body segment behind and move the head onto *cell*."""
        old_row, old_col = self.head
        self.body.enqueue(self.head)
        self.grid.set_body(old_row, old_col, direction)
        self.grid.set(cell[0], cell[1], CellType.HEAD)
        self.head = cell

    def _spawn_apple(self) -> None:
        cell = self.apple_pool.pick()
        self.apple_pool.remove(cell)
        self.grid.set(cell[0], cell[1], CellType.APPLE)
        self.apple = cell

    def _finish(self, status: Status, reason: str) -> Status:
        self.status = status
        logger.info(
            "Game over (%s): snake %s at tick %d with score %d.",
            status.value, reason, self.ticks, self.score,
        )
        return status

    def get_snapshot(self) -> BoardSnapshot:
        """Return the flattened board state consumed by solvers and renderers."""
        symbols = []
        for row in range(self.board_size):
            for col in range(self.board_size):
                cell = self.grid.get(row, col)
                if cell == CellType.HEAD:
                    symbols.append(HEAD_SYMBOL)
                elif cell == CellType.APPLE:
                    symbols.append(APPLE_SYMBOL)
                elif cell == CellType.BODY:
                    symbols.append(str(self.grid.arrows[row, col]))
                else:
                    symbols.append(EMPTY_SYMBOL)
        body = tuple(reversed(list(self.body)))
        return BoardSnapshot(self.board_size, "".join(symbols), body)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.ticks,
            "score": self.score,
            "status": self.status.value,
            "remaining": self.remaining,
            "head": list(self.head),
            "body": [list(seg) for seg in self.body],
            "apple": list(self.apple) if self.apple is not None else None,
            "board": self.get_snapshot().rows(),
        }
