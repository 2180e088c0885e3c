"""Autoplay move selection over the covering cycle."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from shortcut_snake.engine import (
    APPLE_SYMBOL,
    HEAD_SYMBOL,
    BoardSnapshot,
    GameEngine,
    Status,
)
from shortcut_snake.route import RouteGraph, RouteNode
from shortcut_snake.snake import ARROW_SYMBOLS, Direction, shift

logger = logging.getLogger(__name__)

# Sentinel distance for cells that hold no part of the snake.
FREE = -1


class MoveKind(enum.Enum):
    """How a move was chosen."""

    SHORTCUT = "shortcut"
    CYCLE = "cycle"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Decision:
    """A chosen direction, tagged with whether it passed every safety check."""

    direction: Direction
    kind: MoveKind
    target: int | None = None

    @property
    def verified(self) -> bool:
        return self.kind is not MoveKind.FALLBACK


@dataclass
class BoardReading:
    """What a solver knows about the board for one tick.

    ``distances`` holds 0 for the head, ``k`` for the k-th body segment
    behind it and :data:`FREE` everywhere else.
    """

    head: tuple[int, int]
    apple: tuple[int, int] | None
    distances: np.ndarray
    snake_length: int
    tail: tuple[int, int]

    def is_body(self, cell: tuple[int, int]) -> bool:
        return self.distances[cell[0], cell[1]] > 0


def read_snapshot(snapshot: BoardSnapshot) -> BoardReading:
    """Rebuild head, apple and body distances from a flattened snapshot.

    Body order is recovered by walking backwards from the head: the segment
    behind a cell is the neighbour whose arrow points at it.
    """
    n = snapshot.board_size
    if len(snapshot.cells) != n * n:
        raise ValueError(
            f"Snapshot has {len(snapshot.cells)} cells, expected {n * n}.",
        )

    distances = np.full((n, n), FREE, dtype=np.int64)
    head = None
    apple = None
    arrows = 0
    for idx, symbol in enumerate(snapshot.cells):
        cell = divmod(idx, n)
        if symbol == HEAD_SYMBOL:
            if head is not None:
                raise ValueError("Snapshot contains more than one head.")
            head = cell
        elif symbol == APPLE_SYMBOL:
            apple = cell
        elif symbol in ARROW_SYMBOLS:
            arrows += 1
    if head is None:
        raise ValueError("Snapshot contains no head.")

    distances[head] = 0
    tail = head
    length = 1
    current = _segment_behind(snapshot, head)
    while current is not None:
        if distances[current] != FREE:
            raise ValueError(f"Body chain loops back on itself at {current}.")
        distances[current] = length
        tail = current
        length += 1
        current = _segment_behind(snapshot, current)

    if length - 1 != arrows:
        raise ValueError(
            f"Only {length - 1} of {arrows} body segments are connected "
            "to the head.",
        )

    return BoardReading(
        head=head,
        apple=apple,
        distances=distances,
        snake_length=length,
        tail=tail,
    )


def _segment_behind(
    snapshot: BoardSnapshot, cell: tuple[int, int],
) -> tuple[int, int] | None:
    n = snapshot.board_size
    for direction in Direction:
        # The segment behind moved in `direction` to reach `cell`.
        dr, dc = direction.value
        r, c = cell[0] - dr, cell[1] - dc
        if 0 <= r < n and 0 <= c < n and snapshot.symbol_at(r, c) == direction.arrow:
            return r, c
    return None


class Solver:
    """Stateless move selection for even-sized boards.

    From the head's node, forward edges are tried longest hop first; the
    first one that survives every check below is taken:

    * the target is not a body segment;
    * unless the snake is about to fill the board, the cycle distance from
      the target back round to the head exceeds the snake's length;
    * the hop does not jump over the apple;
    * no body segment lies on the cycle between head and target;
    * a shortcut keeps at least ``tail_gap_ratio`` of the board free on the
      cycle between the target and the tail.

    The last check leaves room between head and tail for the apples eaten
    while the tail catches up, so the cycle successor stays free.
    """

    def __init__(
        self,
        board_size: int,
        graph: RouteGraph | None = None,
        tail_gap_ratio: float = 0.5,
    ) -> None:
        if not 0.0 <= tail_gap_ratio < 1.0:
            raise ValueError("tail_gap_ratio must be in [0, 1).")
        self.graph = graph if graph is not None else RouteGraph(board_size)
        if self.graph.size != board_size:
            raise ValueError(
                f"Route graph is for a {self.graph.size}x{self.graph.size} "
                f"board, not {board_size}x{board_size}.",
            )
        self.board_size = board_size
        self.min_tail_gap = int(tail_gap_ratio * self.graph.total)

    def decide(self, snapshot: BoardSnapshot) -> Decision:
        """Choose the next direction for the snake shown in *snapshot*."""
        reading = read_snapshot(snapshot)
        node = self.graph.node_at(reading.head)

        for target in node.edges:
            reason = self._rejection(node, target, reading)
            if reason is not None:
                logger.debug(
                    "Edge %d -> %d rejected: %s.",
                    node.sequence, target.sequence, reason,
                )
                continue
            hop = node.hop(target, self.graph.total)
            kind = MoveKind.SHORTCUT if hop > 1 else MoveKind.CYCLE
            return Decision(
                Direction.between(reading.head, target.cell),
                kind,
                target.sequence,
            )

        fallback = self.graph.successor(node)
        logger.warning(
            "No verified-safe move from sequence %d; defaulting to the "
            "cycle successor %d.",
            node.sequence, fallback.sequence,
        )
        return Decision(
            Direction.between(reading.head, fallback.cell),
            MoveKind.FALLBACK,
            fallback.sequence,
        )

    def _rejection(
        self, node: RouteNode, target: RouteNode, reading: BoardReading,
    ) -> str | None:
        """Return why the hop *node* -> *target* is unsafe, or ``None``."""
        total = self.graph.total
        length = reading.snake_length

        if reading.is_body(target.cell):
            return "target is part of the body"

        if length < total - 1:
            return_cost = (total - target.sequence) + node.sequence
            if return_cost <= length:
                return "snake too long to come back round"

        if reading.apple is not None:
            apple_seq = self.graph.sequence_of(reading.apple)
            if node.sequence < apple_seq < target.sequence:
                return "would skip the apple"

        for seq in range(node.sequence + 1, target.sequence):
            if reading.is_body(self.graph.cell_of(seq)):
                return "body lies between head and target"

        if node.hop(target, total) > 1:
            tail_seq = self.graph.sequence_of(reading.tail)
            gap = (tail_seq - target.sequence - 1) % total
            if gap < self.min_tail_gap:
                return "too close to the tail"

        return None


class AutoPlayer:
    """Drives a :class:`GameEngine` with a :class:`Solver`, one tick at a time."""

    def __init__(self, engine: GameEngine, solver: Solver | None = None) -> None:
        self.engine = engine
        self.solver = solver if solver is not None else Solver(engine.board_size)
        self.last_decision: Decision | None = None
        self.fallbacks = 0

    def tick(self) -> Status:
        """Decide on a move for the current board and apply it."""
        if self.engine.status.terminal:
            return self.engine.status
        decision = self.solver.decide(self.engine.get_snapshot())
        self.last_decision = decision
        if not decision.verified:
            self.fallbacks += 1
        return self.engine.tick(decision.direction)

    def play(self, max_ticks: int | None = None) -> Status:
        """Tick until the game ends or *max_ticks* moves have been made."""
        status = self.engine.status
        count = 0
        while not status.terminal:
            if max_ticks is not None and count >= max_ticks:
                break
            status = self.tick()
            count += 1
        return status
