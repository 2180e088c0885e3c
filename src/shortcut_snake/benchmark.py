"""Autoplay benchmarking utilities."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from shortcut_snake.engine import GameEngine, Status
from shortcut_snake.route import RouteGraph
from shortcut_snake.solver import AutoPlayer, Solver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from an autoplay benchmark run."""

    board_size: int
    total_games: int
    wins: int
    losses: int
    unfinished: int
    fallbacks: int
    total_ticks: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games on "
            f"{self.board_size}x{self.board_size} | "
            f"{self.wins} won, {self.losses} lost, "
            f"{self.unfinished} unfinished, {self.fallbacks} fallbacks | "
            f"{self.total_ticks} ticks in {self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def benchmark_autoplay(
    *,
    num_games: int = 10,
    board_size: int = 6,
    starting_body_size: int = 2,
    max_ticks: int | None = None,
    seed: int = 42,
    tail_gap_ratio: float = 0.5,
) -> BenchmarkResult:
    """Play *num_games* autoplay games and report outcomes and throughput.

    Every game gets its own engine seeded from a master RNG; the route graph
    is built once and shared read-only.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    if max_ticks is None:
        # Even without shortcuts each apple is reached within one lap.
        max_ticks = board_size ** 4

    graph = RouteGraph(board_size)
    solver = Solver(board_size, graph=graph, tail_gap_ratio=tail_gap_ratio)
    rng = np.random.default_rng(seed)

    outcomes = {Status.WIN: 0, Status.LOSS: 0, Status.CONTINUE: 0}
    total_ticks = 0
    fallbacks = 0
    start = time.perf_counter()

    for _ in range(num_games):
        engine = GameEngine(
            board_size=board_size,
            starting_body_size=starting_body_size,
            seed=int(rng.integers(2**31)),
        )
        player = AutoPlayer(engine, solver)
        status = player.play(max_ticks=max_ticks)
        outcomes[status] += 1
        total_ticks += engine.ticks
        fallbacks += player.fallbacks

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        board_size=board_size,
        total_games=num_games,
        wins=outcomes[Status.WIN],
        losses=outcomes[Status.LOSS],
        unfinished=outcomes[Status.CONTINUE],
        fallbacks=fallbacks,
        total_ticks=total_ticks,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
