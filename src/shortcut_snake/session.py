"""Game session driver with serialized ticks and an optional timer thread."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from shortcut_snake.config import GameConfig
from shortcut_snake.engine import BoardSnapshot, GameEngine, Status
from shortcut_snake.snake import Direction
from shortcut_snake.solver import AutoPlayer, Decision, Solver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """State observed right after one tick."""

    tick: int
    status: Status
    snapshot: BoardSnapshot
    decision: Decision | None = None


class GameSession:
    """Owns one game and serializes every tick-then-read against readers.

    A tick and the snapshot taken right after it happen under the same
    lock, so a renderer on another thread never sees a half-applied move.
    """

    def __init__(self, config: GameConfig, autoplay: bool = True) -> None:
        self.config = config
        self.engine = GameEngine(
            board_size=config.board_size,
            starting_body_size=config.starting_body_size,
            seed=config.seed,
        )
        self.player: AutoPlayer | None = None
        if autoplay:
            solver = Solver(
                config.board_size, tail_gap_ratio=config.tail_gap_ratio,
            )
            self.player = AutoPlayer(self.engine, solver)

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.last_frame: Frame | None = None

    @property
    def status(self) -> Status:
        return self.engine.status

    def snapshot(self) -> BoardSnapshot:
        with self._lock:
            return self.engine.get_snapshot()

    def step(self, direction: Direction | None = None) -> Frame:
        """Apply one tick and capture the resulting board."""
        with self._lock:
            decision = None
            if direction is not None:
                status = self.engine.tick(direction)
            elif self.player is not None:
                status = self.player.tick()
                decision = self.player.last_decision
            else:
                raise ValueError("A manual session needs a direction to tick.")
            frame = Frame(
                tick=self.engine.ticks,
                status=status,
                snapshot=self.engine.get_snapshot(),
                decision=decision,
            )
            self.last_frame = frame
            return frame

    def run(self, on_frame: Callable[[Frame], None] | None = None) -> Status:
        """Tick until the game ends, ``max_ticks`` is reached, or stopped."""
        delay = self.config.move_delay_ms / 1000.0
        count = 0
        logger.info(
            "Session started on a %dx%d board.",
            self.config.board_size, self.config.board_size,
        )
        while not self.status.terminal and not self._stop.is_set():
            if self.config.max_ticks is not None and count >= self.config.max_ticks:
                logger.info("Tick limit of %d reached.", self.config.max_ticks)
                break
            frame = self.step()
            count += 1
            if on_frame is not None:
                on_frame(frame)
            if delay > 0 and not frame.status.terminal:
                self._stop.wait(delay)
        return self.status

    def start(
        self, on_frame: Callable[[Frame], None] | None = None,
    ) -> threading.Thread:
        """Run :meth:`run` on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Session is already running.")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run, args=(on_frame,), name="snake-session", daemon=True,
        )
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        """Ask the running loop to stop after the current tick."""
        self._stop.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
