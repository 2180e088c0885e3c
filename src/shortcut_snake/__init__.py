"""Shortcut Snake: self-playing snake on a covering cycle."""

from shortcut_snake.apple import ApplePositionPool
from shortcut_snake.config import GameConfig
from shortcut_snake.engine import BoardSnapshot, GameEngine, Status
from shortcut_snake.grid import CellType, Grid
from shortcut_snake.route import RouteGraph, RouteNode, UnsupportedBoardError
from shortcut_snake.session import Frame, GameSession
from shortcut_snake.snake import BodySegmentQueue, Direction
from shortcut_snake.solver import (
    AutoPlayer,
    BoardReading,
    Decision,
    MoveKind,
    Solver,
    read_snapshot,
)

__all__ = [
    "ApplePositionPool",
    "AutoPlayer",
    "BoardReading",
    "BoardSnapshot",
    "BodySegmentQueue",
    "CellType",
    "Decision",
    "Direction",
    "Frame",
    "GameConfig",
    "GameEngine",
    "GameSession",
    "Grid",
    "MoveKind",
    "RouteGraph",
    "RouteNode",
    "Solver",
    "Status",
    "UnsupportedBoardError",
    "read_snapshot",
]
