"""Plain-text views of the board and the route table."""

from __future__ import annotations

from shortcut_snake.engine import EMPTY_SYMBOL, BoardSnapshot
from shortcut_snake.route import RouteGraph

# Empty cells print as "E", as on the original board printer.
_DISPLAY_EMPTY = "E"


def render_board(snapshot: BoardSnapshot) -> str:
    """Return the board as one line of symbols per row."""
    return "\n".join(
        row.replace(EMPTY_SYMBOL, _DISPLAY_EMPTY) for row in snapshot.rows()
    )


def render_route(graph: RouteGraph) -> str:
    """Return the cycle's sequence numbers laid out on the board."""
    return "\n".join(
        " ".join(f"{int(seq):03d}" for seq in row) for row in graph.sequence
    )
