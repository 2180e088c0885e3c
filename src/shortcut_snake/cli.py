"""Command-line launcher for autoplay games, benchmarks, and route tables."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from shortcut_snake.config import GameConfig
from shortcut_snake.engine import Status
from shortcut_snake.render import render_board, render_route
from shortcut_snake.route import RouteGraph
from shortcut_snake.session import Frame, GameSession

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortcut-snake",
        description="Self-playing snake on a covering cycle with shortcuts.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- play ---
    play_p = sub.add_parser("play", help="Run one autoplay game.")
    play_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    play_p.add_argument("--board-size", type=int, default=None)
    play_p.add_argument("--starting-body", type=int, default=None)
    play_p.add_argument("--seed", type=int, default=None)
    play_p.add_argument("--delay-ms", type=int, default=None)
    play_p.add_argument("--max-ticks", type=int, default=None)
    play_p.add_argument(
        "--watch", action="store_true",
        help="Print the board after every tick.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Play many games and report outcomes.",
    )
    bench_p.add_argument("--num-games", type=int, default=10)
    bench_p.add_argument("--board-size", type=int, default=6)
    bench_p.add_argument("--starting-body", type=int, default=2)
    bench_p.add_argument("--max-ticks", type=int, default=None)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- route ---
    route_p = sub.add_parser("route", help="Print the covering cycle.")
    route_p.add_argument("--board-size", type=int, default=10)

    return parser


def _run_play(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    flag_map = {
        "board_size": "board_size",
        "starting_body": "starting_body_size",
        "seed": "seed",
        "delay_ms": "move_delay_ms",
        "max_ticks": "max_ticks",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val
    if not args.watch and "move_delay_ms" not in overrides:
        overrides["move_delay_ms"] = 0
    config = replace(config, **overrides)

    try:
        session = GameSession(config)
    except ValueError as exc:
        parser.error(str(exc))

    def show(frame: Frame) -> None:
        print(render_board(frame.snapshot))  # noqa: T201
        print()  # noqa: T201

    status = session.run(on_frame=show if args.watch else None)
    engine = session.engine
    if not args.watch:
        print(render_board(engine.get_snapshot()))  # noqa: T201
    print(  # noqa: T201
        f"Result: {status.value} after {engine.ticks} ticks, "
        f"score {engine.score}, {session.player.fallbacks} fallbacks",
    )
    return 0 if status is Status.WIN else 1


def _run_benchmark(
    args: argparse.Namespace, parser: argparse.ArgumentParser,
) -> int:
    from shortcut_snake.benchmark import benchmark_autoplay

    try:
        result = benchmark_autoplay(
            num_games=args.num_games,
            board_size=args.board_size,
            starting_body_size=args.starting_body,
            max_ticks=args.max_ticks,
            seed=args.seed,
        )
    except ValueError as exc:
        parser.error(str(exc))
    print(result.summary())  # noqa: T201
    return 0


def _run_route(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    try:
        graph = RouteGraph(args.board_size)
    except ValueError as exc:
        parser.error(str(exc))
    print(render_route(graph))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``shortcut-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "play": _run_play,
        "benchmark": _run_benchmark,
        "route": _run_route,
    }
    return handlers[args.command](args, parser)


if __name__ == "__main__":
    sys.exit(main())
