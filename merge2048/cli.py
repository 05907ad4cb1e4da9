"""
merge2048 CLI - Headless command-line tooling for the engine.

Usage:
    merge2048 autoplay [--algorithm expectimax] [--seed 42] [--json]
    merge2048 moves LLUR [--seed 42]

Settings not given on the command line come from MERGE2048_* environment
variables (see GameConfig.from_env).
"""

import argparse
from dataclasses import replace
import logging
import sys

from .api import snapshot_game
from .bots import AIAlgorithm
from .config import GameConfig
from .engine_core import Board, Direction, Game
from .errors import GameError
from .session import AIGameController

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="merge2048 - 2048 rules engine with computer players",
        prog="merge2048",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Autoplay command
    autoplay_parser = subparsers.add_parser("autoplay", help="Let an AI play a full game")
    autoplay_parser.add_argument(
        "--algorithm", "-a",
        choices=[algorithm.value for algorithm in AIAlgorithm],
        default=AIAlgorithm.EXPECTIMAX.value,
    )
    autoplay_parser.add_argument("--seed", type=int, help="Seed for reproducible games")
    autoplay_parser.add_argument("--size", type=int, help="Board size")
    autoplay_parser.add_argument("--max-moves", type=int, default=10_000)
    autoplay_parser.add_argument("--json", action="store_true", help="Print a JSON snapshot")

    # Moves command
    moves_parser = subparsers.add_parser("moves", help="Apply a direction string such as LLUR")
    moves_parser.add_argument("directions", help="Letters U/D/L/R")
    moves_parser.add_argument("--seed", type=int, help="Seed for reproducible games")
    moves_parser.add_argument("--size", type=int, help="Board size")
    moves_parser.add_argument("--json", action="store_true", help="Print a JSON snapshot")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "autoplay": cmd_autoplay,
        "moves": cmd_moves,
    }
    if args.command not in commands:
        parser.print_help()
        return 1

    try:
        return commands[args.command](args)
    except GameError as e:
        logger.error("%s (%s)", e, e.error_code)
        return 1


def build_config(args) -> GameConfig:
    config = GameConfig.from_env()
    if args.seed is not None:
        config = config.with_seed(args.seed)
    if args.size is not None:
        config = replace(config, board_size=args.size)
    return config


def format_board(board: Board) -> str:
    width = max(len(str(board.max_tile())), 1)
    lines = []
    for row in board.to_rows():
        lines.append(" ".join(str(value).rjust(width) if value else ".".rjust(width) for value in row))
    return "\n".join(lines)


def print_game(game: Game, as_json: bool):
    if as_json:
        print(snapshot_game(game).model_dump_json(indent=2))
        return

    stats = game.stats()
    print(format_board(game.board))
    print(f"\nState: {game.state.value}")
    print(f"Score: {stats.score} (best {stats.best_score})")
    print(f"Moves: {stats.moves}")
    print(f"Max tile: {game.board.max_tile()}")


def cmd_autoplay(args) -> int:
    """Run an AI game to completion."""
    controller = AIGameController(build_config(args), AIAlgorithm(args.algorithm))
    result = controller.play(max_moves=args.max_moves)

    if not args.json:
        print(f"Algorithm: {controller.algorithm.value}")
        print(f"Stopped: {result.stopped_by}\n")
    print_game(controller.game, args.json)
    return 0


def cmd_moves(args) -> int:
    """Apply a direction string to a fresh game."""
    game = Game(build_config(args))

    for letter in args.directions:
        try:
            direction = Direction.parse(letter)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        moved = game.make_move(direction)
        logger.debug("%s -> moved=%s", direction.value, moved)

    print_game(game, args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
