"""Headless ASCII demo for the shared-board engine.

Run with: `python -m multitris`

Several simulated players send random commands while the game steps, and the
board is printed as text with each block shown as its owner's id.  Useful as a
smoke test of the whole engine without a window.
"""

from __future__ import annotations

import argparse
import logging
import random

from . import DropCommand, Game, MoveCommand, RotateCommand, RotationDirection, format_grid, render_grid
from .board import Board
from .commands import Command
from .config import BOARD_HEIGHT, BOARD_WIDTH


LOGGER = logging.getLogger(__name__)


def random_command(rng: random.Random, width: int) -> Command:
    roll = rng.random()
    if roll < 0.1:
        return DropCommand()
    if roll < 0.4:
        return RotateCommand(rng.choice(list(RotationDirection)))
    return MoveCommand(rng.randrange(width))


def run(game: Game, steps: int, rng: random.Random, frame_every: int = 0) -> None:
    """Step ``game`` ``steps`` times, each player sending one random command per tick."""

    for index in range(1, steps + 1):
        for player_id in game.player_ids():
            game.on_command(player_id, random_command(rng, game.width))
        game.step()
        if game.is_game_over:
            LOGGER.info("Game over after %d step(s); resetting", index)
            game.reset()
        if frame_every and index % frame_every == 0:
            print(f"-- step {index}")
            print(format_grid(render_grid(game)))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--players", type=int, default=3, help="Number of simulated players.")
    parser.add_argument("--steps", type=int, default=200, help="Number of simulation steps.")
    parser.add_argument("--width", type=int, default=BOARD_WIDTH, help="Board columns.")
    parser.add_argument("--height", type=int, default=BOARD_HEIGHT, help="Board rows.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for shapes and commands.")
    parser.add_argument(
        "--frame-every",
        type=int,
        default=0,
        help="Print the board every N steps (0 prints only the final frame).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    rng = random.Random(args.seed)
    game = Game(Board(args.width, args.height), rng=random.Random(args.seed))
    for player_id in range(args.players):
        game.add_player(player_id)

    run(game, args.steps, rng, frame_every=args.frame_every)
    print(format_grid(render_grid(game)))


if __name__ == "__main__":
    main()
