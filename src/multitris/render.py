"""Read-only views of a game for renderers."""

from __future__ import annotations

from typing import List, Tuple

from .board import EMPTY
from .config import PLAYER_COLORS
from .game import Game

Color = Tuple[int, int, int]


def color_for(player_id: int) -> Color:
    """Return the colour used to draw blocks of ``player_id``."""

    return PLAYER_COLORS[player_id % len(PLAYER_COLORS)]


def render_grid(game: Game) -> List[List[int]]:
    """Return a copy of the board with every falling shape overlaid.

    Locked blocks win over falling ones, and cells above the top of the board
    are skipped.  The game itself is not touched.
    """

    grid = [
        [game.player_at(row, col) for col in range(game.width)]
        for row in range(game.height)
    ]
    for shape in game.shapes():
        for col, row in shape.blocks():
            if 0 <= row < game.height and 0 <= col < game.width and grid[row][col] == EMPTY:
                grid[row][col] = shape.player_id
    return grid


def format_grid(grid: List[List[int]]) -> str:
    """Return ``grid`` as text, one line per row.

    Empty cells print as ``.``; occupied ones as the last digit of the
    owner's id.
    """

    return "\n".join(
        "".join("." if cell == EMPTY else str(cell % 10) for cell in row)
        for row in grid
    )
