"""Translate raw pygame events into game commands.

The mouse moves the shape to the column under the pointer and a click drops
it.  The arrow keys rotate (left/right) and drop (down).  A second player on
the same keyboard uses W to rotate, A/D to step one column and S to drop.
"""

from __future__ import annotations

from typing import Dict, Optional

import pygame

from .commands import Command, DropCommand, MoveCommand, RotateCommand, RotationDirection
from .config import CELL_SIZE


ARROW_KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_LEFT: RotateCommand(RotationDirection.LEFT),
    pygame.K_RIGHT: RotateCommand(RotationDirection.RIGHT),
    pygame.K_DOWN: DropCommand(),
}

# Column steps for the second keyboard player.  Moves are absolute, so the
# caller adds these to the shape's current column.
WASD_COLUMN_STEPS: Dict[int, int] = {
    pygame.K_a: -1,
    pygame.K_d: 1,
}


def column_for_pixel(x: float, cell_size: int = CELL_SIZE) -> int:
    """Return the board column under horizontal pixel offset ``x``."""

    return int(x // cell_size)


def command_for_key(key: int) -> Optional[Command]:
    """Return the arrow-key command bound to ``key``, or ``None``."""

    return ARROW_KEY_COMMANDS.get(key)


def wasd_command(key: int, current_col: Optional[int]) -> Optional[Command]:
    """Return the command bound to ``key`` for the second keyboard player.

    ``current_col`` is that player's shape column; without it the column keys
    have nothing to step from and yield ``None``.
    """

    if key == pygame.K_w:
        return RotateCommand(RotationDirection.RIGHT)
    if key == pygame.K_s:
        return DropCommand()
    step = WASD_COLUMN_STEPS.get(key)
    if step is None or current_col is None:
        return None
    return MoveCommand(current_col + step)


class MouseColumnTracker:
    """Emit a move command each time the pointer enters a new column."""

    def __init__(self, cell_size: int = CELL_SIZE) -> None:
        self.cell_size = cell_size
        self.last_column: Optional[int] = None

    def on_motion(self, x: float) -> Optional[MoveCommand]:
        column = column_for_pixel(x, self.cell_size)
        if column == self.last_column:
            return None
        self.last_column = column
        return MoveCommand(column)

    def reset(self) -> None:
        self.last_column = None
