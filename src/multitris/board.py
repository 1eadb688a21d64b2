"""Board representation for the shared playfield."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .config import BOARD_HEIGHT, BOARD_WIDTH
from .shape import Shape


LOGGER = logging.getLogger(__name__)

Grid = NDArray[np.int64]

# Value stored in a cell that holds no locked block.  Any other value is the id
# of the player whose shape locked there.
EMPTY = -1


def create_empty_grid(width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> Grid:
    """Return a new ``height`` x ``width`` grid filled with :data:`EMPTY`."""

    return np.full((height, width), EMPTY, dtype=np.int64)


class Board:
    """Grid of locked blocks shared by every player."""

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def player_at(self, row: int, col: int) -> int:
        """Return the id locked at ``(row, col)``, or :data:`EMPTY`.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != EMPTY))

    def can_place(
        self,
        shape: Shape,
        row: Optional[int] = None,
        col: Optional[int] = None,
        rotation: Optional[int] = None,
    ) -> bool:
        """Return ``True`` if ``shape`` fits at the given placement.

        ``row``, ``col`` and ``rotation`` default to the shape's own values, so
        callers can test a prospective move without mutating the shape.  Cells
        above the top of the board (negative rows) are not out of bounds; cells
        left, right or below the board are, as are cells already holding a
        locked block.
        """

        for cell_col, cell_row in shape.blocks(row, col, rotation):
            if not (0 <= cell_col < self.width and cell_row < self.height):
                return False
            if cell_row >= 0 and self.grid[cell_row, cell_col] != EMPTY:
                return False
        return True

    def lock(self, shape: Shape) -> None:
        """Write the shape's player id into every cell it occupies.

        Raises:
            IndexError: If any block lies outside the grid.  Nothing is written
                in that case.
        """

        coordinates = np.asarray(shape.blocks(), dtype=np.int64)
        if coordinates.size == 0:
            return

        cols, rows = coordinates.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")

        self.grid[rows, cols] = shape.player_id

    def drop_to_floor(self, shape: Shape) -> bool:
        """Move ``shape`` down until it touches something, then lock it.

        The shape must currently fit on the board.  If it does not, nothing is
        written and ``False`` is returned.
        """

        if not self.can_place(shape):
            LOGGER.warning(
                "Shape of player %s conflicts with the board while dropping; aborting",
                shape.player_id,
            )
            return False

        row = shape.row
        while self.can_place(shape, row + 1):
            row += 1
        shape.row = row
        self.lock(shape)
        return True

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows above each cleared row shift down by one per cleared row below
        them, and the freed rows at the top become empty.
        """

        full_rows = np.all(self.grid != EMPTY, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.full((cleared, self.width), EMPTY, dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared
