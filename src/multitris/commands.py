"""Commands a player can send to the game.

The set is closed: :data:`Command` lists every variant the game understands.
Decoding commands from a transport is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class RotationDirection(str, Enum):
    """Direction of a rotation request."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> int:
        """Return the rotation index change, ``-1`` or ``+1``."""

        return -1 if self is RotationDirection.LEFT else 1


@dataclass(frozen=True)
class RotateCommand:
    """Request to rotate the sender's shape."""

    direction: RotationDirection


@dataclass(frozen=True)
class MoveCommand:
    """Request to move the sender's shape to column ``col``."""

    col: int


@dataclass(frozen=True)
class DropCommand:
    """Request to drop the sender's shape to the floor and lock it."""


Command = Union[RotateCommand, MoveCommand, DropCommand]
