"""Shape definitions and rotation geometry.

Every shape kind owns a fixed table of rotation states.  A state is a list of
``(dx, dy)`` offsets from the shape's origin, with ``dy`` growing downwards
like board rows.  All states of a kind contain the origin ``(0, 0)`` so a
shape spawned on an occupied cell always collides.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple
import random

Offset = Tuple[int, int]
RotationState = List[Offset]


class ShapeType(str, Enum):
    """Enumeration of the seven shape kinds, in rotation-table order."""

    T = "T"
    I = "I"
    O = "O"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _rotate(state: RotationState) -> RotationState:
    """Return ``state`` rotated 90 degrees clockwise around the origin.

    Rows grow downwards, so a clockwise turn maps ``(dx, dy)`` to
    ``(-dy, dx)``.  No normalisation is applied: the origin stays put and the
    rest of the piece turns around it.
    """

    return [(-dy, dx) for dx, dy in state]


def _generate_rotations(state: RotationState, count: int) -> List[RotationState]:
    """Generate ``count`` successive rotation states starting from ``state``."""

    rotations = [state]
    for _ in range(count - 1):
        state = _rotate(state)
        rotations.append(state)
    return rotations


# Spawn orientation of each kind and the number of distinct states it cycles
# through.  Symmetric kinds use fewer states so that rotating them toggles
# between orientations instead of drifting around the origin.
_BASE_SHAPES: Dict[ShapeType, Tuple[RotationState, int]] = {
    ShapeType.T: ([(-1, 0), (0, 0), (1, 0), (0, 1)], 4),
    ShapeType.I: ([(-1, 0), (0, 0), (1, 0), (2, 0)], 2),
    ShapeType.O: ([(0, 0), (1, 0), (0, 1), (1, 1)], 1),
    ShapeType.S: ([(0, 0), (1, 0), (-1, 1), (0, 1)], 2),
    ShapeType.Z: ([(-1, 0), (0, 0), (0, 1), (1, 1)], 2),
    ShapeType.J: ([(-1, 0), (0, 0), (1, 0), (1, 1)], 4),
    ShapeType.L: ([(-1, 0), (0, 0), (1, 0), (-1, 1)], 4),
}


SHAPE_ROTATIONS: Dict[ShapeType, List[RotationState]] = {
    kind: _generate_rotations(state, count)
    for kind, (state, count) in _BASE_SHAPES.items()
}


def rotation_count(kind: ShapeType) -> int:
    """Return how many rotation states ``kind`` cycles through."""

    return len(SHAPE_ROTATIONS[kind])


def shape_offsets(kind: ShapeType, rotation: int) -> RotationState:
    """Return the ``(dx, dy)`` offsets for ``kind`` at ``rotation``.

    Parameters
    ----------
    kind:
        The :class:`ShapeType` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any
        integer, including a negative one, is accepted.
    """

    states = SHAPE_ROTATIONS[kind]
    return states[rotation % len(states)]


def random_shape_type(rng: Optional[random.Random] = None) -> ShapeType:
    """Return a shape kind chosen uniformly over all kinds."""

    return (rng or random).choice(list(ShapeType))


@dataclass
class Shape:
    """Falling piece owned by one player."""

    kind: ShapeType
    player_id: int
    col: int = 0
    row: int = 0
    rotation: int = 0

    def coordinates(self, rotation: Optional[int] = None) -> RotationState:
        """Return the offsets of this shape at ``rotation``.

        When ``rotation`` is omitted the shape's own rotation is used.
        """

        if rotation is None:
            rotation = self.rotation
        return shape_offsets(self.kind, rotation)

    def blocks(
        self,
        row: Optional[int] = None,
        col: Optional[int] = None,
        rotation: Optional[int] = None,
    ) -> List[Offset]:
        """Return absolute ``(col, row)`` cells, optionally at another placement."""

        row = self.row if row is None else row
        col = self.col if col is None else col
        return [(col + dx, row + dy) for dx, dy in self.coordinates(rotation)]
