import random
import sys

sys.path.append('src')

import pytest

from multitris.shape import (
    SHAPE_ROTATIONS,
    Shape,
    ShapeType,
    random_shape_type,
    rotation_count,
    shape_offsets,
)


def test_rotating_a_shape_is_consistent():
    shape = Shape(ShapeType.T, player_id=1)
    assert shape.coordinates(8) == shape.coordinates()
    assert shape.coordinates(3) == shape.coordinates(7)
    assert shape.coordinates(1) != shape.coordinates()


@pytest.mark.parametrize("kind", list(ShapeType))
def test_rotation_wraps_in_both_directions(kind):
    count = rotation_count(kind)
    for rotation in range(-2 * count, 2 * count):
        for k in (-3, -1, 1, 2):
            assert shape_offsets(kind, rotation) == shape_offsets(kind, rotation + k * count)


def test_rotating_left_from_spawn_reaches_last_state():
    assert shape_offsets(ShapeType.T, -1) == SHAPE_ROTATIONS[ShapeType.T][3]


@pytest.mark.parametrize("kind", list(ShapeType))
def test_every_state_contains_the_origin(kind):
    for state in SHAPE_ROTATIONS[kind]:
        assert (0, 0) in state
        assert len(set(state)) == 4


def test_symmetric_kinds_have_fewer_states():
    assert rotation_count(ShapeType.O) == 1
    assert rotation_count(ShapeType.I) == 2
    assert rotation_count(ShapeType.T) == 4


def test_blocks_accept_overrides():
    shape = Shape(ShapeType.T, player_id=1, col=2, row=3)
    assert shape.blocks() == [(1, 3), (2, 3), (3, 3), (2, 4)]
    assert shape.blocks(row=0, col=5) == [(4, 0), (5, 0), (6, 0), (5, 1)]
    # Overrides never touch the shape itself
    assert (shape.col, shape.row, shape.rotation) == (2, 3, 0)


def test_random_shape_type_returns_every_kind():
    rng = random.Random(0)
    seen = {random_shape_type(rng) for _ in range(1000)}
    assert seen == set(ShapeType)
