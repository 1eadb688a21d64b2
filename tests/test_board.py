import sys

sys.path.append('src')

import numpy as np
import pytest

from multitris.board import EMPTY, Board
from multitris.shape import Shape, ShapeType

_ = EMPTY


def make_board(rows):
    board = Board(len(rows[0]), len(rows))
    board.grid = np.array(rows, dtype=np.int64)
    return board


def test_new_board_is_empty():
    board = Board(4, 3)
    assert board.grid.shape == (3, 4)
    assert all(board.player_at(r, c) == EMPTY for r in range(3) for c in range(4))


def test_board_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        Board(0, 5)


@pytest.mark.parametrize("row", [1, 2, 3])
def test_dropping_onto_the_floor(row):
    board = Board(5, 5)
    shape = Shape(ShapeType.T, player_id=1, col=2, row=row)
    assert board.drop_to_floor(shape) is True
    assert shape.row == 3
    assert board.grid.tolist() == [
        [_, _, _, _, _],
        [_, _, _, _, _],
        [_, _, _, _, _],
        [_, 1, 1, 1, _],
        [_, _, 1, _, _],
    ]


@pytest.mark.parametrize("row", [0, 2])
def test_dropping_onto_locked_blocks(row):
    board = make_board([
        [_, _, _, _, _],
        [_, _, _, _, _],
        [_, _, _, _, _],
        [_, 2, _, _, _],
        [_, 2, _, _, _],
    ])
    shape = Shape(ShapeType.T, player_id=1, col=2, row=row)
    board.drop_to_floor(shape)
    assert board.grid.tolist() == [
        [_, _, _, _, _],
        [_, _, _, _, _],
        [_, 1, 1, 1, _],
        [_, 2, 1, _, _],
        [_, 2, _, _, _],
    ]


def test_drop_of_conflicting_shape_writes_nothing(caplog):
    board = make_board([
        [_, _, _],
        [_, 4, _],
        [_, _, _],
    ])
    shape = Shape(ShapeType.T, player_id=1, col=1, row=1)
    assert board.drop_to_floor(shape) is False
    assert board.grid.tolist() == [[_, _, _], [_, 4, _], [_, _, _]]
    assert shape.row == 1
    assert "aborting" in caplog.text


def _overlap_board():
    return make_board([
        [_, _, _, _, _],
        [_, _, _, _, _],
        [_, 2, _, _, _],
        [_, _, _, _, _],
        [_, _, _, _, _],
    ])


def test_shape_overlaps_block_at_non_origin_cell():
    assert _overlap_board().can_place(Shape(ShapeType.T, 1, col=2, row=2)) is False


def test_rotated_shape_avoids_block():
    assert _overlap_board().can_place(Shape(ShapeType.T, 1, col=2, row=2, rotation=3)) is True


def test_shape_overlaps_block_at_origin():
    assert _overlap_board().can_place(Shape(ShapeType.T, 1, col=1, row=2)) is False


def test_shape_out_of_bounds_at_non_origin_cell():
    assert Board(5, 5).can_place(Shape(ShapeType.T, 1, col=0, row=2)) is False


def test_rotated_shape_is_within_bounds():
    assert Board(5, 5).can_place(Shape(ShapeType.T, 1, col=0, row=2, rotation=3)) is True


def test_shape_out_of_bounds_at_origin():
    assert Board(5, 5).can_place(Shape(ShapeType.T, 1, col=-1, row=2, rotation=3)) is False


def test_rows_above_the_top_are_in_bounds():
    board = Board(5, 5)
    assert board.can_place(Shape(ShapeType.T, 1, col=2, row=-1)) is True
    assert board.can_place(Shape(ShapeType.I, 1, col=2, row=-10)) is True


def test_rows_below_the_bottom_are_out_of_bounds():
    board = Board(5, 5)
    shape = Shape(ShapeType.T, 1, col=2, row=3)
    assert board.can_place(shape) is True
    assert board.can_place(shape, row=4) is False
    assert board.can_place(shape, col=4) is False
    assert board.can_place(shape, rotation=3) is True


def test_lock_out_of_bounds_raises_and_writes_nothing():
    board = Board(5, 5)
    with pytest.raises(IndexError):
        board.lock(Shape(ShapeType.T, 1, col=0, row=2))
    with pytest.raises(IndexError):
        board.lock(Shape(ShapeType.T, 1, col=2, row=-1))
    assert np.all(board.grid == EMPTY)


def test_player_at_outside_board_raises():
    with pytest.raises(IndexError):
        Board(3, 3).player_at(3, 0)


def test_clearing_exactly_one_row():
    board = make_board([
        [_, _, _, _, _],
        [_, _, 1, _, _],
        [1, 2, 1, 1, 5],
        [_, _, _, 4, _],
        [_, _, 3, _, _],
    ])
    assert board.is_row_full(2)
    assert board.clear_full_rows() == 1
    assert board.grid.tolist() == [
        [_, _, _, _, _],
        [_, _, _, _, _],
        [_, _, 1, _, _],
        [_, _, _, 4, _],
        [_, _, 3, _, _],
    ]


def test_clearing_multiple_rows():
    board = make_board([
        [_, _, 1],
        [_, 1, _],
        [7, 8, 9],
        [3, 4, 5],
        [6, _, _],
        [1, 2, 3],
        [_, _, _],
    ])
    assert board.clear_full_rows() == 3
    assert board.grid.tolist() == [
        [_, _, _],
        [_, _, _],
        [_, _, _],
        [_, _, 1],
        [_, 1, _],
        [6, _, _],
        [_, _, _],
    ]


def test_no_rows_to_clear():
    rows = [
        [7, _, 9],
        [_, 4, 5],
        [6, 5, _],
        [1, 2, _],
        [_, _, _],
    ]
    board = make_board(rows)
    assert board.clear_full_rows() == 0
    assert board.grid.tolist() == rows
