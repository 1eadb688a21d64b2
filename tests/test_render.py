import sys

sys.path.append('src')

from multitris.board import EMPTY, Board
from multitris.config import PLAYER_COLORS
from multitris.game import Game
from multitris.render import color_for, format_grid, render_grid
from multitris.shape import Shape, ShapeType

_ = EMPTY


def test_render_overlays_falling_shapes_without_mutating():
    board = Board(5, 4)
    board.grid[3, 0] = 7
    game = Game(board)
    game.add_player(1, Shape(ShapeType.T, 1, col=2, row=1))

    grid = render_grid(game)

    assert grid == [
        [_, _, _, _, _],
        [_, 1, 1, 1, _],
        [_, _, 1, _, _],
        [7, _, _, _, _],
    ]
    assert game.player_at(1, 2) == EMPTY


def test_render_clips_cells_above_the_top():
    game = Game(Board(5, 3))
    game.add_player(2, Shape(ShapeType.T, 2, col=2, row=-1))

    grid = render_grid(game)

    assert grid[0] == [_, _, 2, _, _]
    assert len(grid) == 3


def test_format_grid_shows_owner_digits():
    assert format_grid([[_, 3], [12, _]]) == ".3\n2."


def test_colors_cycle_by_player_id():
    assert color_for(0) == PLAYER_COLORS[0]
    assert color_for(len(PLAYER_COLORS) + 1) == PLAYER_COLORS[1]
