"""Multiplayer falling-block puzzle engine on a shared board."""

from .board import EMPTY, Board
from .commands import Command, DropCommand, MoveCommand, RotateCommand, RotationDirection
from .game import Game, PlayerInfo
from .render import color_for, format_grid, render_grid
from .shape import Shape, ShapeType, random_shape_type, rotation_count, shape_offsets

__all__ = [
    "EMPTY",
    "Board",
    "Command",
    "DropCommand",
    "MoveCommand",
    "RotateCommand",
    "RotationDirection",
    "Game",
    "PlayerInfo",
    "Shape",
    "ShapeType",
    "color_for",
    "format_grid",
    "random_shape_type",
    "render_grid",
    "rotation_count",
    "shape_offsets",
]
