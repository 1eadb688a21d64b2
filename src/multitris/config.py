"""Tunable constants shared by the engine and its front-ends."""

from __future__ import annotations

# Dimensions of the shared board.
BOARD_WIDTH = 10
BOARD_HEIGHT = 20

# Milliseconds between simulation steps.
STEP_INTERVAL_MS = 500

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the render loop at
FPS = 60

# Colours cycled through by player id, for both falling and locked blocks.
PLAYER_COLORS = [
    (0, 255, 255),
    (255, 255, 0),
    (128, 0, 128),
    (0, 255, 0),
    (255, 0, 0),
    (0, 0, 255),
    (255, 165, 0),
]

BACKGROUND_COLOR = (0, 0, 0)
GRID_LINE_COLOR = (50, 50, 50)
