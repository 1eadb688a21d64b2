"""Playable pygame front-end for the shared-board engine.

Up to two people can play on one machine: player ``0`` uses the mouse and
arrow keys, player ``1`` uses W/A/S/D.  The window only reads game state and
forwards commands; every rule lives in :class:`~multitris.game.Game`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import pygame

from .board import EMPTY, Board
from .config import (
    BACKGROUND_COLOR,
    BOARD_HEIGHT,
    BOARD_WIDTH,
    CELL_SIZE,
    FPS,
    GRID_LINE_COLOR,
    STEP_INTERVAL_MS,
)
from .commands import Command, DropCommand
from .controls import MouseColumnTracker, command_for_key, wasd_command
from .game import Game
from .render import color_for


LOGGER = logging.getLogger(__name__)

MOUSE_PLAYER = 0
WASD_PLAYER = 1


def draw_block(screen: pygame.Surface, col: int, row: int, player_id: int) -> None:
    rect = pygame.Rect(col * CELL_SIZE, row * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color_for(player_id), rect)
    pygame.draw.rect(screen, GRID_LINE_COLOR, rect, 1)


def draw_game(screen: pygame.Surface, game: Game) -> None:
    """Render falling shapes, then the locked blocks on top of them."""

    screen.fill(BACKGROUND_COLOR)
    for shape in game.shapes():
        for col, row in shape.blocks():
            draw_block(screen, col, row, shape.player_id)
    for row in range(game.height):
        for col in range(game.width):
            player_id = game.player_at(row, col)
            if player_id != EMPTY:
                draw_block(screen, col, row, player_id)


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(
        self,
        *,
        players: int = 1,
        width: int = BOARD_WIDTH,
        height: int = BOARD_HEIGHT,
        step_interval_ms: int = STEP_INTERVAL_MS,
    ) -> None:
        self.players = players
        self.width = width
        self.height = height
        self.step_interval_ms = step_interval_ms
        self._running = False
        self._paused = False
        self._task: asyncio.Task | None = None
        self._screen: pygame.Surface | None = None
        self._game: Game | None = None
        self._clock: pygame.time.Clock | None = None
        self._mouse = MouseColumnTracker()
        self._step_timer = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def game(self) -> Game | None:
        return self._game

    def new_game(self) -> Game:
        """Create a fresh session with the configured number of players."""

        game = Game(Board(self.width, self.height))
        for player_id in range(self.players):
            game.add_player(player_id)
        self._game = game
        self._mouse.reset()
        self._step_timer = 0
        return game

    def send(self, player_id: int, command: Command | None) -> None:
        if command is not None and self._game is not None:
            self._game.on_command(player_id, command)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Forward one pygame event to the game as a command."""

        game = self._game
        if game is None:
            return
        if game.is_game_over:
            if event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN):
                game.reset()
            return
        if event.type == pygame.MOUSEMOTION:
            self.send(MOUSE_PLAYER, self._mouse.on_motion(event.pos[0]))
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self.send(MOUSE_PLAYER, DropCommand())
        elif event.type == pygame.KEYDOWN:
            command = command_for_key(event.key)
            if command is not None:
                self.send(MOUSE_PLAYER, command)
            elif self.players > 1:
                shape = game.get_shape(WASD_PLAYER)
                self.send(
                    WASD_PLAYER,
                    wasd_command(event.key, shape.col if shape is not None else None),
                )

    def advance(self, dt: int) -> None:
        """Accumulate ``dt`` milliseconds and step the game when due."""

        if self._paused or self._game is None:
            return
        self._step_timer += dt
        while self._step_timer >= self.step_interval_ms:
            self._step_timer -= self.step_interval_ms
            self._game.step()

    async def _run_loop(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(
            (self.width * CELL_SIZE, self.height * CELL_SIZE)
        )
        pygame.display.set_caption("multitris")
        self._clock = pygame.time.Clock()

        self.new_game()
        LOGGER.info("Game started with %d player(s)", self.players)

        self._running = True
        while self._running:
            dt = self._clock.tick(FPS) if self._clock else 0
            # Even when paused, process events so the window remains responsive
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif not self._paused:
                    self.handle_event(event)

            self.advance(dt)

            if self._screen and self._game:
                draw_game(self._screen, self._game)
                status = "Game over - press a key" if self._game.is_game_over else ""
                if self._paused:
                    status = "Paused"
                pygame.display.set_caption(f"multitris {status}".strip())
                pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        self._paused = False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (e.g., plain Python); run synchronously
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())

    def pause(self) -> None:
        if not self._running:
            LOGGER.info("Pause ignored: game not running")
            return
        self._paused = True
        LOGGER.info("Paused")

    def resume(self) -> None:
        if not self._running:
            LOGGER.info("Resume ignored: game not running")
            return
        self._paused = False
        LOGGER.info("Resumed")

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        # The loop exits at the end of its current frame
        self._running = False


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--players", type=int, choices=(1, 2), default=1, help="Local players.")
    parser.add_argument("--width", type=int, default=BOARD_WIDTH, help="Board columns.")
    parser.add_argument("--height", type=int, default=BOARD_HEIGHT, help="Board rows.")
    parser.add_argument(
        "--step-ms",
        type=int,
        default=STEP_INTERVAL_MS,
        help="Milliseconds between simulation steps.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    GameRunner(
        players=args.players,
        width=args.width,
        height=args.height,
        step_interval_ms=args.step_ms,
    ).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
