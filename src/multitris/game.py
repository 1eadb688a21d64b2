"""Shared game session: one board, many players, one falling shape each."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union
import logging
import random

from .board import EMPTY, Board
from .commands import Command, DropCommand, MoveCommand, RotateCommand, RotationDirection
from .shape import Shape, random_shape_type, rotation_count


LOGGER = logging.getLogger(__name__)


@dataclass
class PlayerInfo:
    """Everything the session tracks about one player."""

    id: int
    shape: Optional[Shape] = None


class Game:
    """Mutable state for a multiplayer session on a shared board.

    All mutation goes through the methods below; every call runs to completion
    before the next one starts, so an embedding with several threads must
    serialise calls into the session.

    Players are processed in the order they joined.  When several grounded
    shapes compete for the same cells in one step, the first processed shape
    locks and the later ones are replaced.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._board = board if board is not None else Board()
        self._players: Dict[int, PlayerInfo] = {}
        self._rng = rng or random.Random()
        self.is_game_over = False

    # Query surface ----------------------------------------------------
    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    def player_at(self, row: int, col: int) -> int:
        """Return the id locked at ``(row, col)``, or ``EMPTY``."""

        return self._board.player_at(row, col)

    def player_ids(self) -> List[int]:
        return list(self._players)

    def get_shape(self, player_id: int) -> Optional[Shape]:
        """Return the shape of ``player_id``, or ``None`` if absent."""

        player = self._players.get(player_id)
        return player.shape if player is not None else None

    def shapes(self) -> Iterator[Shape]:
        """Yield every falling shape, in player join order."""

        for player in self._players.values():
            if player.shape is not None:
                yield player.shape

    def for_each_shape(self, fn: Callable[[Shape], object]) -> None:
        """Call ``fn`` on every falling shape; return values are ignored."""

        for shape in list(self.shapes()):
            fn(shape)

    # Membership -------------------------------------------------------
    def add_player(self, player_id: int, shape: Optional[Shape] = None) -> None:
        """Register ``player_id`` and give them a shape.

        ``shape`` is used as-is when provided; otherwise a new one is spawned,
        unless the game is over.

        Raises:
            ValueError: If the id is already registered, collides with the empty
                cell marker, or ``shape`` belongs to another player.
        """

        if player_id == EMPTY:
            raise ValueError(f"Player id {EMPTY} is reserved for empty cells")
        if player_id in self._players:
            raise ValueError(f"Player {player_id} already exists")
        if shape is not None and shape.player_id != player_id:
            raise ValueError(
                f"Shape belongs to player {shape.player_id}, not {player_id}"
            )
        self._players[player_id] = PlayerInfo(player_id, shape)
        LOGGER.info("Player %s joined", player_id)
        if shape is None and not self.is_game_over:
            self.spawn_shape(player_id)

    def remove_player(self, player_id: int) -> None:
        """Unregister ``player_id``.  Blocks they locked stay on the board."""

        if self._players.pop(player_id, None) is None:
            LOGGER.info("Cannot find player %s; cannot remove them; ignoring", player_id)
            return
        LOGGER.info("Player %s left", player_id)

    # Lifecycle --------------------------------------------------------
    def spawn_shape(self, player_id: int) -> None:
        """Replace the shape of ``player_id`` with a new random one.

        The new shape appears at the horizontal centre of the top row.  If it
        does not fit there the game is over.

        Raises:
            KeyError: If ``player_id`` is not registered.
        """

        player = self._players.get(player_id)
        if player is None:
            raise KeyError(f"Cannot find player with id {player_id}")

        shape = Shape(random_shape_type(self._rng), player_id, col=self.width // 2)
        player.shape = shape
        if not self._board.can_place(shape):
            LOGGER.info("No room to spawn a shape for player %s", player_id)
            self.game_over()

    def game_over(self) -> None:
        """End the game: drop every shape and install a fresh board."""

        LOGGER.info("Game over")
        self.is_game_over = True
        for player in self._players.values():
            player.shape = None
        self._board = Board(self._board.width, self._board.height)

    def reset(self) -> None:
        """Start a new game with every registered player."""

        self.is_game_over = False
        self._board = Board(self._board.width, self._board.height)
        for player_id in list(self._players):
            if self.is_game_over:
                break
            self.spawn_shape(player_id)
        LOGGER.info("Game reset with %d player(s)", len(self._players))

    # Player actions ---------------------------------------------------
    def _shape_for_action(self, player_id: int, action: str) -> Optional[Shape]:
        shape = self.get_shape(player_id)
        if shape is None:
            LOGGER.info(
                "Shape %s does not exist; cannot %s it; ignoring", player_id, action
            )
        return shape

    def move_shape(self, player_id: int, col: int) -> None:
        """Move the player's shape to ``col`` if it fits there."""

        if self.is_game_over:
            return
        shape = self._shape_for_action(player_id, "move")
        if shape is None:
            return
        if self._board.can_place(shape, shape.row, col):
            shape.col = col

    def rotate_shape(
        self, player_id: int, direction: Union[RotationDirection, str]
    ) -> None:
        """Rotate the player's shape one step in ``direction`` if it fits.

        Only the rotated placement at the current position is tried.
        """

        if self.is_game_over:
            return
        shape = self._shape_for_action(player_id, "rotate")
        if shape is None:
            return
        try:
            delta = RotationDirection(direction).delta
        except ValueError:
            LOGGER.error(
                "Unknown rotation direction %r from player %s; ignoring", direction, player_id
            )
            return
        rotation = (shape.rotation + delta) % rotation_count(shape.kind)
        if self._board.can_place(shape, shape.row, shape.col, rotation):
            shape.rotation = rotation

    def drop_shape(self, player_id: int) -> int:
        """Drop the player's shape to the floor and lock it.

        Returns the number of rows cleared as a result.
        """

        if self.is_game_over:
            return 0
        if player_id not in self._players:
            LOGGER.info("Cannot find player %s; ignoring", player_id)
            return 0
        shape = self._shape_for_action(player_id, "drop")
        if shape is None:
            return 0

        self._board.drop_to_floor(shape)
        return self._settle(player_id)

    def _settle(self, player_id: int) -> int:
        """Clear rows after a lock and hand out replacement shapes."""

        cleared = self._board.clear_full_rows()
        if cleared:
            LOGGER.debug("Player %s cleared %d row(s)", player_id, cleared)

        self.spawn_shape(player_id)

        # Blocks just locked may overlap shapes still falling elsewhere.
        for other_id, other in list(self._players.items()):
            if self.is_game_over:
                break
            if other_id == player_id or other.shape is None:
                continue
            if not self._board.can_place(other.shape):
                LOGGER.debug("Shape of player %s overlaps the board; replacing", other_id)
                self.spawn_shape(other_id)
        return cleared

    # Simulation -------------------------------------------------------
    def step(self) -> None:
        """Advance the game by one tick.

        Every shape that can move down does so.  Shapes that cannot are
        locked afterwards, in join order, each followed by a row clear and a
        respawn.  All downward moves are decided before any lock happens.
        """

        if self.is_game_over:
            LOGGER.debug("Game over, not stepping")
            return

        grounded: List[Tuple[int, Shape]] = []
        for player_id, player in self._players.items():
            shape = player.shape
            if shape is None:
                continue
            if self._board.can_place(shape, shape.row + 1):
                shape.row += 1
            else:
                grounded.append((player_id, shape))

        for player_id, shape in grounded:
            if self.is_game_over:
                break
            if self.get_shape(player_id) is not shape or not self._board.can_place(shape):
                LOGGER.debug(
                    "Shape of player %s was already replaced this step; skipping",
                    player_id,
                )
                continue
            # Rows cleared earlier this step may have opened space below.
            self._board.drop_to_floor(shape)
            self._settle(player_id)

    def on_command(self, player_id: int, command: Command) -> None:
        """Apply ``command`` sent by ``player_id``."""

        if self.is_game_over:
            LOGGER.warning("Game over, ignoring command from player %s", player_id)
            return

        if isinstance(command, RotateCommand):
            self.rotate_shape(player_id, command.direction)
        elif isinstance(command, MoveCommand):
            self.move_shape(player_id, command.col)
        elif isinstance(command, DropCommand):
            self.drop_shape(player_id)
        else:
            LOGGER.error("Unknown command type: %s", type(command).__name__)
