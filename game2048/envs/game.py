"""2048 board engine: the game state machine driven by a presentation layer."""

import logging
from enum import Enum

from numpy import ndarray
from numpy.random import default_rng

from game2048.core.gameboard import (
    BOARD_SIZE,
    direction_index,
    fill_cells,
    has_won,
    initial_board,
    is_changed,
    is_done,
    latent_state,
    spawn_tile,
)
from game2048.core.gamemove import DIRECTIONS, legal_actions

logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    """
    Status of a game.

    IDLE: waiting for ``start``.
    PLAYING: moves are accepted.
    WIN: a 2048 tile was reached (terminal).
    LOSE: no move can change the board (terminal).
    """

    IDLE = 'idle'
    PLAYING = 'playing'
    WIN = 'win'
    LOSE = 'lose'


class Game:
    """
    2048 game engine.

    Owns one board, its initial snapshot, the score and the status. Every operation is synchronous and
    computed in memory; invalid calls for the current status are silent no-ops.

    Parameters
    ----------
    initial_state : array_like, optional
        A 4x4 grid used as the initial board. Every cell must be 0 or a power of two greater than one, so a
        grid such as all 3s is rejected like any other malformed board and replaced by an empty board.
    seed : int, optional
        Seed for the default random source.
    rng : numpy.random.Generator, optional
        Random source for tile spawns. Any object with ``integers`` and ``random`` works.
    """

    def __init__(self, initial_state=None, seed: int | None = None, rng=None):
        self._initial = initial_board(initial_state)
        self._initial.setflags(write=False)

        self._rng = rng if rng is not None else default_rng(seed)
        self._board = self._initial.copy()
        self._score = 0
        self._status = GameStatus.IDLE

    @property
    def size(self) -> int:
        """Dimension of the square board."""
        return BOARD_SIZE

    @property
    def initial_state(self) -> ndarray:
        """Copy of the board used by ``restart``."""
        return self._initial.copy()

    @property
    def is_finished(self) -> bool:
        """True once the game reached a terminal status."""
        return self._status in (GameStatus.WIN, GameStatus.LOSE)

    def get_state(self) -> ndarray:
        """
        Get a copy of the current board.

        Returns
        -------
        ndarray
            A new 2D array; mutating it has no effect on the game.
        """
        return self._board.copy()

    def get_score(self) -> int:
        """Get the current score."""
        return self._score

    def get_status(self) -> GameStatus:
        """Get the current status."""
        return self._status

    def legal_moves(self) -> list[str]:
        """
        Directions that would change the board.

        Returns
        -------
        list[str]
            Direction names, empty unless the game is being played.
        """
        if self._status is not GameStatus.PLAYING:
            return []
        return [DIRECTIONS[action] for action in legal_actions(self._board)]

    def start(self) -> None:
        """
        Start the game.

        Notes
        -----
        - Only has an effect when the game is idle.
        - An empty board receives two random tiles; a pre-populated board is kept as is.
        - A pre-populated board that is already won or lost resolves directly to that status.
        """
        if self._status is not GameStatus.IDLE:
            logger.debug('Ignoring start while %s', self._status.value)
            return

        if not self._board.any():
            fill_cells(self._board, number_tile=2, rng=self._rng)

        self._set_status(GameStatus.PLAYING)
        self._recompute_status()

    def restart(self) -> None:
        """Reset board, score and status to their initial values, without spawning."""
        self._board = self._initial.copy()
        self._score = 0
        self._set_status(GameStatus.IDLE)

    def move(self, direction: str | int) -> bool:
        """
        Apply a move in the given direction.

        Parameters
        ----------
        direction : str or int
            'left', 'up', 'right', 'down' or the matching action index (0 to 3).

        Returns
        -------
        bool
            True if the board changed, False if the move was a no-op.

        Raises
        ------
        ValueError
            If the direction is unknown.

        Notes
        -----
        - The move is computed on a scratch board; board and score are committed together, only when the
          board actually changed.
        - A successful move spawns one tile and recomputes the status.
        """
        action = direction_index(direction)
        if self._status is not GameStatus.PLAYING:
            logger.debug('Ignoring move %r while %s', direction, self._status.value)
            return False

        candidate, reward = latent_state(self._board, action)

        if not is_changed(self._board, candidate):
            return False

        # ##: Commit the move.
        self._board = candidate
        self._score += reward

        if not spawn_tile(self._board, self._rng):
            logger.debug('No empty cell left to spawn a tile')
        self._recompute_status()
        return True

    def move_left(self) -> bool:
        """Slide tiles to the left."""
        return self.move('left')

    def move_right(self) -> bool:
        """Slide tiles to the right."""
        return self.move('right')

    def move_up(self) -> bool:
        """Slide tiles up."""
        return self.move('up')

    def move_down(self) -> bool:
        """Slide tiles down."""
        return self.move('down')

    def _recompute_status(self) -> None:
        if has_won(self._board):
            self._set_status(GameStatus.WIN)
        elif is_done(self._board):
            self._set_status(GameStatus.LOSE)
        else:
            self._set_status(GameStatus.PLAYING)

    def _set_status(self, status: GameStatus) -> None:
        if status is not self._status:
            logger.info('Game status: %s -> %s', self._status.value, status.value)
        self._status = status

