"""
Keyboard controller translating key names into game operations.
"""

import logging
from dataclasses import dataclass, field

from numpy import array_equal

from game2048.envs.game import Game

logger = logging.getLogger(__name__)


@dataclass
class ControlConfig:
    """
    Settings of the manual play front end.

    Key names follow matplotlib's ``key_press_event`` naming.
    """

    # ##>: Window parameters.
    title: str = '2048 Game'

    # ##>: Key bindings.
    move_keys: dict[str, str] = field(
        default_factory=lambda: {
            'left': 'left',
            'right': 'right',
            'up': 'up',
            'down': 'down',
            'a': 'left',
            'd': 'right',
            'w': 'up',
            's': 'down',
        }
    )
    start_keys: tuple[str, ...] = ('enter', ' ')
    restart_keys: tuple[str, ...] = ('backspace', 'r')
    quit_keys: tuple[str, ...] = ('escape',)


class KeyboardController:
    """
    Map key presses onto a single game instance.

    Parameters
    ----------
    game : Game
        The game driven by this controller.
    config : ControlConfig, optional
        Key bindings (default bindings when omitted).
    """

    def __init__(self, game: Game, config: ControlConfig | None = None):
        self.game = game
        self.config = config or ControlConfig()

    def is_quit(self, key: str | None) -> bool:
        """Tell whether the key closes the front end."""
        return key in self.config.quit_keys

    def handle(self, key: str | None) -> bool:
        """
        Apply the operation bound to a key.

        Parameters
        ----------
        key : str or None
            Key name; matplotlib may report None for unknown keys.

        Returns
        -------
        bool
            True if the board, score or status changed.
        """
        before = (self.game.get_state(), self.game.get_score(), self.game.get_status())

        if key in self.config.move_keys:
            self.game.move(self.config.move_keys[key])
        elif key in self.config.start_keys:
            self.game.start()
        elif key in self.config.restart_keys:
            self.game.restart()
            self.game.start()
        else:
            logger.debug('Unbound key: %r', key)
            return False

        board, score, status = before
        return not (
            array_equal(board, self.game.get_state())
            and score == self.game.get_score()
            and status is self.game.get_status()
        )
