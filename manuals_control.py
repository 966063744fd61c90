# -*- coding: utf-8 -*-
"""
Play 2048 Game
"""
import logging
from typing import Any

from game2048.envs import Game
from game2048.utils import ControlConfig, KeyboardController, board_changes
from game2048.utils.windows import WindowBoard


def redraw(game: Game, window: WindowBoard, previous=None):
    """
    Redraw the game board, the score and the status.

    Parameters
    ----------
    game: Game
        The game to draw

    window: WindowBoard
        Class to draw the game board

    previous: np.ndarray
        Snapshot taken before the last operation, used to emphasise new tiles
    """
    board = game.get_state()
    changes = board_changes(previous, board) if previous is not None else None
    window.show_image(board, changes)
    window.show_status(game.get_score(), game.get_status())


def key_handler(controller: KeyboardController, window: WindowBoard, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    controller: KeyboardController
        Controller bound to the game

    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle
    """
    if controller.is_quit(event.key):
        window.close()
        return None

    previous = controller.game.get_state()
    if controller.handle(event.key):
        redraw(controller.game, window, previous)
    return None


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    config = ControlConfig()
    game = Game()
    control = KeyboardController(game, config)

    window_board = WindowBoard(title=config.title, size=game.size)
    window_board.register_key_handler(lambda event: key_handler(control, window_board, event))

    redraw(game, window_board)

    # Blocking event loop
    window_board.show(block=True)
