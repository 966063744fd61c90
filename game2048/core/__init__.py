# -*- coding: utf-8 -*-
"""
This module provides the board primitives of the 2048 game.

It includes functions for sliding and merging tiles, transforming the board for each direction,
spawning new tiles, checking legal and illegal actions, and detecting won or finished boards.
"""

from .gameboard import (
    ACTIONS,
    BOARD_SIZE,
    TILE_SPAWN_PROBS,
    WIN_TILE,
    direction_index,
    empty_board,
    empty_cells,
    fill_cells,
    from_left,
    has_won,
    initial_board,
    is_changed,
    is_done,
    latent_state,
    merge_row,
    parse_board,
    slide_and_merge,
    spawn_tile,
    to_left,
)
from .gamemove import DIRECTIONS, legal_actions, legal_actions_mask

__all__ = [
    "ACTIONS",
    "BOARD_SIZE",
    "DIRECTIONS",
    "TILE_SPAWN_PROBS",
    "WIN_TILE",
    "direction_index",
    "empty_board",
    "empty_cells",
    "fill_cells",
    "from_left",
    "has_won",
    "initial_board",
    "is_changed",
    "is_done",
    "latent_state",
    "legal_actions",
    "legal_actions_mask",
    "merge_row",
    "parse_board",
    "slide_and_merge",
    "spawn_tile",
    "to_left",
]
