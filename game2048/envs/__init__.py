# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 game.

This module provides the `Game` class, the state machine that owns the board, the score and the status, and
the `GameStatus` enumeration.
"""

from .game import Game, GameStatus

__all__ = ["Game", "GameStatus"]
