# -*- coding: utf-8 -*-
"""
The 2048 sliding-tile puzzle: a synchronous board engine and a thin matplotlib front end.
"""

from .envs import Game, GameStatus

__all__ = ["Game", "GameStatus"]
