# -*- coding: utf-8 -*-
"""
This module provides the presentation helpers of the 2048 game.

It includes a function deriving spawned and merged cells from two board snapshots and a keyboard controller
mapping key names onto game operations. The matplotlib `WindowBoard` lives in `game2048.utils.windows` and is
imported on demand.
"""

from .changes import BoardChanges, board_changes
from .controls import ControlConfig, KeyboardController

__all__ = ["BoardChanges", "board_changes", "ControlConfig", "KeyboardController"]
