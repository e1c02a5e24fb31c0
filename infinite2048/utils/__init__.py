# -*- coding: utf-8 -*-
"""
This module provides utilities around the game: delayed callbacks, best score persistence, input intents and
board geometry.

The Matplotlib window lives in ``infinite2048.utils.windows`` and is imported on demand.
"""

from .controls import KEY_BINDINGS, Intent, dispatch, swipe, swipe_direction
from .layout import board_geometry, font_size, tile_position
from .scheduler import ManualScheduler, Scheduler
from .storage import BestScoreStore

__all__ = [
    "KEY_BINDINGS",
    "Intent",
    "dispatch",
    "swipe",
    "swipe_direction",
    "board_geometry",
    "font_size",
    "tile_position",
    "ManualScheduler",
    "Scheduler",
    "BestScoreStore",
]
