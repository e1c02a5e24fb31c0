# -*- coding: utf-8 -*-
"""
2048 ∞: the 2048 puzzle with tile swaps, tile clears and undo.
"""

from .addons import Direction, GameConfig, GameMode
from .envs import InfiniteGame

__all__ = ["Direction", "GameConfig", "GameMode", "InfiniteGame"]
