# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 ∞ game.

This module provides the `InfiniteGame` class, which holds a game session: the board, the score, the undo history
and the swap and clear modes.
"""

from .infinite import InfiniteGame

__all__ = ["InfiniteGame"]
