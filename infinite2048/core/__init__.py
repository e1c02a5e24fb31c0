# -*- coding: utf-8 -*-
"""
Core of the 2048 ∞ game: the board model, the tile spawner and the transition engine.

Everything here is pure. Boards are immutable snapshots, every function returns new boards.
"""

from .board import Board, Tile, empty_cells, is_board_full, neighbors_of, next_tile_id
from .gameboard import Transition, line_coordinates, merge_line, transition
from .gamemove import has_won, is_game_over, legal_directions, legal_directions_mask
from .spawner import TILE_SPAWN_PROBS, spawn, starting_board

__all__ = [
    "Board",
    "Tile",
    "empty_cells",
    "neighbors_of",
    "is_board_full",
    "next_tile_id",
    "Transition",
    "merge_line",
    "line_coordinates",
    "transition",
    "legal_directions_mask",
    "legal_directions",
    "is_game_over",
    "has_won",
    "TILE_SPAWN_PROBS",
    "spawn",
    "starting_board",
]
