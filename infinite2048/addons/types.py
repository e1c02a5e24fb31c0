# -*- coding: utf-8 -*-
"""
Set of types shared by the engine, the game state machine and the presentation layer.
"""
from __future__ import annotations

from enum import Enum, IntEnum
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from infinite2048.core.board import Board, Tile


class Direction(IntEnum):
    """
    Move directions.

    The numbering matches the action indexes of the game environment (0: left, 1: up, 2: right, 3: down).
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @property
    def opposite(self) -> Direction:
        return Direction((self.value + 2) % 4)


class GameMode(str, Enum):
    """
    Interaction mode of the game.

    NORMAL: directional moves are accepted.
    SWAP: two taps exchange the positions of two tiles.
    CLEAR: one tap removes every tile sharing the tapped value.
    """

    NORMAL = 'normal'
    SWAP = 'swap'
    CLEAR = 'clear'


class HistorySnapshot(NamedTuple):
    """A settled board and the score it was reached with."""

    board: Board
    score: int


class Transitioning(NamedTuple):
    """
    A move whose slide is being animated.

    Attributes
    ----------
    final_state : Board
        Settled board to publish once the slide is over, before spawning.
    score_delta : int
        Score earned by the move.
    generation : int
        Session generation the move belongs to.
    """

    final_state: Board
    score_delta: int
    generation: int


class RenderFrame(NamedTuple):
    """
    Everything the presentation layer needs to draw one frame.

    Board geometry is not part of the frame, it is derived from the available layout width.
    """

    tiles: tuple[Tile, ...]
    score: int
    best_score: int
    mode: GameMode
    selected_tile_id: int | None
    won: bool
    won_acknowledged: bool
    game_over: bool
    is_transitioning: bool
    size: int

    @property
    def show_win_overlay(self) -> bool:
        return self.won and not self.won_acknowledged

    def is_highlighted(self, tile: Tile) -> bool:
        """Whether the tile is the current swap selection."""
        return self.selected_tile_id == tile.id

    def is_dimmed(self, tile: Tile) -> bool:
        """Whether the tile is drawn faded while another tile is selected for a swap."""
        return self.mode is GameMode.SWAP and self.selected_tile_id is not None and self.selected_tile_id != tile.id
