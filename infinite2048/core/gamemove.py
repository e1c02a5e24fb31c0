"""
Move legality and terminal conditions for the 2048 ∞ game.
"""

from numpy import ndarray

from infinite2048.addons.types import Direction
from infinite2048.core.board import Board, is_board_full, neighbors_of


def _axis_moves(values: ndarray, axis: int) -> tuple[bool, bool]:
    """Whether moving toward the start, then toward the end, of an axis changes the board."""
    if axis:
        lower, upper = values[:, :-1], values[:, 1:]
    else:
        lower, upper = values[:-1, :], values[1:, :]

    merge = bool(((lower != 0) & (lower == upper)).any())
    toward_start = merge or bool(((lower == 0) & (upper != 0)).any())
    toward_end = merge or bool(((upper == 0) & (lower != 0)).any())
    return toward_start, toward_end


def legal_directions_mask(values: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Check the four directions on an array of tile values.

    A direction is legal when a tile has an empty cell on that side or an equal neighbour along its axis.

    Parameters
    ----------
    values : ndarray
        Tile values of the board, as returned by ``Board.values``.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down).
    """
    left, right = _axis_moves(values, axis=1)
    up, down = _axis_moves(values, axis=0)
    return left, up, right, down


def legal_directions(board: Board) -> list[Direction]:
    """
    Determine the directions that would change the board.

    Parameters
    ----------
    board : Board
        The current board.

    Returns
    -------
    list[Direction]
        Legal directions, in the order left, up, right, down.
    """
    mask = legal_directions_mask(board.values())
    return [direction for direction in Direction if mask[direction]]


def is_game_over(board: Board) -> bool:
    """
    Check if no move is left.

    Parameters
    ----------
    board : Board
        A settled board.

    Returns
    -------
    bool
        True when the board is full and no two orthogonally adjacent tiles share a value.
    """
    if not is_board_full(board):
        return False
    return not any(neighbor.value == tile.value for tile in board for neighbor in neighbors_of(board, tile))


def has_won(board: Board, win_value: int = 2048) -> bool:
    """Check if a tile of at least ``win_value`` is on the board."""
    return board.max_value() >= win_value
