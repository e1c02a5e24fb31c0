"""
Tile spawning: new tiles after each move and the starting board of a game.
"""

from numpy.random import PCG64DXSM, Generator, default_rng

from infinite2048.core.board import Board, Tile, empty_cells, next_tile_id

# ##>: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Module-level generator (avoids repeated initialization).
_GENERATOR = default_rng(PCG64DXSM())


def spawn(board: Board, rng: Generator | None = None, probs: dict[int, float] | None = None) -> Board:
    """
    Insert a new tile into a random empty cell.

    Parameters
    ----------
    board : Board
        The board to fill. It is not modified.
    rng : Generator, optional
        Random source, the module-level generator when omitted. Pass ``default_rng(seed)`` for reproducibility.
    probs : dict[int, float], optional
        Probability of each spawned value, ``TILE_SPAWN_PROBS`` when omitted.

    Returns
    -------
    Board
        A new board holding the spawned tile, flagged ``is_new``, or ``board`` itself when it is full.

    Notes
    -----
    The cell is chosen uniformly among the empty cells, in row-major order.
    """
    cells = empty_cells(board)
    if not cells:
        return board

    rng = rng if rng is not None else _GENERATOR
    probs = probs if probs is not None else TILE_SPAWN_PROBS

    x, y = cells[int(rng.integers(len(cells)))]
    value = int(rng.choice(list(probs), p=list(probs.values())))

    tile = Tile(id=next_tile_id(), value=value, x=x, y=y, is_new=True)
    return board.replace_tiles((*board.tiles, tile))


def starting_board(size: int = 4, rng: Generator | None = None) -> Board:
    """
    Create the board a new game starts with.

    Parameters
    ----------
    size : int, optional
        Side of the square grid (default is 4).
    rng : Generator, optional
        Random source, the module-level generator when omitted.

    Returns
    -------
    Board
        A board with two tiles of value 2 on two distinct random cells.
    """
    rng = rng if rng is not None else _GENERATOR
    first, second = rng.choice(size * size, size=2, replace=False)
    tiles = [
        Tile(id=next_tile_id(), value=2, x=int(index) % size, y=int(index) // size) for index in (first, second)
    ]
    return Board(size, tiles)
