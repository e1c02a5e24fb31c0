"""
Board model for the 2048 ∞ game: immutable tiles, immutable board snapshots and occupancy queries.

A board is a snapshot. Every operation that changes the game returns a new ``Board``; tiles and boards are
frozen so a snapshot kept in the undo history can never be altered by later play.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from itertools import count
from typing import Iterable, Sequence

from numpy import int64, ndarray, zeros

# ##>: Process-wide tile identifiers, starting at 1.
_TILE_IDS = count(1)


def next_tile_id() -> int:
    """Return a fresh, never used tile identifier."""
    return next(_TILE_IDS)


@dataclass(frozen=True)
class Tile:
    """
    A numbered tile on the board.

    Attributes
    ----------
    id : int
        Unique identifier, stable while the tile slides and keeps its identity through a merge.
    value : int
        Power of two, at least 2.
    x : int
        Column index, 0 is the left edge.
    y : int
        Row index, 0 is the top edge.
    is_new : bool
        The tile was just spawned.
    is_merged : bool
        The tile is the result of a merge in the last move.
    is_merging : bool
        The tile is sliding into a merge (slide state only).
    to_be_deleted : bool
        Ghost of a merge, kept only to animate the overlap (slide state only).
    """

    id: int
    value: int
    x: int
    y: int
    is_new: bool = False
    is_merged: bool = False
    is_merging: bool = False
    to_be_deleted: bool = False

    @property
    def position(self) -> tuple[int, int]:
        """Coordinates as ``(x, y)``."""
        return self.x, self.y

    def moved_to(self, x: int, y: int, **flags: bool) -> Tile:
        """Return a copy placed at ``(x, y)`` with all animation flags reset, then ``flags`` applied."""
        changes = {'is_new': False, 'is_merged': False, 'is_merging': False, 'to_be_deleted': False}
        changes.update(flags)
        return replace(self, x=x, y=y, **changes)

    def cleared(self) -> Tile:
        """Return a copy with all animation flags reset."""
        return self.moved_to(self.x, self.y)


class Board:
    """
    Immutable N×N board holding tiles, addressable by coordinate.

    Parameters
    ----------
    size : int
        Side length of the square grid.
    tiles : Iterable[Tile]
        Tiles on the board. Ghost tiles (``to_be_deleted``) may share a cell with a live tile, live tiles may not.

    Raises
    ------
    ValueError
        If a tile lies outside the grid or if two live tiles occupy the same cell.
    """

    __slots__ = ('_size', '_tiles', '_cells')

    def __init__(self, size: int, tiles: Iterable[Tile] = ()):
        if size < 1:
            raise ValueError(f'Board size must be positive, got {size}')

        self._size = size
        self._tiles: tuple[Tile, ...] = tuple(tiles)
        self._cells: dict[tuple[int, int], Tile] = {}

        for tile in self._tiles:
            if not (0 <= tile.x < size and 0 <= tile.y < size):
                raise ValueError(f'Tile {tile.id} at {tile.position} is outside a {size}x{size} board')
            if tile.to_be_deleted:
                continue
            if tile.position in self._cells:
                raise ValueError(f'Cell {tile.position} holds more than one tile')
            self._cells[tile.position] = tile

    @classmethod
    def from_values(cls, grid: Sequence[Sequence[int]] | ndarray) -> Board:
        """
        Build a board from a row-major grid of values.

        Parameters
        ----------
        grid : Sequence[Sequence[int]] | ndarray
            Square grid where ``grid[y][x]`` is the tile value, 0 for an empty cell.

        Returns
        -------
        Board
            A settled board whose tiles carry fresh identifiers.
        """
        size = len(grid)
        tiles = [
            Tile(id=next_tile_id(), value=int(value), x=x, y=y)
            for y, row in enumerate(grid)
            for x, value in enumerate(row)
            if value
        ]
        return cls(size, tiles)

    @property
    def size(self) -> int:
        return self._size

    @property
    def tiles(self) -> tuple[Tile, ...]:
        """All tiles, ghosts included."""
        return self._tiles

    @property
    def live_tiles(self) -> tuple[Tile, ...]:
        """Tiles that are not ghosts."""
        return tuple(tile for tile in self._tiles if not tile.to_be_deleted)

    def tile_at(self, x: int, y: int) -> Tile | None:
        """Return the live tile at ``(x, y)``, or None when the cell is empty."""
        return self._cells.get((x, y))

    def tile_by_id(self, tile_id: int) -> Tile | None:
        """Return the live tile with the given identifier, or None."""
        for tile in self._tiles:
            if tile.id == tile_id and not tile.to_be_deleted:
                return tile
        return None

    def replace_tiles(self, tiles: Iterable[Tile]) -> Board:
        """Return a board of the same size holding ``tiles``."""
        return Board(self._size, tiles)

    def settled(self) -> Board:
        """Return a copy without ghosts and with every animation flag cleared."""
        return Board(self._size, [tile.cleared() for tile in self._tiles if not tile.to_be_deleted])

    def values(self) -> ndarray:
        """
        Get the board as an array of values.

        Returns
        -------
        ndarray
            Array of shape (size, size) where ``values[y, x]`` is the tile value and 0 marks an empty cell.
        """
        grid = zeros((self._size, self._size), dtype=int64)
        for (x, y), tile in self._cells.items():
            grid[y, x] = tile.value
        return grid

    def max_value(self) -> int:
        """Highest live tile value, 0 on an empty board."""
        return max((tile.value for tile in self._cells.values()), default=0)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self):
        return iter(self.live_tiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and sorted(self._tiles, key=_tile_key) == sorted(other._tiles, key=_tile_key)

    def __hash__(self) -> int:
        return hash((self._size, frozenset(self._tiles)))

    def __repr__(self) -> str:
        return f'Board(size={self._size}, values={self.values().tolist()})'


def _tile_key(tile: Tile) -> tuple:
    return tile.id, tile.to_be_deleted, tile.y, tile.x


def empty_cells(board: Board) -> list[tuple[int, int]]:
    """
    List the cells without a live tile.

    Parameters
    ----------
    board : Board
        The board to inspect.

    Returns
    -------
    list[tuple[int, int]]
        Coordinates ``(x, y)`` in row-major order.
    """
    return [(x, y) for y in range(board.size) for x in range(board.size) if board.tile_at(x, y) is None]


def neighbors_of(board: Board, tile: Tile) -> list[Tile]:
    """
    Get the live tiles orthogonally adjacent to ``tile``.

    Parameters
    ----------
    board : Board
        The board to inspect.
    tile : Tile
        The tile whose neighbours are wanted.

    Returns
    -------
    list[Tile]
        Up to four tiles, in the order right, left, below, above.
    """
    candidates = (
        board.tile_at(tile.x + 1, tile.y),
        board.tile_at(tile.x - 1, tile.y),
        board.tile_at(tile.x, tile.y + 1),
        board.tile_at(tile.x, tile.y - 1),
    )
    return [neighbor for neighbor in candidates if neighbor is not None]


def is_board_full(board: Board) -> bool:
    """Check whether every cell holds a live tile."""
    return len(board) == board.size * board.size
