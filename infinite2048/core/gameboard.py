"""
Transition engine of the 2048 ∞ game: slides and merges tiles for one move.

The engine is pure. It receives a board snapshot and returns new snapshots, it never spawns a tile and never touches
the score or the history.
"""

from dataclasses import replace
from typing import NamedTuple, Sequence

from infinite2048.addons.types import Direction
from infinite2048.core.board import Board, Tile


class Transition(NamedTuple):
    """
    Result of a move.

    Attributes
    ----------
    moved : bool
        Whether any tile changed position or merged. A move that did not is rejected by the game.
    slide_state : Board
        Tiles at their destination with their old values, ghosts included. Used to animate the slide.
    final_state : Board
        Settled result: ghosts removed, merged values applied.
    score_delta : int
        Sum of the values created by merges.
    """

    moved: bool
    slide_state: Board
    final_state: Board
    score_delta: int


class LineMerge(NamedTuple):
    """Result of merging one compacted line, see ``merge_line``."""

    slides: list[tuple[int, Tile]]
    finals: list[tuple[int, Tile]]
    score: int


def merge_line(tiles: Sequence[Tile]) -> LineMerge:
    """
    Merge adjacent tiles of equal value along a compacted line.

    Parameters
    ----------
    tiles : Sequence[Tile]
        Tiles of one row or column without gaps, ordered from the destination edge.

    Returns
    -------
    LineMerge
        ``slides`` pairs each source tile with its destination slot, the two tiles of a merge flagged
        ``is_merging`` and the second one also ``to_be_deleted``. ``finals`` pairs each
        resulting tile with its slot, ``score`` is the total of the merged values.

    Notes
    -----
    - Merging is greedy from the destination edge: ``[2, 2, 2]`` gives ``[4, 2]``.
    - Each tile merges at most once, the scan moves past both tiles of a merge before going on.
    - Returned tiles keep their coordinates, placing them is up to the caller.
    """
    slides: list[tuple[int, Tile]] = []
    finals: list[tuple[int, Tile]] = []
    score = 0

    index, slot = 0, 0
    while index < len(tiles):
        first = tiles[index]
        second = tiles[index + 1] if index + 1 < len(tiles) else None

        if second is not None and first.value == second.value:
            merged = first.value * 2
            slides.append((slot, replace(first, is_merging=True)))
            slides.append((slot, replace(second, is_merging=True, to_be_deleted=True)))
            finals.append((slot, Tile(id=first.id, value=merged, x=first.x, y=first.y, is_merged=True)))
            score += merged
            index += 2
        else:
            slides.append((slot, first))
            finals.append((slot, first))
            index += 1
        slot += 1

    return LineMerge(slides=slides, finals=finals, score=score)


def line_coordinates(direction: Direction, index: int, size: int) -> list[tuple[int, int]]:
    """
    Get the cells of one line, ordered from the edge the tiles move toward.

    Parameters
    ----------
    direction : Direction
        Direction of travel.
    index : int
        Row index for horizontal moves, column index for vertical moves.
    size : int
        Side of the board.

    Returns
    -------
    list[tuple[int, int]]
        Coordinates ``(x, y)``, reversed for right and down moves.
    """
    if direction in (Direction.LEFT, Direction.RIGHT):
        cells = [(position, index) for position in range(size)]
    else:
        cells = [(index, position) for position in range(size)]

    if direction in (Direction.RIGHT, Direction.DOWN):
        cells.reverse()
    return cells


def transition(board: Board, direction: Direction | int) -> Transition:
    """
    Compute the effect of moving every tile in a direction.

    Parameters
    ----------
    board : Board
        The board before the move. Animation flags and ghosts left by a previous move are ignored.
    direction : Direction | int
        Direction of the move (0: left, 1: up, 2: right, 3: down).

    Returns
    -------
    Transition
        The slide state, the final state, the score delta and whether anything moved.

    Raises
    ------
    ValueError
        If ``direction`` is not one of the four directions.

    Notes
    -----
    Every line is read from its destination edge so a single left-compaction serves all four directions.
    """
    direction = Direction(direction)
    board = board.settled()

    moved = False
    score_delta = 0
    slide_tiles: list[Tile] = []
    final_tiles: list[Tile] = []

    for index in range(board.size):
        cells = line_coordinates(direction, index, board.size)
        compacted = [tile for tile in (board.tile_at(x, y) for x, y in cells) if tile is not None]
        result = merge_line(compacted)
        score_delta += result.score

        # ##: Ghosts slide onto the same cell as their merge partner.
        for slot, tile in result.slides:
            x, y = cells[slot]
            slide_tiles.append(tile.moved_to(x, y, is_merging=tile.is_merging, to_be_deleted=tile.to_be_deleted))

        for slot, tile in result.finals:
            x, y = cells[slot]
            moved = moved or tile.is_merged or tile.position != (x, y)
            final_tiles.append(tile.moved_to(x, y, is_merged=tile.is_merged))

    return Transition(
        moved=moved,
        slide_state=board.replace_tiles(slide_tiles),
        final_state=board.replace_tiles(final_tiles),
        score_delta=score_delta,
    )
