"""
Board geometry and tile text sizing for presentation layers.

Geometry is derived from the width available to the board, it is not part of the game state.
"""


def board_geometry(width: float, size: int = 4, max_width: float = 500.0) -> tuple[float, float]:
    """
    Compute the cell size and the gap between cells.

    Parameters
    ----------
    width : float
        Width available to the board, in pixels.
    size : int, optional
        Side of the square grid (default is 4).
    max_width : float, optional
        Width the board never grows beyond (default is 500).

    Returns
    -------
    tuple[float, float]
        ``(cell_size, gap)``. The gap is 2.5% of the width with a floor of 8 pixels.
    """
    width = min(width, max_width)
    gap = max(8.0, width * 0.025)
    cell_size = (width - gap * (size + 1)) / size
    return cell_size, gap


def board_extent(cell_size: float, gap: float, size: int = 4) -> float:
    """Full side of the board, padding included."""
    return cell_size * size + gap * (size + 1)


def tile_position(index: int, cell_size: float, gap: float) -> float:
    """Offset of the cell at ``index`` along one axis, from the board edge."""
    return index * (cell_size + gap) + gap


def cell_at(offset: float, cell_size: float, gap: float, size: int = 4) -> int | None:
    """
    Find the cell under an offset along one axis.

    Returns
    -------
    int | None
        Cell index, or None when the offset falls in a gap or outside the board.
    """
    index = int((offset - gap) // (cell_size + gap))
    if not 0 <= index < size:
        return None
    start = tile_position(index, cell_size, gap)
    return index if start <= offset <= start + cell_size else None


def font_size(value: int) -> str:
    """Text size of a tile, smaller as the value gets more digits."""
    digits = len(str(value))
    if digits == 1:
        return 'xx-large'
    if digits == 2:
        return 'x-large'
    if digits == 3:
        return 'large'
    return 'medium'
