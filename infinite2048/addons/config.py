"""
Configuration of a 2048 ∞ game.

Durations are in milliseconds. The settle delay covers the slide animation of the presentation layer.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class GameConfig:
    """
    Configuration of the game rules and pacing.

    Raises
    ------
    ValueError
        If a value is out of range.
    """

    # ##>: Board.
    size: int = 4  # Side of the square grid
    win_value: int = 2048  # Tile value that wins the game

    # ##>: Tile spawn probabilities (90% for 2, 10% for 4).
    spawn_probs: dict[int, float] = field(default_factory=lambda: {2: 0.9, 4: 0.1})

    # ##>: Undo.
    history_limit: int = 20  # Oldest snapshots are evicted first

    # ##>: Pacing.
    settle_delay: int = 220  # Slide animation, then the merged board is published
    clear_respawn_delay: int = 150  # Delay before refilling a board emptied by a clear

    # ##>: Input.
    swipe_threshold: float = 30.0  # Minimum swipe distance, in device independent pixels

    # ##>: Persistence of the best score.
    storage_key: str = '2048-infinite-best'
    storage_dir: Path = field(default_factory=lambda: Path.home() / '.infinite2048')

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be at least 2, got {self.size}')
        if self.win_value < 4 or self.win_value & (self.win_value - 1):
            raise ValueError(f'win_value must be a power of two greater than 2, got {self.win_value}')
        if self.history_limit < 1:
            raise ValueError(f'history_limit must be positive, got {self.history_limit}')
        if min(self.settle_delay, self.clear_respawn_delay) < 0:
            raise ValueError('durations must not be negative')
        if not self.spawn_probs or abs(sum(self.spawn_probs.values()) - 1.0) > 1e-9:
            raise ValueError(f'spawn_probs must sum to 1, got {self.spawn_probs}')
