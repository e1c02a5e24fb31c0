"""
Tests for the utilities: scheduler, best score storage, input intents, layout and configuration.
"""

import tempfile
from pathlib import Path
from unittest import TestCase, main

from infinite2048.addons.config import GameConfig
from infinite2048.addons.types import Direction, GameMode
from infinite2048.envs.infinite import InfiniteGame
from infinite2048.core.board import Board
from infinite2048.utils.controls import KEY_BINDINGS, Intent, dispatch, swipe, swipe_direction
from infinite2048.utils.layout import board_extent, board_geometry, cell_at, font_size, tile_position
from infinite2048.utils.scheduler import ManualScheduler
from infinite2048.utils.storage import BestScoreStore


class TestManualScheduler(TestCase):
    """Test the manual scheduler."""

    def test_runs_when_due(self):
        """Callbacks run once the clock reaches their deadline, in deadline order."""
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(200, lambda: calls.append('late'))
        scheduler.call_later(100, lambda: calls.append('early'))

        self.assertEqual(scheduler.advance(99), 0)
        self.assertEqual(scheduler.advance(1), 1)
        self.assertEqual(calls, ['early'])
        self.assertEqual(scheduler.pending, 1)

        scheduler.advance(100)
        self.assertEqual(calls, ['early', 'late'])
        self.assertEqual(scheduler.now, 200)

    def test_same_deadline_keeps_order(self):
        """Callbacks due together run in scheduling order."""
        scheduler = ManualScheduler()
        calls = []
        for index in range(3):
            scheduler.call_later(10, lambda index=index: calls.append(index))
        scheduler.advance(10)
        self.assertEqual(calls, [0, 1, 2])

    def test_run_all_nested(self):
        """run_all also runs callbacks scheduled by callbacks."""
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(5, lambda: scheduler.call_later(5, lambda: calls.append('nested')))
        self.assertEqual(scheduler.run_all(), 2)
        self.assertEqual(calls, ['nested'])


class TestBestScoreStore(TestCase):
    """Test the best score storage."""

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.store = BestScoreStore(Path(self.directory.name) / 'nested')

    def tearDown(self):
        self.directory.cleanup()

    def test_missing(self):
        """Nothing stored reads as zero."""
        self.assertEqual(self.store.load(), 0)

    def test_round_trip(self):
        """A saved score is stored as a decimal string and read back."""
        self.store.save(1234)
        self.assertEqual(self.store.path.read_text(encoding='utf-8'), '1234')
        self.assertEqual(self.store.load(), 1234)

    def test_corrupt(self):
        """Corrupt content reads as zero and is logged."""
        self.store.path.parent.mkdir(parents=True)
        self.store.path.write_text('not a number', encoding='utf-8')
        with self.assertLogs('infinite2048.utils.storage', level='WARNING'):
            self.assertEqual(self.store.load(), 0)

    def test_key_is_file_name(self):
        """The storage key names the file."""
        self.assertEqual(self.store.path.name, '2048-infinite-best')


class TestControls(TestCase):
    """Test input intents."""

    def test_swipe_direction(self):
        """Swipes follow the axis of greater displacement."""
        self.assertEqual(swipe_direction(31, 0), Direction.RIGHT)
        self.assertEqual(swipe_direction(-40, 10), Direction.LEFT)
        self.assertEqual(swipe_direction(5, -50), Direction.UP)
        self.assertEqual(swipe_direction(20, 45), Direction.DOWN)

    def test_short_swipe(self):
        """Swipes not longer than the threshold are ignored."""
        self.assertIsNone(swipe_direction(10, 20))
        self.assertIsNone(swipe_direction(30, 0))
        self.assertEqual(swipe_direction(15, 0, threshold=10), Direction.RIGHT)

    def test_swipe_uses_configured_threshold(self):
        """Swipes applied to a game are measured against its configured threshold."""
        grid = [[0, 0, 0, 2], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]

        strict = InfiniteGame(config=GameConfig(swipe_threshold=50.0), scheduler=ManualScheduler(), seed=0)
        strict._board = Board.from_values(grid)
        self.assertFalse(swipe(strict, -40, 0))
        self.assertFalse(strict.is_transitioning)
        self.assertTrue(swipe(strict, -60, 0))
        self.assertEqual(strict.history[0].board.values().tolist(), grid)

        default = InfiniteGame(scheduler=ManualScheduler(), seed=0)
        default._board = Board.from_values(grid)
        self.assertTrue(swipe(default, -40, 0))

    def test_key_bindings(self):
        """Arrow keys move, escape cancels."""
        self.assertEqual(KEY_BINDINGS['left'], Intent.LEFT)
        self.assertEqual(KEY_BINDINGS['escape'], Intent.CANCEL)

    def test_dispatch(self):
        """Intents are applied to the game."""
        game = InfiniteGame(scheduler=ManualScheduler(), seed=0)
        self.assertFalse(dispatch(game, Intent.UNDO))
        self.assertTrue(dispatch(game, Intent.TOGGLE_SWAP))
        self.assertEqual(game.mode, GameMode.SWAP)
        self.assertTrue(dispatch(game, Intent.CANCEL))
        self.assertEqual(game.mode, GameMode.NORMAL)
        self.assertFalse(dispatch(game, Intent.ACKNOWLEDGE_WIN))
        self.assertTrue(dispatch(game, Intent.RESET))


class TestLayout(TestCase):
    """Test board geometry."""

    def test_board_geometry(self):
        """Gap is 2.5% of the width with a floor of 8, cells share the rest."""
        self.assertEqual(board_geometry(400), (87.5, 10.0))
        self.assertEqual(board_geometry(200), (40.0, 8.0))

    def test_board_geometry_capped(self):
        """The board never grows beyond 500 pixels."""
        self.assertEqual(board_geometry(1000), board_geometry(500))
        cell_size, gap = board_geometry(1000)
        self.assertAlmostEqual(board_extent(cell_size, gap), 500.0)

    def test_tile_position(self):
        """Cells are laid out after a leading gap."""
        self.assertEqual(tile_position(0, 40, 8), 8)
        self.assertEqual(tile_position(2, 40, 8), 104)

    def test_cell_at(self):
        """Offsets resolve to cells, gaps and outside offsets to None."""
        self.assertEqual(cell_at(105, 40, 8), 2)
        self.assertIsNone(cell_at(5, 40, 8))
        self.assertIsNone(cell_at(150, 40, 8))
        self.assertIsNone(cell_at(500, 40, 8))

    def test_font_size(self):
        """Text shrinks as values get more digits."""
        self.assertEqual(font_size(2), 'xx-large')
        self.assertEqual(font_size(64), 'x-large')
        self.assertEqual(font_size(512), 'large')
        self.assertEqual(font_size(2048), 'medium')


class TestGameConfig(TestCase):
    """Test the configuration."""

    def test_defaults(self):
        """Defaults follow the classic game."""
        config = GameConfig()
        self.assertEqual(config.size, 4)
        self.assertEqual(config.win_value, 2048)
        self.assertEqual(config.history_limit, 20)
        self.assertEqual(config.spawn_probs, {2: 0.9, 4: 0.1})

    def test_invalid(self):
        """Out of range values are rejected."""
        with self.assertRaises(ValueError):
            GameConfig(size=1)
        with self.assertRaises(ValueError):
            GameConfig(win_value=1000)
        with self.assertRaises(ValueError):
            GameConfig(history_limit=0)
        with self.assertRaises(ValueError):
            GameConfig(settle_delay=-1)
        with self.assertRaises(ValueError):
            GameConfig(spawn_probs={2: 0.5})


if __name__ == '__main__':
    main()
