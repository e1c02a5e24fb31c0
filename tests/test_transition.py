"""
Tests for the transition engine.

Tests cover the four directions, greedy merging, the slide and final states, and the properties every move keeps:
no-op idempotence, conservation of values and stability once compacted.
"""

from unittest import TestCase, main

import numpy as np
from numpy.random import default_rng

from infinite2048.addons.types import Direction
from infinite2048.core.board import Board
from infinite2048.core.gameboard import line_coordinates, merge_line, transition


def _row(values: list[int]) -> Board:
    """Build a board whose first row holds ``values``."""
    size = len(values)
    return Board.from_values([values] + [[0] * size for _ in range(size - 1)])


def _column(values: list[int]) -> Board:
    """Build a board whose first column holds ``values``."""
    size = len(values)
    return Board.from_values([[value] + [0] * (size - 1) for value in values])


class TestMergeLine(TestCase):
    """Tests for merge_line function."""

    def test_three_equal_tiles(self):
        """The first pair merges, the third tile is left alone."""
        tiles = _row([2, 2, 2, 0]).live_tiles
        result = merge_line(sorted(tiles, key=lambda tile: tile.x))

        self.assertEqual([(slot, tile.value) for slot, tile in result.finals], [(0, 4), (1, 2)])
        self.assertEqual(result.score, 4)

        # ##>: Both tiles of the merge slide to slot 0, the second one as a ghost.
        self.assertEqual([slot for slot, _ in result.slides], [0, 0, 1])
        self.assertTrue(result.slides[0][1].is_merging)
        self.assertFalse(result.slides[0][1].to_be_deleted)
        self.assertTrue(result.slides[1][1].to_be_deleted)
        self.assertFalse(result.slides[2][1].is_merging)

    def test_empty_line(self):
        """An empty line gives nothing."""
        result = merge_line([])
        self.assertEqual(result.slides, [])
        self.assertEqual(result.finals, [])
        self.assertEqual(result.score, 0)


class TestLineCoordinates(TestCase):
    """Tests for line_coordinates function."""

    def test_orders(self):
        """Lines start at the edge tiles move toward."""
        self.assertEqual(line_coordinates(Direction.LEFT, 1, 3), [(0, 1), (1, 1), (2, 1)])
        self.assertEqual(line_coordinates(Direction.RIGHT, 1, 3), [(2, 1), (1, 1), (0, 1)])
        self.assertEqual(line_coordinates(Direction.UP, 2, 3), [(2, 0), (2, 1), (2, 2)])
        self.assertEqual(line_coordinates(Direction.DOWN, 2, 3), [(2, 2), (2, 1), (2, 0)])


class TestTransition(TestCase):
    """Tests for the transition function."""

    def test_merge_left(self):
        """Two tiles of value 2 moved left give a single 4 in the corner."""
        board = _row([2, 2, 0, 0])
        first = board.tile_at(0, 0)

        result = transition(board, Direction.LEFT)

        self.assertTrue(result.moved)
        self.assertEqual(result.score_delta, 4)
        self.assertEqual(len(result.final_state.tiles), 1)

        merged = result.final_state.tile_at(0, 0)
        self.assertEqual(merged.value, 4)
        self.assertEqual(merged.id, first.id)
        self.assertTrue(merged.is_merged)

    def test_slide_state(self):
        """The slide state keeps the old values and the ghost of the merge."""
        board = _row([2, 0, 2, 0])
        result = transition(board, Direction.LEFT)

        slide = result.slide_state
        self.assertEqual(len(slide.tiles), 2)
        self.assertTrue(all(tile.position == (0, 0) for tile in slide.tiles))
        self.assertTrue(all(tile.value == 2 for tile in slide.tiles))
        self.assertTrue(all(tile.is_merging for tile in slide.tiles))
        self.assertEqual(sum(tile.to_be_deleted for tile in slide.tiles), 1)
        self.assertEqual(len(slide), 1)

    def test_greedy_left(self):
        """Three equal tiles: the pair nearest to the left edge merges."""
        result = transition(_row([2, 2, 2, 0]), Direction.LEFT)
        np.testing.assert_array_equal(result.final_state.values()[0], [4, 2, 0, 0])
        self.assertEqual(result.score_delta, 4)

    def test_greedy_right(self):
        """Three equal tiles: the pair nearest to the right edge merges."""
        result = transition(_row([2, 2, 2, 0]), Direction.RIGHT)
        np.testing.assert_array_equal(result.final_state.values()[0], [0, 0, 2, 4])
        self.assertEqual(result.score_delta, 4)

    def test_two_pairs(self):
        """Two pairs on a line both merge."""
        result = transition(_row([2, 2, 4, 4]), Direction.LEFT)
        np.testing.assert_array_equal(result.final_state.values()[0], [4, 8, 0, 0])
        self.assertEqual(result.score_delta, 12)

    def test_no_chain_merge(self):
        """A tile created by a merge does not merge again in the same move."""
        result = transition(_row([4, 4, 8, 0]), Direction.LEFT)
        np.testing.assert_array_equal(result.final_state.values()[0], [8, 8, 0, 0])
        self.assertEqual(result.score_delta, 8)

    def test_four_equal(self):
        """Four equal tiles give two merged tiles."""
        result = transition(_row([2, 2, 2, 2]), Direction.RIGHT)
        np.testing.assert_array_equal(result.final_state.values()[0], [0, 0, 4, 4])
        self.assertEqual(result.score_delta, 8)

    def test_up(self):
        """Columns compact toward the top edge."""
        result = transition(_column([2, 0, 2, 4]), Direction.UP)
        np.testing.assert_array_equal(result.final_state.values()[:, 0], [4, 4, 0, 0])
        self.assertEqual(result.score_delta, 4)

    def test_down(self):
        """Columns compact toward the bottom edge, merging from the bottom."""
        result = transition(_column([2, 0, 2, 4]), Direction.DOWN)
        np.testing.assert_array_equal(result.final_state.values()[:, 0], [0, 0, 4, 4])
        self.assertEqual(result.score_delta, 4)

    def test_full_board(self):
        """All rows move independently."""
        board = Board.from_values([[2, 2, 4, 4], [0, 2, 2, 4], [2, 0, 0, 2], [2, 2, 2, 2]])
        result = transition(board, Direction.LEFT)
        expected = np.array([[4, 8, 0, 0], [4, 4, 0, 0], [4, 0, 0, 0], [4, 4, 0, 0]])
        np.testing.assert_array_equal(result.final_state.values(), expected)
        self.assertEqual(result.score_delta, 28)

    def test_no_move(self):
        """A move that changes nothing reports it and returns the same board."""
        board = Board.from_values([[2, 4, 0, 0], [8, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        result = transition(board, Direction.LEFT)

        self.assertFalse(result.moved)
        self.assertEqual(result.score_delta, 0)
        self.assertEqual(result.final_state, board)

    def test_slide_without_merge(self):
        """A tile sliding without merging counts as a move."""
        result = transition(_row([0, 0, 0, 2]), Direction.LEFT)
        self.assertTrue(result.moved)
        self.assertEqual(result.score_delta, 0)
        self.assertEqual(result.final_state.tile_at(0, 0).value, 2)

    def test_input_not_modified(self):
        """The board given to the engine is left untouched."""
        board = _row([2, 2, 0, 0])
        before = board.values().copy()
        transition(board, Direction.RIGHT)
        np.testing.assert_array_equal(board.values(), before)

    def test_previous_flags_ignored(self):
        """Ghosts and flags of a previous move do not take part in the next one."""
        board = transition(_row([2, 2, 0, 0]), Direction.LEFT).slide_state
        result = transition(board, Direction.RIGHT)
        self.assertEqual(len(result.final_state.tiles), 1)
        self.assertEqual(result.final_state.tile_at(3, 0).value, 2)

    def test_invalid_direction(self):
        """Unknown directions are rejected."""
        with self.assertRaises(ValueError):
            transition(_row([2, 0, 0, 0]), 7)

    def test_action_index(self):
        """Directions may be given as action indexes."""
        result = transition(_row([0, 0, 0, 2]), 0)
        self.assertEqual(result.final_state.tile_at(0, 0).value, 2)


class TestTransitionProperties(TestCase):
    """Properties checked on random boards."""

    def setUp(self):
        """Build a set of random boards."""
        rng = default_rng(7)
        self.boards = [Board.from_values(rng.choice([0, 0, 2, 4, 8, 16], size=(4, 4))) for _ in range(60)]

    def test_conservation(self):
        """Values are conserved, each merge removes one tile and scores its value."""
        for board in self.boards:
            for direction in Direction:
                result = transition(board, direction)
                final = result.final_state
                merged = [tile for tile in final.tiles if tile.is_merged]

                self.assertEqual(final.values().sum(), board.values().sum())
                self.assertEqual(len(final), len(board) - len(merged))
                self.assertEqual(result.score_delta, sum(tile.value for tile in merged))

    def test_single_merge_per_tile(self):
        """Every merged tile is made of exactly two source tiles."""
        for board in self.boards:
            for direction in Direction:
                result = transition(board, direction)
                ghosts = [tile for tile in result.slide_state.tiles if tile.to_be_deleted]
                merged = [tile for tile in result.final_state.tiles if tile.is_merged]
                self.assertEqual(len(ghosts), len(merged))
                for tile in merged:
                    sources = [
                        other
                        for other in result.slide_state.tiles
                        if other.position == tile.position and other.is_merging
                    ]
                    self.assertEqual(len(sources), 2)
                    self.assertEqual(sum(other.value for other in sources), tile.value)

    def test_no_op_idempotence(self):
        """A move that does not move returns the board as it was."""
        for board in self.boards:
            for direction in Direction:
                result = transition(board, direction)
                if not result.moved:
                    self.assertEqual(result.final_state, board)

    def test_stability(self):
        """Once compacted without pending merges, moving again in the same direction does nothing."""
        board = Board.from_values([[2, 0, 4, 0], [0, 8, 0, 16], [32, 0, 0, 64], [0, 128, 256, 0]])
        for direction in Direction:
            compacted = transition(board, direction).final_state
            back = transition(compacted, direction.opposite).final_state
            again = transition(back, direction)
            self.assertTrue(again.moved)
            self.assertFalse(transition(again.final_state, direction).moved)


if __name__ == '__main__':
    main()
