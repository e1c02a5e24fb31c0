"""2048 ∞ game: modes, undo history and two-phase moves around the transition engine."""

import logging
from collections import deque

from numpy.random import Generator, default_rng

from infinite2048.addons.config import GameConfig
from infinite2048.addons.types import Direction, GameMode, HistorySnapshot, RenderFrame, Transitioning
from infinite2048.core.board import Board, Tile
from infinite2048.core.gameboard import transition
from infinite2048.core.gamemove import has_won, is_game_over, legal_directions_mask
from infinite2048.core.spawner import spawn, starting_board
from infinite2048.utils.scheduler import ManualScheduler, Scheduler
from infinite2048.utils.storage import BestScoreStore

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class InfiniteGame:
    """
    A session of the 2048 ∞ game.

    The game owns the live board, the score and the undo history. Moves run in two phases: the slide state is
    published at once, the merged board is published by a callback scheduled ``settle_delay`` milliseconds later.
    While a move is pending every other action is ignored, except ``reset``.

    Actions the current state does not allow are ignored: they return False and leave the game untouched.
    """

    # ##: All Actions.
    ACTIONS = {'left': Direction.LEFT, 'up': Direction.UP, 'right': Direction.RIGHT, 'down': Direction.DOWN}

    def __init__(
        self,
        config: GameConfig | None = None,
        scheduler: Scheduler | None = None,
        storage: BestScoreStore | None = None,
        seed: int | None = None,
    ):
        """
        Initialize a game and start a first session.

        Parameters
        ----------
        config : GameConfig, optional
            Rules and pacing, defaults to ``GameConfig()``.
        scheduler : Scheduler, optional
            Runs the delayed phase of moves, defaults to a ``ManualScheduler``.
        storage : BestScoreStore, optional
            Where the best score is read from and written to. The best score is not persisted when omitted.
        seed : int, optional
            Seed of the random source used to place tiles.
        """
        self.config = config if config is not None else GameConfig()
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._storage = storage
        self._rng: Generator = default_rng(seed)

        self._best_score = storage.load() if storage is not None else 0
        self._history: deque[HistorySnapshot] = deque(maxlen=self.config.history_limit)
        self._generation = 0
        self._pending: Transitioning | None = None

        self.reset()

    # ##: Session state.

    @property
    def board(self) -> Board:
        """Board currently shown: the slide state while a move is pending, the settled board otherwise."""
        return self._board

    @property
    def tiles(self) -> tuple[Tile, ...]:
        return self._board.tiles

    @property
    def score(self) -> int:
        return self._score

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def selected_tile_id(self) -> int | None:
        return self._selected_tile_id

    @property
    def won(self) -> bool:
        return self._won

    @property
    def won_acknowledged(self) -> bool:
        return self._won_acknowledged

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def is_transitioning(self) -> bool:
        """Whether a move is waiting for its settle phase."""
        return self._pending is not None

    @property
    def legal_directions(self) -> list[Direction]:
        """Directions a move is accepted in: none outside normal mode, at game over or while a move is pending."""
        if self._mode is not GameMode.NORMAL or self._game_over or self.is_transitioning:
            return []
        mask = legal_directions_mask(self._board.values())
        return [direction for direction in Direction if mask[direction]]

    @property
    def history(self) -> tuple[HistorySnapshot, ...]:
        """Undo snapshots, oldest first."""
        return tuple(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history) and not self.is_transitioning

    def frame(self) -> RenderFrame:
        """
        Get what the presentation layer has to draw.

        Returns
        -------
        RenderFrame
            Tiles with their animation flags, scores, mode, selection and status flags.
        """
        return RenderFrame(
            tiles=self._board.tiles,
            score=self._score,
            best_score=self._best_score,
            mode=self._mode,
            selected_tile_id=self._selected_tile_id,
            won=self._won,
            won_acknowledged=self._won_acknowledged,
            game_over=self._game_over,
            is_transitioning=self.is_transitioning,
            size=self._board.size,
        )

    # ##: Actions.

    def reset(self, seed: int | None = None) -> RenderFrame:
        """
        Start a new session.

        A move still pending from the previous session is dropped: its settle callback finds a newer generation
        and does nothing.

        Parameters
        ----------
        seed : int, optional
            Reseed the random source used to place tiles.

        Returns
        -------
        RenderFrame
            The new session, two tiles of value 2 on the board.
        """
        if seed is not None:
            self._rng = default_rng(seed)

        self._generation += 1
        self._pending = None
        self._board = starting_board(self.config.size, self._rng)
        self._score = 0
        self._won = False
        self._won_acknowledged = False
        self._game_over = False
        self._history.clear()
        self._mode = GameMode.NORMAL
        self._selected_tile_id = None

        _logger.debug('New session, generation %d', self._generation)
        return self.frame()

    def move(self, direction: Direction | int | str) -> bool:
        """
        Move every tile in a direction.

        Parameters
        ----------
        direction : Direction | int | str
            A ``Direction``, its action index or its name in ``ACTIONS``.

        Returns
        -------
        bool
            True when the move started. Moves are only accepted in normal mode, outside game over and while no
            other move is pending. A move that changes nothing is rejected.
        """
        direction = self.ACTIONS[direction] if isinstance(direction, str) else Direction(direction)

        if direction not in self.legal_directions:
            _logger.debug('Move %s ignored (mode=%s, game_over=%s)', direction, self._mode, self._game_over)
            return False

        result = transition(self._board, direction)
        self._push_history()
        self._board = result.slide_state
        pending = Transitioning(result.final_state, result.score_delta, self._generation)
        self._pending = pending
        self.scheduler.call_later(self.config.settle_delay, lambda: self._settle(pending))
        return True

    def undo(self) -> bool:
        """
        Restore the board and score of the last snapshot.

        Mode and selection are kept. Game over is lifted.

        Returns
        -------
        bool
            False when the history is empty or a move is pending.
        """
        if not self.can_undo:
            return False

        snapshot = self._history.pop()
        self._generation += 1
        self._board = snapshot.board
        self._score = snapshot.score
        self._game_over = False
        return True

    def cancel(self) -> bool:
        """Go back to normal mode and drop the selection."""
        if self.is_transitioning:
            return False
        self._mode = GameMode.NORMAL
        self._selected_tile_id = None
        return True

    def toggle_swap(self) -> bool:
        """Enter swap mode, or leave it when already active."""
        return self._toggle(GameMode.SWAP)

    def toggle_clear(self) -> bool:
        """Enter clear mode, or leave it when already active."""
        return self._toggle(GameMode.CLEAR)

    def acknowledge_win(self) -> bool:
        """Dismiss the win. The win never fires again in this session."""
        if not self._won or self._won_acknowledged:
            return False
        self._won_acknowledged = True
        return True

    def tap(self, tile_id: int) -> bool:
        """
        Tap a tile, in swap or clear mode.

        Parameters
        ----------
        tile_id : int
            Identifier of the tapped tile.

        Returns
        -------
        bool
            Whether the tap had an effect.
        """
        if self._mode is GameMode.NORMAL or self._game_over or self.is_transitioning:
            return False

        tile = self._board.tile_by_id(tile_id)
        if tile is None:
            return False

        if self._mode is GameMode.CLEAR:
            self._clear(tile.value)
            return True

        selected = self._board.tile_by_id(self._selected_tile_id) if self._selected_tile_id is not None else None
        if selected is None:
            self._selected_tile_id = tile.id
        elif selected.id == tile.id:
            self._selected_tile_id = None
        else:
            self._swap(selected, tile)
        return True

    # ##: Internals.

    def _toggle(self, mode: GameMode) -> bool:
        if self._game_over or self.is_transitioning:
            return False
        self._mode = GameMode.NORMAL if self._mode is mode else mode
        self._selected_tile_id = None
        return True

    def _push_history(self) -> None:
        self._history.append(HistorySnapshot(board=self._board.settled(), score=self._score))

    def _settle(self, pending: Transitioning) -> None:
        """Publish the merged board of a pending move, then spawn and check for terminal conditions."""
        if pending is not self._pending or pending.generation != self._generation:
            _logger.debug('Dropped settle from generation %d', pending.generation)
            return

        final_state = pending.final_state
        if not self._won and not self._won_acknowledged and has_won(final_state, self.config.win_value):
            self._won = True
            _logger.info('Reached %d with score %d', self.config.win_value, self._score + pending.score_delta)

        self._score += pending.score_delta
        self._update_best_score()

        self._board = spawn(final_state, self._rng, self.config.spawn_probs)
        self._pending = None

        if is_game_over(self._board):
            self._game_over = True
            _logger.info('Game over with score %d', self._score)

    def _swap(self, first: Tile, second: Tile) -> None:
        self._push_history()
        swapped = {first.id: first.moved_to(second.x, second.y), second.id: second.moved_to(first.x, first.y)}
        self._board = self._board.replace_tiles(swapped.get(tile.id, tile) for tile in self._board.tiles)
        self._selected_tile_id = None
        self._mode = GameMode.NORMAL

    def _clear(self, value: int) -> None:
        self._push_history()
        self._board = self._board.replace_tiles(tile for tile in self._board.tiles if tile.value != value)
        self._selected_tile_id = None
        self._mode = GameMode.NORMAL

        if not len(self._board):
            generation = self._generation
            self.scheduler.call_later(self.config.clear_respawn_delay, lambda: self._respawn(generation))

    def _respawn(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._board = spawn(self._board, self._rng, self.config.spawn_probs)

    def _update_best_score(self) -> None:
        if self._score <= self._best_score:
            return
        self._best_score = self._score
        if self._storage is not None:
            self._storage.save(self._best_score)
