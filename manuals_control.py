# -*- coding: utf-8 -*-
"""
Play 2048 ∞

Arrows or mouse drags move, a click taps a tile, S toggles swap mode, C toggles clear mode, U undoes, Escape
cancels the mode, Backspace starts a new game and Enter dismisses the win.
"""
from typing import Any

from infinite2048.addons import GameConfig
from infinite2048.envs import InfiniteGame
from infinite2048.utils import KEY_BINDINGS, BestScoreStore, dispatch, swipe
from infinite2048.utils.windows import WindowBoard


def redraw(window: WindowBoard, game: InfiniteGame):
    """
    Redraw the game board.

    Parameters
    ----------
    window: WindowBoard
        Class to draw the game board

    game: InfiniteGame
        Game to draw
    """
    window.show_frame(game.frame())


def schedule_redraws(window: WindowBoard, game: InfiniteGame):
    """
    Redraw once the delayed phase of an action has run.

    Parameters
    ----------
    window: WindowBoard
        Class to draw the game board

    game: InfiniteGame
        The game
    """
    delay = max(game.config.settle_delay, game.config.clear_respawn_delay)
    window.scheduler.call_later(delay + 1, lambda: redraw(window, game))


def key_handler(game: InfiniteGame, window: WindowBoard, event: Any):
    """
    Handle the keyboard.

    Parameters
    ----------
    game: InfiniteGame
        The game

    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle
    """
    if event.key == "q":
        window.close()
        return None

    intent = KEY_BINDINGS.get(event.key)
    if intent is not None and dispatch(game, intent):
        redraw(window, game)
        schedule_redraws(window, game)


def press_handler(window: WindowBoard, event: Any):
    """
    Remember where a mouse drag starts.

    Parameters
    ----------
    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle
    """
    window.press_position = (event.xdata, event.ydata)


def release_handler(game: InfiniteGame, window: WindowBoard, event: Any):
    """
    Handle the end of a mouse drag: a drag long enough is a swipe, anything else taps the tile under the pointer.

    Parameters
    ----------
    game: InfiniteGame
        The game

    window: WindowBoard
        Class to draw the game board

    event: Any
        event to handle
    """
    start_x, start_y = window.press_position
    window.press_position = (None, None)
    if None in (start_x, start_y, event.xdata, event.ydata):
        return None

    # ##: The board axes grow downward, as swipe displacements do.
    if swipe(game, event.xdata - start_x, event.ydata - start_y):
        changed = True
    else:
        tile = window.tile_at(start_x, start_y)
        changed = tile is not None and game.tap(tile.id)

    if changed:
        redraw(window, game)
        schedule_redraws(window, game)


if __name__ == "__main__":
    config = GameConfig()
    window_board = WindowBoard(title="2048 ∞", size=config.size)
    env = InfiniteGame(
        config=config,
        scheduler=window_board.scheduler,
        storage=BestScoreStore(config.storage_dir, config.storage_key),
    )

    window_board.register_key_handler(lambda event: key_handler(env, window_board, event))
    window_board.register_click_handler(lambda event: press_handler(window_board, event))
    window_board.register_release_handler(lambda event: release_handler(env, window_board, event))

    redraw(window_board, env)

    # Blocking event loop
    window_board.show(block=True)
