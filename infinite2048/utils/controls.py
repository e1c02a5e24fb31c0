"""
Input intents: mapping of keys and swipes to game actions.

Presentation layers turn key events into an ``Intent`` and hand it to ``dispatch``, and pointer drags to ``swipe``.
Tile taps are resolved to a tile identifier by the presentation layer and sent to ``InfiniteGame.tap`` directly.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from infinite2048.addons.types import Direction

if TYPE_CHECKING:
    from infinite2048.envs.infinite import InfiniteGame


class Intent(str, Enum):
    """Player intents other than tile taps."""

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'
    CANCEL = 'cancel'
    RESET = 'reset'
    UNDO = 'undo'
    TOGGLE_SWAP = 'toggle_swap'
    TOGGLE_CLEAR = 'toggle_clear'
    ACKNOWLEDGE_WIN = 'acknowledge_win'


# ##: Key names as reported by Matplotlib key events.
KEY_BINDINGS: dict[str, Intent] = {
    'left': Intent.LEFT,
    'up': Intent.UP,
    'right': Intent.RIGHT,
    'down': Intent.DOWN,
    'escape': Intent.CANCEL,
    'backspace': Intent.RESET,
    'u': Intent.UNDO,
    's': Intent.TOGGLE_SWAP,
    'c': Intent.TOGGLE_CLEAR,
    'enter': Intent.ACKNOWLEDGE_WIN,
}

_MOVES = {
    Intent.LEFT: Direction.LEFT,
    Intent.UP: Direction.UP,
    Intent.RIGHT: Direction.RIGHT,
    Intent.DOWN: Direction.DOWN,
}


def swipe_direction(dx: float, dy: float, threshold: float = 30.0) -> Direction | None:
    """
    Resolve a swipe gesture into a direction.

    Parameters
    ----------
    dx : float
        Horizontal displacement, positive to the right.
    dy : float
        Vertical displacement, positive downward.
    threshold : float, optional
        Minimum displacement along the dominant axis (default is 30).

    Returns
    -------
    Direction | None
        Direction along the axis of greater displacement, or None for a swipe that is too short.
    """
    if max(abs(dx), abs(dy)) <= threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def swipe(game: InfiniteGame, dx: float, dy: float) -> bool:
    """
    Move the game along a swipe, using the swipe threshold of its configuration.

    Returns
    -------
    bool
        Whether a move started. Short swipes are ignored.
    """
    direction = swipe_direction(dx, dy, game.config.swipe_threshold)
    return direction is not None and game.move(direction)


def dispatch(game: InfiniteGame, intent: Intent) -> bool:
    """
    Apply an intent to a game.

    Returns
    -------
    bool
        Whether the intent changed the game. Intents the game rejects have no effect.
    """
    if intent in _MOVES:
        return game.move(_MOVES[intent])
    if intent is Intent.CANCEL:
        return game.cancel()
    if intent is Intent.RESET:
        game.reset()
        return True
    if intent is Intent.UNDO:
        return game.undo()
    if intent is Intent.TOGGLE_SWAP:
        return game.toggle_swap()
    if intent is Intent.TOGGLE_CLEAR:
        return game.toggle_clear()
    return game.acknowledge_win()
