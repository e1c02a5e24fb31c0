# -*- coding: utf-8 -*-
"""
Graphical User Interface for the 2048 ∞ game.

This module provides a Matplotlib window drawing the frames produced by ``InfiniteGame.frame`` and turning key
presses and clicks into game input. It holds no game rules.
"""
from typing import Callable, Optional

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event
from matplotlib.patches import FancyBboxPatch

from infinite2048.addons.types import GameMode, RenderFrame
from infinite2048.core.board import Tile
from infinite2048.utils.layout import board_extent, board_geometry, cell_at, font_size, tile_position
from infinite2048.utils.scheduler import Scheduler


class MatplotlibScheduler(Scheduler):
    """
    Scheduler backed by single-shot timers of a Matplotlib canvas.

    Callbacks run on the GUI event loop, the thread driving the game.
    """

    def __init__(self, canvas):
        self._canvas = canvas
        self._timers = []

    def call_later(self, delay: int, callback: Callable[[], None]) -> None:
        timer = self._canvas.new_timer(interval=max(int(delay), 1))
        timer.single_shot = True

        def _fire():
            self._timers.remove(timer)
            callback()

        timer.add_callback(_fire)
        # ##: Timers are garbage collected unless referenced.
        self._timers.append(timer)
        timer.start()


class WindowBoard:
    """
    A class for rendering the 2048 ∞ game board using Matplotlib.

    Methods
    -------
    show_frame(frame: RenderFrame)
        Redraw the board from a frame.
    tile_at(xdata: float, ydata: float)
        Resolve a click position to a tile of the last frame.
    register_key_handler(key_handler: Callable)
        Register a function to handle keyboard events.
    register_click_handler(click_handler: Callable)
        Register a function to handle mouse button presses.
    register_release_handler(release_handler: Callable)
        Register a function to handle mouse button releases.
    show(block: bool = True)
        Display the game window.
    close()
        Close the game window.

    Notes
    -----
    - Tiles are drawn at the coordinates of the frame. During a move the frame holds the slide state, so tiles jump
      to their destination first and show their merged value once the move settles.
    """

    # ##: Colors mapping for different tile values.
    COLORS = {
        2: "#EEE4DA",
        4: "#ECE0C8",
        8: "#ECB280",
        16: "#EC8D53",
        32: "#F57C5F",
        64: "#E95937",
        128: "#F3D96B",
        256: "#F2D04A",
        512: "#E5BF2E",
        1024: "#E2B814",
        2048: "#EBC502",
        4096: "#00A2D8",
        8192: "#9ED682",
    }
    BACKGROUND = "#BBADA0"
    EMPTY = "#CCC0B3"
    HIGHLIGHT = "#4F46E5"

    def __init__(self, title: str, size: int, width: float = 450.0):
        """
        Initialize the game board window.

        Parameters
        ----------
        title : str
            The title of the window.
        size : int
            The size of the game board (e.g., 4 for a 4x4 board).
        width : float, optional
            Width of the board in pixels, capped at 500 (default is 450).
        """
        self.size = size
        self.cell_size, self.gap = board_geometry(width, size)
        self.extent = board_extent(self.cell_size, self.gap, size)

        # ##: Free the keys used by the game from the Matplotlib navigation shortcuts.
        for keymap in [name for name in plt.rcParams if name.startswith("keymap.")]:
            plt.rcParams[keymap] = []

        dpi = 100
        self.fig, self.axe = plt.subplots(figsize=(self.extent / dpi, (self.extent + 60) / dpi), dpi=dpi)
        self.fig.canvas.manager.set_window_title(title)
        self.scheduler = MatplotlibScheduler(self.fig.canvas)
        self._frame: Optional[RenderFrame] = None
        self._setup_axes()
        self.closed = False
        self.press_position: tuple[Optional[float], Optional[float]] = (None, None)  # Start of a mouse drag
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

    def _setup_axes(self):
        """
        Set up the axes for the game board: one data unit per pixel, origin at the top left corner.
        """
        self.fig.subplots_adjust(left=0, bottom=0, right=1, top=self.extent / (self.extent + 60))
        self.axe.set_xlim(0, self.extent)
        self.axe.set_ylim(self.extent, 0)
        self.axe.set_aspect("equal")
        self.axe.axis("off")

    def _close_handler(self, event: Optional[Event] = None):
        """
        Handle the window close event.

        Parameters
        ----------
        event : Optional[Event]
            The close event (not used but required for event handling).
        """
        self.closed = True

    def _draw_cell(self, x: int, y: int, color: str, **kwargs) -> FancyBboxPatch:
        patch = FancyBboxPatch(
            (tile_position(x, self.cell_size, self.gap), tile_position(y, self.cell_size, self.gap)),
            self.cell_size,
            self.cell_size,
            boxstyle=f"round,pad=0,rounding_size={self.gap}",
            facecolor=color,
            **kwargs,
        )
        self.axe.add_patch(patch)
        return patch

    def _draw_tile(self, frame: RenderFrame, tile: Tile):
        highlighted = frame.is_highlighted(tile)
        self._draw_cell(
            tile.x,
            tile.y,
            self.COLORS.get(tile.value, "#0F172A"),
            alpha=0.4 if frame.is_dimmed(tile) else 1.0,
            edgecolor=self.HIGHLIGHT if highlighted else "none",
            linewidth=4 if highlighted else 0,
        )
        center = self.cell_size / 2
        self.axe.text(
            tile_position(tile.x, self.cell_size, self.gap) + center,
            tile_position(tile.y, self.cell_size, self.gap) + center,
            str(tile.value),
            ha="center",
            va="center",
            fontsize=font_size(tile.value),
            fontweight="demibold",
            color="#334155" if tile.value <= 4 else "white",
        )

    def _draw_overlay(self, message: str, color: str):
        self.axe.add_patch(
            FancyBboxPatch((0, 0), self.extent, self.extent, boxstyle="square,pad=0", facecolor=color, alpha=0.75)
        )
        self.axe.text(self.extent / 2, self.extent / 2, message, ha="center", va="center", fontsize="xx-large")

    def show_frame(self, frame: RenderFrame):
        """
        Show or update the game board.

        Parameters
        ----------
        frame : RenderFrame
            What to draw, as produced by the game.

        Notes
        -----
        - Ghost tiles are drawn under their merge partner.
        - The title shows the scores and the active mode.
        """
        self._frame = frame
        self.axe.clear()
        self._setup_axes()
        self.axe.add_patch(
            FancyBboxPatch((0, 0), self.extent, self.extent, boxstyle="square,pad=0", facecolor=self.BACKGROUND)
        )
        for index in range(frame.size * frame.size):
            self._draw_cell(index % frame.size, index // frame.size, self.EMPTY)

        for tile in sorted(frame.tiles, key=lambda tile: not tile.to_be_deleted):
            self._draw_tile(frame, tile)

        if frame.game_over:
            self._draw_overlay(f"Game Over!\nFinal Score: {frame.score}", "white")
        elif frame.show_win_overlay:
            self._draw_overlay("2048!\nEnter to keep going", "#FBBF24")

        mode = "" if frame.mode is GameMode.NORMAL else f" | {frame.mode.value.upper()}"
        self.axe.set_title(f"Score {frame.score} | Best {frame.best_score}{mode}", fontweight="bold")

        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()

    def tile_at(self, xdata: Optional[float], ydata: Optional[float]) -> Optional[Tile]:
        """
        Resolve a click position to the live tile drawn there.

        Parameters
        ----------
        xdata, ydata : Optional[float]
            Click position in data coordinates, None when the click fell outside the axes.

        Returns
        -------
        Optional[Tile]
            The tile under the click in the last frame shown, or None.
        """
        if self._frame is None or xdata is None or ydata is None:
            return None
        x = cell_at(xdata, self.cell_size, self.gap, self.size)
        y = cell_at(ydata, self.cell_size, self.gap, self.size)
        if x is None or y is None:
            return None
        for tile in self._frame.tiles:
            if tile.position == (x, y) and not tile.to_be_deleted:
                return tile
        return None

    def register_key_handler(self, key_handler: Callable):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler : Callable
            A function to handle keyboard events.
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    def register_click_handler(self, click_handler: Callable):
        """
        Register a mouse click handler.

        Parameters
        ----------
        click_handler : Callable
            A function to handle button press events.
        """
        self.fig.canvas.mpl_connect("button_press_event", click_handler)

    def register_release_handler(self, release_handler: Callable):
        """
        Register a mouse button release handler.

        Parameters
        ----------
        release_handler : Callable
            A function to handle button release events.
        """
        self.fig.canvas.mpl_connect("button_release_event", release_handler)

    @classmethod
    def show(cls, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """
        Close the window.

        This method closes the game window and sets the closed flag to True.
        """
        plt.close(self.fig)
        self.closed = True
