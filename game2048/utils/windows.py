# -*- coding: utf-8 -*-
"""
Display a 2048 game in a window.
"""
import numpy as np
from matplotlib import pyplot as plt

from game2048.envs.game import GameStatus
from game2048.utils.changes import BoardChanges

# ##: Message shown under the score for each status.
STATUS_MESSAGES = {
    GameStatus.IDLE: 'Press Enter to start',
    GameStatus.PLAYING: '',
    GameStatus.WIN: 'Winner! Press Backspace to restart',
    GameStatus.LOSE: 'Game over. Press Backspace to restart',
}


class WindowBoard:
    """
    Window to draw the 2048 board using Matplotlib.
    Inspired by @Farama-Foundation (Minigrid).
    """

    # ##: Colors
    COLORS = {
        0: "#CDC1B4",
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
    }
    HIGHLIGHT = {"spawned": "#776E65", "merged": "#F9F6F2"}

    def __init__(self, title: str, size: int):
        # ## ----> Create support.
        self.fig, self.axe = plt.subplots()
        self.fig.subplots_adjust(left=0, bottom=0, right=1, top=0.9, wspace=0.1, hspace=0.1)
        self.axe.set_facecolor("#BBADA0")
        self.fig.canvas.manager.set_window_title(title)

        self.axe.xaxis.set_ticks_position("none")
        self.axe.yaxis.set_ticks_position("none")
        _ = self.axe.set_xticklabels([])
        _ = self.axe.set_yticklabels([])

        # ## ----> Add cell for board.
        self.textes = []
        self.axes = [
            self.fig.add_subplot(size, size, r * size + c) for r in range(0, size) for c in range(1, size + 1)
        ]
        for _ax in self.axes:
            text = _ax.text(
                0.5,
                0.5,
                "",
                horizontalalignment="center",
                verticalalignment="center",
                fontsize="x-large",
                fontweight="demibold",
            )
            self.textes.append(text)
        for _ax in self.axes:
            _ = _ax.set_xticks([])
            _ = _ax.set_yticks([])

        # ## ----> Flag indicating that the window was closed.
        self.closed = False

        def close_handler(evt):
            self.closed = True

        self.fig.canvas.mpl_connect("close_event", close_handler)

    def show_image(self, board: np.ndarray, changes: BoardChanges | None = None):
        """
        Show a board snapshot or update the one being shown.

        Parameters
        ----------
        board: np.ndarray
            Snapshot returned by ``Game.get_state``
        changes: BoardChanges
            Cells to emphasise, if any
        """
        size = board.shape[1]
        spawned = set(changes.spawned) if changes else set()
        merged = set(changes.merged) if changes else set()

        # ## ----> Update the image data.
        for index, (_ax, text, value) in enumerate(zip(self.axes, self.textes, np.reshape(board, -1))):
            cell = divmod(index, size)
            text.set_text(str(int(value)) if value else "")
            _ax.set_facecolor(self.COLORS.get(int(value), "#3C3A32"))

            for spine in _ax.spines.values():
                spine.set_linewidth(1.0)
                spine.set_edgecolor("black")
            if cell in spawned or cell in merged:
                for spine in _ax.spines.values():
                    spine.set_linewidth(3.0)
                    spine.set_edgecolor(self.HIGHLIGHT["spawned" if cell in spawned else "merged"])

        self._redraw()

    def show_status(self, score: int, status: GameStatus):
        """
        Show the score and the status message above the board.

        Parameters
        ----------
        score: int
            Current score
        status: GameStatus
            Current status
        """
        message = STATUS_MESSAGES[status]
        self.fig.suptitle(f"Score: {score}" + (f"\n{message}" if message else ""))
        self._redraw()

    def _redraw(self):
        # ## ---> Request the window to be redrawn
        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()

        # ## ----> Let Matplotlib process UI events
        plt.pause(0.001)

    def register_key_handler(self, key_handler):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler: Any
            Key handler
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    def show(self, block: bool = True):
        """
        Show the window, and start an event loop.

        Parameters
        ----------
        block: bool
            Activate or not the interactive mode
        """
        # ## ----> If not blocking, trigger interactive mode.
        if not block:
            plt.ion()

        # ## ----> Show the plot.
        plt.show()

    def close(self):
        """
        Close the window.
        """
        plt.close()
        self.closed = True
