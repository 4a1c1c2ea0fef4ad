"""Character-cell renderer for the board, the pieces and the HUD.

The renderer only knows the :class:`Surface` protocol, so the same drawing
code runs against a curses window or the recording surface used in tests.
Every board cell is two characters wide.
"""

from __future__ import annotations

from typing import Optional, Protocol

from .board import Board
from .game_state import GameState
from .geometry import HEIGHT, WIDTH, Point, inside_screen
from .tetromino import Tetromino


BLOCK = "[]"
BACKGROUND = " ."

HELP_LINES = (
    (-9, 15, "7: LEFT 9: RIGHT"),
    (-8, 20, "8:TURN"),
    (-7, 15, "4:SPEED UP 5:DROP"),
    (-6, 15, "1: SHOW NEXT"),
    (-5, 15, "0: ERASE THIS TEXT"),
    (-4, 17, "SPACEBAR - DROP"),
)

# Blank strip covering the preview area, one per preview row.
PREVIEW_BLANK = " " * 11


class Surface(Protocol):
    """Drawing target addressed in character rows and columns."""

    def put(self, row: int, col: int, text: str) -> None:
        ...

    def refresh(self) -> None:
        ...

    def read_key(self) -> Optional[str]:
        """Return the next pending key or ``None`` when there is none."""
        ...


class Renderer:
    """Draw the game on a full ``screen`` and a board-sized ``field``.

    ``center`` is the middle of the screen in character cells; the field is
    expected to be placed at ``(center.y - 10, center.x - 10)`` with
    ``HEIGHT`` rows and ``2 * WIDTH`` columns.
    """

    def __init__(self, screen: Surface, field: Surface, center: Point) -> None:
        self.screen = screen
        self.field = field
        self.center = center
        self.preview_point = Point(center.x - 31, center.y)

    def draw_walls(self) -> None:
        top = self.center.y - 10
        left = self.center.x - 10
        for r in range(HEIGHT + 1):
            self.screen.put(top + r, left - 2, "<!")
            self.screen.put(top + r, left + 2 * WIDTH, "!>")
        self.screen.put(top + HEIGHT, left, "=" * (2 * WIDTH))
        self.screen.put(top + HEIGHT + 1, left, "\\/" * WIDTH)

    def draw_labels(self) -> None:
        cy, cx = self.center.y, self.center.x
        self.screen.put(cy - 10, cx - 30, "FULL ROWS:")
        self.screen.put(cy - 9, cx - 30, "LEVEL:")
        self.screen.put(cy - 8, cx - 28, "SCORE:")

    def draw_help(self) -> None:
        for dy, dx, text in HELP_LINES:
            self.screen.put(self.center.y + dy, self.center.x + dx, text)

    def erase_help(self) -> None:
        for dy, dx, text in HELP_LINES:
            self.screen.put(self.center.y + dy, self.center.x + dx, " " * len(text))
        self.screen.refresh()

    def draw_hud(self, state: GameState) -> None:
        cy, cx = self.center.y, self.center.x
        self.screen.put(cy - 10, cx - 20, f"{state.lines:>3}")
        self.screen.put(cy - 9, cx - 24, f"{state.level:>7}")
        self.screen.put(cy - 8, cx - 22, f"{state.score:>5}")
        self.screen.refresh()

    def draw_board(self, board: Board) -> None:
        """Redraw every field cell from ``board``."""

        for r, row in enumerate(board.rows()):
            line = "".join(BLOCK if cell else BACKGROUND for cell in row)
            self.field.put(r, 0, line)
        self.field.refresh()

    def _paint(self, piece: Tetromino, position: Point, glyph: str) -> None:
        for cell in piece.cells(position):
            # Freshly spawned pieces may stick out above the field.
            if inside_screen(cell):
                self.field.put(cell.y, cell.x * 2, glyph)
        self.field.refresh()

    def draw_piece(self, piece: Tetromino, position: Point) -> None:
        self._paint(piece, position, BLOCK)

    def erase_piece(self, piece: Tetromino, position: Point) -> None:
        self._paint(piece, position, BACKGROUND)

    def clear_preview(self) -> None:
        p = self.preview_point
        for dy in range(-2, 2):
            self.screen.put(p.y + dy, (p.x - 2) * 2, PREVIEW_BLANK)
        self.screen.refresh()

    def draw_preview(self, piece: Tetromino) -> None:
        self.clear_preview()
        for cell in piece.cells(self.preview_point):
            self.screen.put(cell.y, cell.x * 2, BLOCK)
        self.screen.refresh()

    def draw_frame(self, state: GameState) -> None:
        """Draw everything that does not depend on the active piece."""

        self.draw_walls()
        self.draw_help()
        self.draw_labels()
        self.draw_hud(state)
        self.draw_board(state.board)
