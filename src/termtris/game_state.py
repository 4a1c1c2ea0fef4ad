"""High level game state container.

:class:`GameState` owns the board, the active piece and the session counters
and implements every rule of the game without touching the terminal, so the
whole drop cycle can be driven from tests.  The cycle is::

    SPAWNING -> FALLING -> LOCKING -> LINE_CLEARING -> SPAWNING ...

with ``GAME_OVER`` reachable from ``LOCKING`` when a piece locks partly above
the board.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .board import Board
from .geometry import HEIGHT, Point, inside_screen
from .input import Action
from .tetromino import BAG, Tetromino
from .utils import DOWN, drop_distance, is_valid, rotate


LOGGER = logging.getLogger(__name__)

SPAWN_POSITION = Point(5, 0)

PIECE_SET_POINTS = 20
LINE_CLEAR_POINTS = 100
SOFT_TICK_POINTS = 1


class Phase(Enum):
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    LINE_CLEARING = "line_clearing"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Mutable state for a game session."""

    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    position: Point = SPAWN_POSITION
    upcoming: Optional[Tetromino] = None
    score: int = 0
    lines: int = 0
    # Shown in the HUD only; speed and scoring ignore it.
    level: int = 0
    pieces: int = 0
    show_next: bool = False
    phase: Phase = Phase.SPAWNING
    rng: random.Random = field(default_factory=random.Random)

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def _random_piece(self) -> Tetromino:
        return self.rng.choice(BAG)

    def spawn_tetromino(self) -> Tetromino:
        """Spawn and return a new active tetromino.

        The piece in ``upcoming`` becomes active at :data:`SPAWN_POSITION` and a
        new upcoming piece is drawn at random.  The spawn cell is not checked:
        a piece that cannot fall simply locks on the next tick.
        """

        self.active = self.upcoming or self._random_piece()
        self.position = SPAWN_POSITION
        self.upcoming = self._random_piece()
        self.phase = Phase.FALLING
        LOGGER.debug(
            "Spawned %s, next %s", self.active.shape.value, self.upcoming.shape.value
        )
        return self.active

    def move(self, dx: int) -> bool:
        """Shift the active piece ``dx`` columns if the target is free."""

        target = self.position + Point(dx, 0)
        if self.active is None or not is_valid(self.active, target, self.board):
            return False
        self.position = target
        return True

    def rotate(self) -> bool:
        """Turn the active piece; return ``True`` if it actually changed."""

        if self.active is None:
            return False
        turned = rotate(self.active, self.position, self.board)
        if turned is self.active:
            return False
        self.active = turned
        return True

    def gravity_step(self) -> bool:
        """Move the active piece one row down or switch to locking."""

        target = self.position + DOWN
        if self.active is not None and is_valid(self.active, target, self.board):
            self.position = target
            return True
        self.phase = Phase.LOCKING
        return False

    def soft_tick(self) -> None:
        """Award the soft tick bonus.

        The caller ends the current wait and performs the gravity step; the
        point is granted whether or not that step succeeds.
        """

        self.score += SOFT_TICK_POINTS

    def hard_drop(self) -> int:
        """Drop the active piece as far as it goes and return the rows fallen."""

        if self.active is None:
            return 0
        rows = drop_distance(self.active, self.position, self.board)
        self.position = Point(self.position.x, self.position.y + rows)
        self.score += rows
        self.phase = Phase.LOCKING
        return rows

    def toggle_preview(self) -> bool:
        self.show_next = not self.show_next
        return self.show_next

    def apply(self, action: Action) -> bool:
        """Apply a player ``action``.

        Returns ``True`` when the action ends the current gravity wait.
        Invalid moves and rotations are ignored.
        """

        if action is Action.LEFT:
            self.move(-1)
        elif action is Action.RIGHT:
            self.move(1)
        elif action is Action.ROTATE:
            self.rotate()
        elif action is Action.SOFT_TICK:
            self.soft_tick()
            return True
        elif action is Action.HARD_DROP:
            self.hard_drop()
            return True
        elif action is Action.TOGGLE_PREVIEW:
            self.toggle_preview()
        return False

    def lock_active(self) -> bool:
        """Write the active piece into the board.

        Every cell is checked before anything is written.  If one of them is
        off the board the game is over and the board is left untouched.
        Returns ``True`` when the piece was locked.
        """

        if self.active is None:
            return False
        cells = self.active.cells(self.position)
        if not all(inside_screen(cell) for cell in cells):
            self.phase = Phase.GAME_OVER
            LOGGER.info(
                "Game over: score=%d lines=%d level=%d",
                self.score,
                self.lines,
                self.level,
            )
            return False
        self.board.lock_cells(cells)
        self.score += PIECE_SET_POINTS
        self.pieces += 1
        self.phase = Phase.LINE_CLEARING
        LOGGER.debug(
            "Locked %s at (%d, %d)",
            self.active.shape.value,
            self.position.x,
            self.position.y,
        )
        return True

    def clear_full_lines(self, on_clear: Optional[Callable[[int], None]] = None) -> int:
        """Remove full rows and return the points they are worth.

        Rows are scanned from the bottom.  The scan stops at the first empty
        row since nothing above it can be full.  Each full row is worth
        :data:`LINE_CLEAR_POINTS` times a combo counter that starts at one and
        grows with every row removed in this pass.  ``on_clear`` is called with
        the row index after the row is blanked and before the rows above it
        move down.
        """

        row = HEIGHT - 1
        combo = 1
        points = 0
        while row >= 0 and not self.board.is_empty(row):
            if self.board.is_full(row):
                self.lines += 1
                points += LINE_CLEAR_POINTS * combo
                combo += 1
                self.board.clear_row(row)
                if on_clear is not None:
                    on_clear(row)
                self.board.shift_down(row)
            else:
                row -= 1
        if points:
            LOGGER.info("Cleared %d row(s) for %d points", combo - 1, points)
        self.score += points
        self.phase = Phase.SPAWNING
        return points

    def reset_game(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board()
        self.score = 0
        self.lines = 0
        self.level = 0
        self.pieces = 0
        self.active = None
        self.position = SPAWN_POSITION
        self.upcoming = self._random_piece()
        self.show_next = False
        self.phase = Phase.SPAWNING

    def summary(self) -> List[str]:
        """Return the lines reported when the game ends."""

        return [
            f"final score: {self.score}",
            f"line count: {self.lines}",
            f"level: {self.level}",
        ]
