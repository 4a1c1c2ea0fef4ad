"""curses front-end for the game engine.

:class:`CursesSurface` adapts a curses window to the renderer's surface
protocol and :class:`Runner` drives the drop cycle: wait for input until the
gravity tick, apply each key as it arrives, let the piece fall, then lock and
clear lines.  The runner takes its clock and sleep function as arguments so
tests can play whole games instantly.
"""

from __future__ import annotations

import curses
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .game_state import GameState, Phase
from .geometry import HEIGHT, WIDTH, Point
from .input import Action, action_for_key, poll_key
from .render import Renderer


LOGGER = logging.getLogger(__name__)

# Milliseconds between automatic downward moves
TICK_MS = 500
# Milliseconds between two keyboard reads while waiting for the tick
POLL_MS = 10
# Pause after each cleared row so the player sees it vanish
CLEAR_DELAY_MS = 100


class CursesSurface:
    """Surface backed by a curses window."""

    def __init__(self, window) -> None:
        self.window = window

    def put(self, row: int, col: int, text: str) -> None:
        try:
            self.window.addstr(row, col, text)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off the window,
            # which curses reports even though the text was drawn.
            pass

    def refresh(self) -> None:
        self.window.refresh()

    def read_key(self) -> Optional[str]:
        code = self.window.getch()
        if code == -1:
            return None
        return chr(code)


@dataclass
class Runner:
    state: GameState
    renderer: Renderer
    read_key: Callable[[], Optional[str]]
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], None] = time.sleep
    tick: float = TICK_MS / 1000
    poll: float = POLL_MS / 1000
    clear_delay: float = CLEAR_DELAY_MS / 1000

    def _handle_key(self, key: str) -> bool:
        """Apply ``key`` to the active piece; ``True`` ends the current wait."""

        state = self.state
        action = action_for_key(key)
        self.renderer.erase_piece(state.active, state.position)
        ends_wait = False
        if action is Action.ERASE_HELP:
            self.renderer.erase_help()
        elif action is Action.TOGGLE_PREVIEW:
            state.apply(action)
            self.renderer.clear_preview()
            if state.show_next:
                self.renderer.draw_preview(state.upcoming)
        elif action is not None:
            ends_wait = state.apply(action)
        self.renderer.draw_piece(state.active, state.position)
        return ends_wait

    def _wait_for_tick(self) -> None:
        deadline = self.clock() + self.tick
        while self.state.phase is Phase.FALLING:
            key = poll_key(
                self.read_key,
                deadline,
                clock=self.clock,
                sleep=self.sleep,
                granularity=self.poll,
            )
            if key is None or self._handle_key(key):
                return

    def _animate_clear(self, row: int) -> None:
        self.renderer.draw_board(self.state.board)
        self.sleep(self.clear_delay)

    def play_piece(self) -> None:
        """Run one spawn, fall, lock and line clear cycle."""

        state = self.state
        state.spawn_tetromino()
        if state.show_next:
            self.renderer.draw_preview(state.upcoming)
        self.renderer.draw_piece(state.active, state.position)

        while state.phase is Phase.FALLING:
            self._wait_for_tick()
            if state.phase is not Phase.FALLING:
                break
            old = state.position
            if state.gravity_step():
                self.renderer.erase_piece(state.active, old)
                self.renderer.draw_piece(state.active, state.position)

        if not state.lock_active():
            return
        state.clear_full_lines(on_clear=self._animate_clear)
        self.renderer.draw_hud(state)
        self.renderer.draw_board(state.board)

    def run(self) -> GameState:
        """Play pieces until the game is over and return the final state."""

        self.renderer.draw_frame(self.state)
        while not self.state.game_over:
            self.play_piece()
        return self.state


def play(stdscr, state: GameState) -> GameState:
    """Set up ``stdscr`` and play ``state`` to the end.

    Meant to be called through :func:`curses.wrapper`.  A terminal too small
    for the field raises :class:`curses.error`.
    """

    curses.curs_set(0)
    stdscr.keypad(True)
    rows, cols = stdscr.getmaxyx()
    center = Point(cols // 2, rows // 2)
    LOGGER.debug("Screen center at (%d, %d)", center.x, center.y)
    field_win = stdscr.subwin(HEIGHT, WIDTH * 2, center.y - 10, center.x - 10)
    field_win.keypad(True)
    field_win.nodelay(True)

    screen = CursesSurface(stdscr)
    field_surface = CursesSurface(field_win)
    renderer = Renderer(screen, field_surface, center)
    curses.flushinp()
    return Runner(state, renderer, field_surface.read_key).run()


def run(state: Optional[GameState] = None) -> GameState:
    """Play a full game in the current terminal."""

    if state is None:
        state = GameState()
    return curses.wrapper(play, state)
