import curses

import termtris.__main__ as cli
from termtris.game_state import GameState, Phase
from termtris.run_curses import CursesSurface


class FakeWindow:
    def __init__(self, keys=()) -> None:
        self.keys = list(keys)
        self.writes = []

    def addstr(self, row, col, text):
        self.writes.append((row, col, text))
        if row == 19 and col == 18:
            raise curses.error("addwstr() returned ERR")

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def refresh(self):
        pass


def test_curses_surface_ignores_last_cell_error():
    window = FakeWindow()
    surface = CursesSurface(window)
    surface.put(19, 18, "[]")
    surface.put(0, 0, " .")
    assert window.writes == [(19, 18, "[]"), (0, 0, " .")]


def test_curses_surface_maps_no_input_to_none():
    surface = CursesSurface(FakeWindow(keys=[ord("7"), ord(" ")]))
    assert surface.read_key() == "7"
    assert surface.read_key() == " "
    assert surface.read_key() is None


def test_main_prints_final_counters(monkeypatch, capsys):
    seen = {}

    def fake_run(state: GameState) -> GameState:
        seen["show_next"] = state.show_next
        state.score = 321
        state.lines = 3
        state.phase = Phase.GAME_OVER
        return state

    monkeypatch.setattr(cli, "run", fake_run)
    assert cli.main(["--seed", "4", "--show-next"]) == 0
    assert seen["show_next"] is True
    out = capsys.readouterr().out.splitlines()
    assert out == ["final score: 321", "line count: 3", "level: 0"]


def test_parser_does_not_depend_on_module_docstring(monkeypatch):
    monkeypatch.setattr(cli, "__doc__", None)
    args = cli.build_parser().parse_args(["--seed", "9"])
    assert args.seed == 9
    assert not args.show_next
