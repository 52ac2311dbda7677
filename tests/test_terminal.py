import curses
import locale

import pytest

from termtris.controls import KeyEvent
from termtris.terminal import CursesTerminal, TerminalError, TerminalTooSmallError


class FakeScreen:
    def __init__(self, calls, cols=80, rows=24, keys=()) -> None:
        self.calls = calls
        self.cols = cols
        self.rows = rows
        self.keys = list(keys)
        self.writes = []

    def getmaxyx(self):
        return self.rows, self.cols

    def keypad(self, flag) -> None:
        self.calls.append(("keypad", flag))

    def addstr(self, row, col, text, attr) -> None:
        self.writes.append((row, col, text, attr))

    def erase(self) -> None:
        self.calls.append(("erase",))

    def refresh(self) -> None:
        self.calls.append(("refresh",))

    def timeout(self, ms) -> None:
        self.calls.append(("timeout", ms))

    def getch(self):
        return self.keys.pop(0) if self.keys else -1


@pytest.fixture
def fake_curses(monkeypatch):
    """Replace the curses calls used by ``CursesTerminal`` with recorders."""

    calls = []
    state = {"screen": FakeScreen(calls)}

    def recorder(name):
        def record(*args):
            calls.append((name,) + args)
        return record

    monkeypatch.setattr(locale, "setlocale", lambda *args: "C")
    monkeypatch.delenv("ESCDELAY", raising=False)
    monkeypatch.setattr(curses, "initscr", lambda: state["screen"])
    for name in ("noecho", "echo", "raw", "noraw", "curs_set", "start_color",
                 "use_default_colors", "endwin", "init_pair"):
        monkeypatch.setattr(curses, name, recorder(name))
    monkeypatch.setattr(curses, "has_colors", lambda: True)
    monkeypatch.setattr(curses, "color_pair", lambda n: n * 256)
    monkeypatch.setattr(curses, "COLORS", 256, raising=False)
    state["calls"] = calls
    return state


def names(calls):
    return [call[0] for call in calls]


def test_enter_and_exit_toggle_raw_mode_and_cursor(fake_curses):
    calls = fake_curses["calls"]
    with CursesTerminal(min_size=(47, 23)) as terminal:
        assert ("raw",) in calls
        assert ("curs_set", 0) in calls
        assert "endwin" not in names(calls)
        assert terminal.size() == (80, 24)
    assert calls[-5:] == [
        ("keypad", False),
        ("noraw",),
        ("echo",),
        ("curs_set", 1),
        ("endwin",),
    ]


def test_too_small_window_raises_and_still_restores(fake_curses):
    fake_curses["screen"] = FakeScreen(fake_curses["calls"], cols=20, rows=10)
    terminal = CursesTerminal(min_size=(47, 23))
    with pytest.raises(TerminalTooSmallError) as excinfo:
        terminal.__enter__()
    assert excinfo.value.size == (20, 10)
    assert excinfo.value.needed == (47, 23)
    assert names(fake_curses["calls"]).count("endwin") == 1
    assert ("noraw",) in fake_curses["calls"]


def test_error_inside_session_propagates_after_restore(fake_curses):
    with pytest.raises(RuntimeError, match="boom"):
        with CursesTerminal() as terminal:
            raise RuntimeError("boom")
    assert names(fake_curses["calls"]).count("endwin") == 1
    with pytest.raises(TerminalError):
        terminal.size()


def test_put_allocates_one_color_pair_per_combination(fake_curses):
    screen = fake_curses["screen"]
    with CursesTerminal() as terminal:
        terminal.put(1, 2, "  ", bg="cyan")
        terminal.put(3, 2, "  ", bg="cyan")
        terminal.put(0, 0, "Score: 0", fg="white")
        terminal.put(5, 5, "  ", bg="dark_yellow")
        terminal.put(7, 2, "  ")
    pairs = [call[1:] for call in fake_curses["calls"] if call[0] == "init_pair"]
    assert pairs == [
        (1, -1, curses.COLOR_CYAN),
        (2, curses.COLOR_WHITE, -1),
        (3, -1, 208),
    ]
    assert screen.writes == [
        (2, 1, "  ", 256),
        (2, 3, "  ", 256),
        (0, 0, "Score: 0", 512),
        (5, 5, "  ", 768),
        (2, 7, "  ", curses.A_NORMAL),
    ]


def test_poll_key_uses_timeout_and_translates_codes(fake_curses):
    fake_curses["screen"].keys = [ord("q"), curses.KEY_LEFT]
    with CursesTerminal() as terminal:
        assert terminal.poll_key(16) == KeyEvent("q")
        assert terminal.poll_key(16) == KeyEvent("left")
        assert terminal.poll_key(16) is None
    assert ("timeout", 16) in fake_curses["calls"]
