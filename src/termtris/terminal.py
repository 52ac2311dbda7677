"""Terminal surface used by the renderer and the game loop.

The game only needs a handful of operations from the terminal: write coloured
text at a cell, flush, and poll for a key with a timeout.  :class:`Terminal`
describes that surface; :class:`CursesTerminal` provides it on top of
:mod:`curses`.
"""

from __future__ import annotations

import curses
import locale
import logging
import os
from typing import Dict, Optional, Protocol, Tuple

from .controls import KeyEvent


LOGGER = logging.getLogger(__name__)

# Curses colour numbers for the colour names used by the renderer.
CURSES_COLORS = {
    "black": curses.COLOR_BLACK,
    "white": curses.COLOR_WHITE,
    "cyan": curses.COLOR_CYAN,
    "yellow": curses.COLOR_YELLOW,
    "magenta": curses.COLOR_MAGENTA,
    "green": curses.COLOR_GREEN,
    "red": curses.COLOR_RED,
    "blue": curses.COLOR_BLUE,
}
# Xterm-256 orange, used for "dark_yellow" when the terminal has the palette.
ORANGE_256 = 208

NAMED_KEYS = {
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    27: "esc",
}


class TerminalError(RuntimeError):
    """Raised when the terminal cannot host the game."""


class TerminalTooSmallError(TerminalError):
    def __init__(self, size: Tuple[int, int], needed: Tuple[int, int]) -> None:
        super().__init__(
            f"Terminal is {size[0]}x{size[1]} but the game needs at least "
            f"{needed[0]}x{needed[1]}"
        )
        self.size = size
        self.needed = needed


class Terminal(Protocol):
    """Output sink and key source the game is drawn on."""

    def size(self) -> Tuple[int, int]:
        """Return ``(columns, rows)``."""

    def clear(self) -> None: ...

    def put(
        self,
        col: int,
        row: int,
        text: str,
        fg: Optional[str] = None,
        bg: Optional[str] = None,
    ) -> None: ...

    def flush(self) -> None: ...

    def poll_key(self, timeout_ms: int) -> Optional[KeyEvent]:
        """Wait up to ``timeout_ms`` for a key press."""


def key_event_from_code(code: int) -> Optional[KeyEvent]:
    """Translate a ``getch`` code into a :class:`KeyEvent`."""

    if code < 0:
        return None
    if code in NAMED_KEYS:
        return KeyEvent(NAMED_KEYS[code])
    if 1 <= code <= 26:
        # Control characters in raw mode: Ctrl+A is 1 ... Ctrl+Z is 26.
        return KeyEvent(chr(code + ord("a") - 1), ctrl=True)
    if 32 <= code < 127:
        return KeyEvent(chr(code))
    return None


class CursesTerminal:
    """:class:`Terminal` backed by :mod:`curses`.

    Use as a context manager: entering switches to the alternate screen in raw
    mode with the cursor hidden, leaving always puts the terminal back.
    """

    def __init__(self, min_size: Optional[Tuple[int, int]] = None) -> None:
        self.min_size = min_size
        self._screen: Optional["curses.window"] = None
        self._pairs: Dict[Tuple[Optional[str], Optional[str]], int] = {}

    def __enter__(self) -> "CursesTerminal":
        # Escape would otherwise wait a full second for a possible sequence.
        os.environ.setdefault("ESCDELAY", "25")
        locale.setlocale(locale.LC_ALL, "")
        self._screen = curses.initscr()
        try:
            curses.noecho()
            curses.raw()
            self._screen.keypad(True)
            curses.curs_set(0)
            if curses.has_colors():
                curses.start_color()
                curses.use_default_colors()
            if self.min_size is not None:
                size = self.size()
                if size[0] < self.min_size[0] or size[1] < self.min_size[1]:
                    raise TerminalTooSmallError(size, self.min_size)
        except BaseException:
            self._restore()
            raise
        LOGGER.debug("Terminal ready, size %s", self.size())
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._restore()
        return None

    def _restore(self) -> None:
        screen, self._screen = self._screen, None
        if screen is None:
            return
        try:
            screen.keypad(False)
            curses.noraw()
            curses.echo()
            curses.curs_set(1)
        finally:
            curses.endwin()
        self._pairs.clear()

    @property
    def screen(self) -> "curses.window":
        if self._screen is None:
            raise TerminalError("Terminal is not active")
        return self._screen

    def size(self) -> Tuple[int, int]:
        rows, cols = self.screen.getmaxyx()
        return cols, rows

    def clear(self) -> None:
        self.screen.erase()

    def _color_number(self, name: Optional[str]) -> int:
        if name is None:
            return -1
        if name == "dark_yellow":
            return ORANGE_256 if curses.COLORS >= 256 else curses.COLOR_YELLOW
        return CURSES_COLORS[name]

    def _attr(self, fg: Optional[str], bg: Optional[str]) -> int:
        if (fg is None and bg is None) or not curses.has_colors():
            return curses.A_NORMAL
        key = (fg, bg)
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            curses.init_pair(pair, self._color_number(fg), self._color_number(bg))
            self._pairs[key] = pair
        return curses.color_pair(pair)

    def put(
        self,
        col: int,
        row: int,
        text: str,
        fg: Optional[str] = None,
        bg: Optional[str] = None,
    ) -> None:
        self.screen.addstr(row, col, text, self._attr(fg, bg))

    def flush(self) -> None:
        self.screen.refresh()

    def poll_key(self, timeout_ms: int) -> Optional[KeyEvent]:
        self.screen.timeout(timeout_ms)
        return key_event_from_code(self.screen.getch())
