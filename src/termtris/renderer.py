"""Incremental terminal renderer.

The whole board is only repainted after a lock.  Every other frame erases the
cells the piece occupied last time and paints the cells it occupies now, which
keeps the per-frame output down to a few short writes.
"""

from __future__ import annotations

from typing import Dict, Optional

from .board import Board, HEIGHT, WIDTH
from .controls import HELP_LINES
from .game_state import Game
from .tetromino import Piece, PieceKind, shape_blocks
from .terminal import Terminal


# Colours for each piece kind
COLORS: Dict[PieceKind, str] = {
    PieceKind.I: "cyan",
    PieceKind.O: "yellow",
    PieceKind.T: "magenta",
    PieceKind.S: "green",
    PieceKind.Z: "red",
    PieceKind.J: "blue",
    PieceKind.L: "dark_yellow",
}
TEXT_COLOR = "white"

# Each board cell is two characters wide so blocks look square.
CELL = "  "
CELL_WIDTH = len(CELL)

# Screen position of board cell (0, 0), just inside the border.
BOARD_LEFT = 1
BOARD_TOP = 1
RIGHT_BORDER = BOARD_LEFT + WIDTH * CELL_WIDTH

HUD_LEFT = RIGHT_BORDER + 3
SCORE_ROW = 2
LEVEL_ROW = 3
LINES_ROW = 4
NEXT_LABEL_ROW = 6
NEXT_TOP = 7
HELP_TOP = 13
FOOTER_ROW = BOARD_TOP + HEIGHT + 1

TITLE = "TERM TETRIS"
FOOTER = "Game Over. Thanks for playing."

# Smallest terminal (columns, rows) the layout fits in.
MIN_SIZE = (HUD_LEFT + max(len(line) for line in HELP_LINES) + 1, FOOTER_ROW + 1)


def screen_cell(x: int, y: int) -> tuple[int, int]:
    """Return the ``(col, row)`` screen position of board cell ``(x, y)``."""

    return BOARD_LEFT + x * CELL_WIDTH, BOARD_TOP + y


class Renderer:
    """Draws a :class:`Game` onto a :class:`Terminal`."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._last_drawn: Optional[Piece] = None
        self._board_dirty = False

    @property
    def last_drawn(self) -> Optional[Piece]:
        return self._last_drawn

    def invalidate(self) -> None:
        """Request a full board repaint on the next frame.

        Called after a lock: the cells of the previous piece now belong to the
        board and must not be erased.
        """

        self._board_dirty = True
        self._last_drawn = None

    def draw_frame(self, game: Game) -> None:
        """Paint everything from scratch."""

        self.terminal.clear()
        self.draw_static()
        self.draw_board(game.board)
        self.draw_next(game.next_kind)
        self.draw_piece(game.current)
        self.draw_hud(game)
        self._last_drawn = game.current.copy()
        self._board_dirty = False
        self.terminal.flush()

    def render(self, game: Game) -> None:
        """Paint the changes since the previous frame."""

        if self._board_dirty:
            self.draw_board(game.board)
            self.draw_next(game.next_kind)
            self._board_dirty = False
        if self._last_drawn is not None:
            self.erase_piece(self._last_drawn)
        self.draw_piece(game.current)
        self.draw_hud(game)
        self._last_drawn = game.current.copy()
        self.terminal.flush()

    def draw_static(self) -> None:
        """Draw the well border, the title and the key help."""

        put = self.terminal.put
        put(0, 0, "┌" + "─" * (WIDTH * CELL_WIDTH) + "┐", fg=TEXT_COLOR)
        put(HUD_LEFT, 0, TITLE, fg=TEXT_COLOR)
        for y in range(HEIGHT):
            put(0, BOARD_TOP + y, "│", fg=TEXT_COLOR)
            put(RIGHT_BORDER, BOARD_TOP + y, "│", fg=TEXT_COLOR)
        put(0, BOARD_TOP + HEIGHT, "└" + "─" * (WIDTH * CELL_WIDTH) + "┘", fg=TEXT_COLOR)
        put(HUD_LEFT, NEXT_LABEL_ROW, "Next:", fg=TEXT_COLOR)
        for i, line in enumerate(HELP_LINES):
            put(HUD_LEFT, HELP_TOP + i, line)

    def draw_board(self, board: Board) -> None:
        for y in range(board.height):
            for x in range(board.width):
                kind = board.get(x, y)
                col, row = screen_cell(x, y)
                if kind is None:
                    self.terminal.put(col, row, CELL)
                else:
                    self.terminal.put(col, row, CELL, bg=COLORS[kind])

    def draw_piece(self, piece: Piece) -> None:
        color = COLORS[piece.kind]
        for x, y in piece.cells():
            if Board.inside(x, y):
                col, row = screen_cell(x, y)
                self.terminal.put(col, row, CELL, bg=color)

    def erase_piece(self, piece: Piece) -> None:
        for x, y in piece.cells():
            if Board.inside(x, y):
                col, row = screen_cell(x, y)
                self.terminal.put(col, row, CELL)

    def draw_next(self, kind: PieceKind) -> None:
        """Draw the preview of the upcoming piece in its spawn orientation."""

        for dy in range(4):
            self.terminal.put(HUD_LEFT, NEXT_TOP + dy, CELL * 4)
        for dx, dy in shape_blocks(kind, 0):
            self.terminal.put(
                HUD_LEFT + dx * CELL_WIDTH, NEXT_TOP + dy, CELL, bg=COLORS[kind]
            )

    def draw_hud(self, game: Game) -> None:
        put = self.terminal.put
        put(HUD_LEFT, SCORE_ROW, f"Score: {game.score}", fg=TEXT_COLOR)
        put(HUD_LEFT, LEVEL_ROW, f"Level: {game.level}", fg=TEXT_COLOR)
        put(HUD_LEFT, LINES_ROW, f"Lines: {game.lines}", fg=TEXT_COLOR)

    def draw_footer(self, message: str = FOOTER) -> None:
        self.terminal.put(0, FOOTER_ROW, message, fg=TEXT_COLOR)
        self.terminal.flush()
