"""A falling-block puzzle game played in the terminal."""

from .board import Board, HEIGHT, WIDTH
from .tetromino import KICK_OFFSETS, Piece, PieceKind, shape_blocks
from .game_state import Game, LockResult
from .utils import drop_distance, gravity_delay_ms, line_clear_points
from .controls import Action, KeyEvent, action_for
from .terminal import CursesTerminal, Terminal, TerminalError, TerminalTooSmallError
from .renderer import COLORS, FOOTER, MIN_SIZE, Renderer
from .loop import GameLoop
from .perf import PerfStat, PerformanceTracker

__all__ = [
    "Board",
    "WIDTH",
    "HEIGHT",
    "Piece",
    "PieceKind",
    "KICK_OFFSETS",
    "shape_blocks",
    "Game",
    "LockResult",
    "gravity_delay_ms",
    "line_clear_points",
    "drop_distance",
    "Action",
    "KeyEvent",
    "action_for",
    "Terminal",
    "CursesTerminal",
    "TerminalError",
    "TerminalTooSmallError",
    "COLORS",
    "FOOTER",
    "MIN_SIZE",
    "Renderer",
    "GameLoop",
    "PerfStat",
    "PerformanceTracker",
]
