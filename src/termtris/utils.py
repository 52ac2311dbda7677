"""Rule helpers shared by the game and the loop."""

from __future__ import annotations

from .board import Board
from .tetromino import Piece


BASE_GRAVITY_MS = 800
GRAVITY_STEP_MS = 45
# Levels past ``1 + MAX_SPEEDUPS`` no longer speed the game up.
MAX_SPEEDUPS = 15

# Base points per simultaneous clear; anything larger scores the fallback.
LINE_CLEAR_POINTS = {1: 100, 2: 300, 3: 500, 4: 800}
LINE_CLEAR_FALLBACK = 1000

SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2


def gravity_delay_ms(level: int) -> int:
    """Return the gravity interval in milliseconds for ``level``.

    The delay falls linearly from 800ms at level 1 to 125ms at level 16 and
    stays there.
    """

    steps = min(max(level - 1, 0), MAX_SPEEDUPS)
    return max(0, BASE_GRAVITY_MS - GRAVITY_STEP_MS * steps)


def line_clear_points(cleared: int, level: int) -> int:
    """Return the score for clearing ``cleared`` rows at once on ``level``."""

    if cleared <= 0:
        return 0
    return LINE_CLEAR_POINTS.get(cleared, LINE_CLEAR_FALLBACK) * level


def drop_distance(board: Board, piece: Piece) -> int:
    """Return how many rows ``piece`` can fall before it would collide."""

    probe = piece.copy()
    rows = 0
    while probe.try_move(board, 0, 1):
        rows += 1
    return rows
