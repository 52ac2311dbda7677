"""High level game state container."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from .board import Board
from .tetromino import Piece, PieceKind
from .utils import (
    HARD_DROP_POINTS,
    SOFT_DROP_POINTS,
    drop_distance,
    gravity_delay_ms,
    line_clear_points,
)


LOGGER = logging.getLogger(__name__)

LINES_PER_LEVEL = 10


@dataclass(frozen=True)
class LockResult:
    """What happened when the current piece was locked into the board."""

    cleared: int = 0
    points: int = 0
    level_up: bool = False
    game_over: bool = False


def random_kind(rng: random.Random) -> PieceKind:
    """Return a uniformly random piece kind."""

    return rng.choice(list(PieceKind))


@dataclass
class Game:
    """Mutable state for one game session.

    Kinds are drawn uniformly with replacement, so repeats are possible and
    there is no bag.  Once ``over`` is set no operation changes the state.
    """

    board: Board = field(default_factory=Board)
    current: Piece = field(default_factory=lambda: Piece.spawn(PieceKind.I))
    next_kind: PieceKind = PieceKind.I
    score: int = 0
    level: int = 1
    lines: int = 0
    over: bool = False
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @classmethod
    def new(cls, rng: Optional[random.Random] = None) -> "Game":
        """Start a game on an empty board with random current and next kinds."""

        rng = rng or random.Random()
        first = random_kind(rng)
        upcoming = random_kind(rng)
        LOGGER.info("Game started with %s, next %s", first.value, upcoming.value)
        return cls(current=Piece.spawn(first), next_kind=upcoming, rng=rng)

    @property
    def gravity_delay_ms(self) -> int:
        return gravity_delay_ms(self.level)

    def spawn_next(self) -> Piece:
        """Promote ``next_kind`` to the current piece and draw a new one.

        A spawn that collides with the board ends the game.
        """

        self.current = Piece.spawn(self.next_kind)
        self.next_kind = random_kind(self.rng)
        if self.board.collides(self.current):
            self.over = True
            LOGGER.info(
                "Game over. Score: %d, level: %d, lines: %d",
                self.score,
                self.level,
                self.lines,
            )
        return self.current

    def move(self, dx: int) -> bool:
        if self.over:
            return False
        return self.current.try_move(self.board, dx, 0)

    def rotate(self, clockwise: bool = True) -> bool:
        if self.over:
            return False
        return self.current.try_rotate(self.board, clockwise)

    def soft_drop(self) -> bool:
        """Move the piece down one row, scoring a point on success."""

        if self.over:
            return False
        moved = self.current.try_move(self.board, 0, 1)
        if moved:
            self.score += SOFT_DROP_POINTS
        return moved

    def hard_drop(self) -> int:
        """Drop the piece to its lowest legal row and return the rows fallen.

        The piece is not locked here; it locks on the next gravity tick.
        """

        if self.over:
            return 0
        rows = drop_distance(self.board, self.current)
        self.current.y += rows
        self.score += HARD_DROP_POINTS * rows
        return rows

    def gravity_step(self) -> Optional[LockResult]:
        """Apply one gravity tick.

        Returns ``None`` if the piece fell a row, otherwise the outcome of
        locking it.
        """

        if self.over:
            return None
        if self.current.try_move(self.board, 0, 1):
            return None
        return self.lock_current()

    def lock_current(self) -> LockResult:
        """Lock the current piece, clear rows, score them and spawn the next piece."""

        if self.over:
            return LockResult(game_over=True)
        self.board.lock_piece(self.current)
        cleared = self.board.clear_lines()
        points = 0
        level_up = False
        if cleared:
            self.lines += cleared
            points = line_clear_points(cleared, self.level)
            self.score += points
            LOGGER.info("Cleared %d row(s). Score: %d", cleared, self.score)
            # Only one level per lock, even if several thresholds were passed.
            if self.lines // LINES_PER_LEVEL >= self.level:
                self.level += 1
                level_up = True
                LOGGER.info("Level %d", self.level)
        self.spawn_next()
        return LockResult(
            cleared=cleared, points=points, level_up=level_up, game_over=self.over
        )
