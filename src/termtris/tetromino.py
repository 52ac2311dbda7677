"""Tetromino definitions and movement.

Each piece kind has four hand-authored rotation states laid out on a 4x4 box.
The offsets are lookup data rather than derived by rotating a base shape, so
every kind keeps its own rotation axis (the O piece does not move at all).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Dict, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board

Offset = Tuple[int, int]  # (dx, dy)
RotationState = Tuple[Offset, Offset, Offset, Offset]

# Fixed spawn anchor for every new piece.
SPAWN_X = 3
SPAWN_Y = 0

# Horizontal corrections tried, in order, when a rotation collides.
KICK_OFFSETS = (0, -1, 1, -2, 2)


class PieceKind(str, Enum):
    """The seven standard piece shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


_O_STATE: RotationState = ((1, 0), (2, 0), (1, 1), (2, 1))

SHAPES: Dict[PieceKind, Tuple[RotationState, ...]] = {
    PieceKind.I: (
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((2, 0), (2, 1), (2, 2), (2, 3)),
        ((0, 2), (1, 2), (2, 2), (3, 2)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
    PieceKind.O: (_O_STATE, _O_STATE, _O_STATE, _O_STATE),
    PieceKind.T: (
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (1, 2)),
    ),
    PieceKind.S: (
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
        ((1, 1), (2, 1), (0, 2), (1, 2)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
    ),
    PieceKind.Z: (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (1, 2), (2, 2)),
        ((1, 0), (0, 1), (1, 1), (0, 2)),
    ),
    PieceKind.J: (
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (2, 2)),
        ((1, 0), (1, 1), (0, 2), (1, 2)),
    ),
    PieceKind.L: (
        ((2, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 2)),
        ((0, 1), (1, 1), (2, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
    ),
}


def shape_blocks(kind: PieceKind, rotation: int) -> RotationState:
    """Return the block offsets for ``kind`` at ``rotation``.

    Parameters
    ----------
    kind:
        The :class:`PieceKind` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    states = SHAPES[kind]
    return states[rotation % len(states)]


@dataclass
class Piece:
    """The falling piece: a kind, a rotation state and a board anchor."""

    kind: PieceKind
    rotation: int = 0
    x: int = SPAWN_X
    y: int = SPAWN_Y

    @classmethod
    def spawn(cls, kind: PieceKind) -> "Piece":
        return cls(kind, rotation=0, x=SPAWN_X, y=SPAWN_Y)

    def blocks(self) -> RotationState:
        """Return the relative offsets of the current rotation state."""

        return shape_blocks(self.kind, self.rotation)

    def cells(self) -> list[tuple[int, int]]:
        """Return the absolute ``(x, y)`` board cells covered by the piece."""

        return [(self.x + dx, self.y + dy) for dx, dy in self.blocks()]

    def copy(self) -> "Piece":
        return replace(self)

    def try_move(self, board: "Board", dx: int, dy: int) -> bool:
        """Move by ``(dx, dy)`` if the target placement is free.

        On collision the piece is left untouched and ``False`` is returned.
        """

        candidate = replace(self, x=self.x + dx, y=self.y + dy)
        if board.collides(candidate):
            return False
        self.x, self.y = candidate.x, candidate.y
        return True

    def try_rotate(self, board: "Board", clockwise: bool = True) -> bool:
        """Rotate a quarter turn, shifting sideways if needed.

        The kicks in :data:`KICK_OFFSETS` are tried in order and the first
        placement that does not collide is committed.  Only horizontal shifts
        are attempted.
        """

        rotation = (self.rotation + (1 if clockwise else 3)) % 4
        for kick in KICK_OFFSETS:
            candidate = replace(self, rotation=rotation, x=self.x + kick)
            if not board.collides(candidate):
                self.rotation, self.x = candidate.rotation, candidate.x
                return True
        return False
