"""Board representation for the playfield."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import Piece, PieceKind


# Dimensions of the well.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

# Mapping from ``PieceKind`` to the integer stored in the grid.  ``0`` is an
# empty cell; the other values only matter for picking a colour.
PIECE_VALUES = {kind: i + 1 for i, kind in enumerate(PieceKind)}
VALUE_KINDS = {value: kind for kind, value in PIECE_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty grid, indexed ``[y, x]``."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """The well holding every locked cell.

    Coordinates are ``(x, y)`` with ``y`` growing downwards.  Anything outside
    the grid counts as solid, so callers never need to bounds-check before
    asking about a cell.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    @staticmethod
    def inside(x: int, y: int) -> bool:
        return 0 <= x < WIDTH and 0 <= y < HEIGHT

    def get(self, x: int, y: int) -> Optional[PieceKind]:
        """Return the kind stored at ``(x, y)``, or ``None`` if empty or off-board."""

        if not self.inside(x, y):
            return None
        value = int(self.grid[y, x])
        return VALUE_KINDS.get(value)

    def set(self, x: int, y: int, value: Optional[PieceKind]) -> None:
        """Overwrite the cell at ``(x, y)``; off-board writes are ignored."""

        if self.inside(x, y):
            self.grid[y, x] = 0 if value is None else PIECE_VALUES[value]

    def is_empty(self, x: int, y: int) -> bool:
        """Return ``True`` if ``(x, y)`` is on the board and unoccupied."""

        return self.inside(x, y) and bool(self.grid[y, x] == 0)

    def collides(self, piece: Piece) -> bool:
        """Return ``True`` if any cell of ``piece`` is off-board or occupied."""

        return any(not self.is_empty(x, y) for x, y in piece.cells())

    def lock_piece(self, piece: Piece) -> None:
        """Write the piece's cells into the grid permanently."""

        for x, y in piece.cells():
            self.set(x, y, piece.kind)

    def clear_lines(self) -> int:
        """Remove full rows and return how many were cleared.

        Surviving rows keep their order and settle at the bottom; the rows
        freed at the top come back empty.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared
