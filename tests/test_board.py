import numpy as np

from termtris.board import Board, HEIGHT, WIDTH
from termtris.tetromino import Piece, PieceKind


def fill_row(board: Board, y: int, kind: PieceKind = PieceKind.I) -> None:
    for x in range(board.width):
        board.set(x, y, kind)


def test_get_and_set_ignore_out_of_range():
    board = Board()
    assert board.get(-1, 0) is None
    assert board.get(WIDTH, 0) is None
    assert board.get(0, HEIGHT) is None
    board.set(-1, 5, PieceKind.T)
    board.set(3, HEIGHT, PieceKind.T)
    assert not board.grid.any()
    board.set(3, 4, PieceKind.T)
    assert board.get(3, 4) is PieceKind.T
    board.set(3, 4, None)
    assert board.get(3, 4) is None


def test_collides_with_walls_floor_and_blocks():
    board = Board()
    piece = Piece(PieceKind.I, x=3, y=0)  # cells (3..6, 1)
    assert not board.collides(piece)
    assert board.collides(Piece(PieceKind.I, x=-1, y=0))
    assert board.collides(Piece(PieceKind.I, x=7, y=0))
    assert board.collides(Piece(PieceKind.I, x=3, y=HEIGHT - 1))
    assert board.collides(Piece(PieceKind.I, x=3, y=-2))
    board.set(4, 1, PieceKind.O)
    assert board.collides(piece)


def test_lock_piece_stores_kind():
    board = Board()
    piece = Piece(PieceKind.T, x=0, y=18)
    board.lock_piece(piece)
    for x, y in [(1, 18), (0, 19), (1, 19), (2, 19)]:
        assert board.get(x, y) is PieceKind.T
    assert int(np.count_nonzero(board.grid)) == 4


def test_clear_lines_compacts_rows_above_each_gap():
    board = Board()
    board.set(0, 0, PieceKind.S)
    board.set(1, 1, PieceKind.Z)
    fill_row(board, 2)
    board.set(3, 3, PieceKind.J)
    board.set(4, 4, PieceKind.L)
    fill_row(board, 5)
    board.set(6, 6, PieceKind.O)
    board.set(9, 19, PieceKind.T)

    assert board.clear_lines() == 2

    # Rows below the lowest full row stay put.
    assert board.get(9, 19) is PieceKind.T
    assert board.get(6, 6) is PieceKind.O
    # Rows between the full rows drop by one, rows above both drop by two.
    assert board.get(4, 5) is PieceKind.L
    assert board.get(3, 4) is PieceKind.J
    assert board.get(1, 3) is PieceKind.Z
    assert board.get(0, 2) is PieceKind.S
    assert not board.grid[0].any()
    assert not board.grid[1].any()
    assert int(np.count_nonzero(board.grid)) == 6


def test_clear_lines_counts_four_rows_and_nothing_when_partial():
    board = Board()
    for y in range(HEIGHT - 4, HEIGHT):
        fill_row(board, y)
    board.set(0, HEIGHT - 5, PieceKind.Z)
    assert board.clear_lines() == 4
    assert board.get(0, HEIGHT - 1) is PieceKind.Z
    assert board.clear_lines() == 0
