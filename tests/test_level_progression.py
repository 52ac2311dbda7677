from termtris.board import Board, HEIGHT
from termtris.game_state import Game
from termtris.tetromino import Piece, PieceKind


def lock_clearing(game: Game, rows: int):
    """Lock a vertical I that completes the bottom ``rows`` rows."""

    game.board = Board()
    for y in range(HEIGHT - rows, HEIGHT):
        for x in range(9):
            game.board.set(x, y, PieceKind.O)
    game.current = Piece(PieceKind.I, rotation=1, x=7, y=HEIGHT - 4)
    return game.lock_current()


def test_level_advances_at_ten_lines():
    game = Game(next_kind=PieceKind.O)
    game.lines = 9
    result = lock_clearing(game, 1)
    assert result.level_up
    assert (game.lines, game.level) == (10, 2)


def test_level_holds_until_twenty_lines():
    game = Game(next_kind=PieceKind.O)
    game.lines, game.level = 10, 2
    assert not lock_clearing(game, 1).level_up
    assert game.level == 2
    game.lines = 19
    assert lock_clearing(game, 1).level_up
    assert game.level == 3


def test_only_one_level_per_lock():
    game = Game(next_kind=PieceKind.O)
    game.lines = 17
    lock_clearing(game, 4)
    assert game.lines == 21
    assert game.level == 2


def test_lock_without_clear_never_levels():
    game = Game(current=Piece(PieceKind.O, x=3, y=HEIGHT - 2), next_kind=PieceKind.O)
    game.lines = 30
    result = game.lock_current()
    assert result.cleared == 0
    assert game.level == 1
