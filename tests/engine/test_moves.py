"""Unit tests for /src/engine/moves.py (candidate squares, before legality filtering)"""

import pytest

from src.core.shared_types import Color, PieceType
from src.engine.board import GameState, update_piece
from src.engine.moves import (
    MOVEMENT_RULES,
    candidate_bishop_moves,
    candidate_king_moves,
    candidate_knight_moves,
    candidate_pawn_moves,
    candidate_queen_moves,
    candidate_rook_moves,
)
from src.engine.pieces import Piece
from src.engine.square import Square


def alone(piece: Piece) -> GameState:
    return GameState(pieces=(piece,))


def test_every_piece_type_has_a_rule() -> None:
    assert set(MOVEMENT_RULES.keys()) == set(PieceType)


# -- SLIDING PIECES --
def test_rook_on_empty_board() -> None:
    rook = Piece(0, PieceType.ROOK, Color.WHITE, Square(0, 0))
    squares = candidate_rook_moves(alone(rook), rook)
    assert len(squares) == 14
    assert Square(0, 7) in squares
    assert Square(7, 0) in squares


def test_rook_stops_at_pieces() -> None:
    """The ray includes an opponent's piece (capture) but not a friendly one, and stops at both."""
    rook = Piece(0, PieceType.ROOK, Color.WHITE, Square(0, 0))
    friend = Piece(1, PieceType.KNIGHT, Color.WHITE, Square(2, 0))
    enemy = Piece(48, PieceType.PAWN, Color.BLACK, Square(0, 3))
    game = GameState(pieces=(rook, friend, enemy))

    squares = candidate_rook_moves(game, rook)

    assert set(squares) == {Square(1, 0), Square(0, 1), Square(0, 2), Square(0, 3)}


def test_bishop_diagonals() -> None:
    bishop = Piece(2, PieceType.BISHOP, Color.WHITE, Square(3, 3))
    squares = candidate_bishop_moves(alone(bishop), bishop)
    assert len(squares) == 13
    assert all(
        abs(square.file - 3) == abs(square.rank - 3) for square in squares
    )


def test_queen_combines_rook_and_bishop() -> None:
    queen = Piece(4, PieceType.QUEEN, Color.WHITE, Square(3, 3))
    game = alone(queen)
    squares = candidate_queen_moves(game, queen)
    assert set(squares) == set(candidate_rook_moves(game, queen)) | set(
        candidate_bishop_moves(game, queen)
    )
    assert len(squares) == 27


# -- SINGLE STEP PIECES --
def test_knight_in_the_corner() -> None:
    knight = Piece(1, PieceType.KNIGHT, Color.WHITE, Square(0, 0))
    assert set(candidate_knight_moves(alone(knight), knight)) == {
        Square(1, 2),
        Square(2, 1),
    }


def test_knight_in_the_center() -> None:
    knight = Piece(1, PieceType.KNIGHT, Color.WHITE, Square(4, 4))
    assert len(candidate_knight_moves(alone(knight), knight)) == 8


def test_king_steps() -> None:
    king = Piece(3, PieceType.KING, Color.WHITE, Square(3, 0))
    friend = Piece(11, PieceType.PAWN, Color.WHITE, Square(3, 1))
    squares = candidate_king_moves(GameState(pieces=(king, friend)), king)
    assert set(squares) == {
        Square(2, 0),
        Square(4, 0),
        Square(2, 1),
        Square(4, 1),
    }


# -- PAWNS --
@pytest.mark.parametrize(
    "color, start, expected",
    [
        (Color.WHITE, Square(4, 1), {Square(4, 2), Square(4, 3)}),
        (Color.BLACK, Square(4, 6), {Square(4, 5), Square(4, 4)}),
    ],
)
def test_pawn_first_move(color: Color, start: Square, expected: set[Square]) -> None:
    pawn = Piece(12, PieceType.PAWN, color, start)
    assert set(candidate_pawn_moves(alone(pawn), pawn)) == expected


def test_pawn_single_step_after_moving() -> None:
    pawn = Piece(12, PieceType.PAWN, Color.WHITE, Square(4, 2), move_count=1)
    assert candidate_pawn_moves(alone(pawn), pawn) == [Square(4, 3)]


def test_pawn_blocked() -> None:
    """Cannot push onto a piece, not even an opponent's, and cannot jump over it"""
    pawn = Piece(12, PieceType.PAWN, Color.WHITE, Square(4, 1))
    blocker = Piece(52, PieceType.PAWN, Color.BLACK, Square(4, 2))
    assert candidate_pawn_moves(GameState(pieces=(pawn, blocker)), pawn) == []


def test_pawn_double_step_blocked() -> None:
    pawn = Piece(12, PieceType.PAWN, Color.WHITE, Square(4, 1))
    blocker = Piece(52, PieceType.PAWN, Color.BLACK, Square(4, 3))
    assert candidate_pawn_moves(GameState(pieces=(pawn, blocker)), pawn) == [
        Square(4, 2)
    ]


def test_pawn_captures_diagonally() -> None:
    pawn = Piece(12, PieceType.PAWN, Color.WHITE, Square(4, 1))
    enemy = Piece(51, PieceType.KNIGHT, Color.BLACK, Square(3, 2))
    friend = Piece(13, PieceType.KNIGHT, Color.WHITE, Square(5, 2))
    squares = candidate_pawn_moves(GameState(pieces=(pawn, enemy, friend)), pawn)
    assert Square(3, 2) in squares
    assert Square(5, 2) not in squares


def test_pawn_on_edge_file() -> None:
    pawn = Piece(8, PieceType.PAWN, Color.WHITE, Square(0, 5), move_count=4)
    enemy = Piece(49, PieceType.PAWN, Color.BLACK, Square(1, 6))
    squares = candidate_pawn_moves(GameState(pieces=(pawn, enemy)), pawn)
    assert set(squares) == {Square(0, 6), Square(1, 6)}


def test_pawn_en_passant_candidate() -> None:
    white_pawn = Piece(12, PieceType.PAWN, Color.WHITE, Square(4, 1))
    black_pawn = Piece(53, PieceType.PAWN, Color.BLACK, Square(5, 3), move_count=3)
    game = update_piece(
        GameState(pieces=(white_pawn, black_pawn), move_count=6),
        white_pawn.moved_to(Square(4, 3)),
    )
    squares = candidate_pawn_moves(game, game.piece_by_id(53))
    assert set(squares) == {Square(5, 2), Square(4, 2)}
