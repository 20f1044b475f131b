"""unit tests for src/engine/castling.py"""

import pytest

from src.core.shared_types import Color, PieceType
from src.engine.castling import (
    castling_destination,
    castling_rook,
    castling_rook_square,
    is_castling_move,
    squares_between_on_rank,
)
from src.engine.pieces import Piece
from src.engine.square import Square

KING = Piece(3, PieceType.KING, Color.WHITE, Square(3, 0))
LEFT_ROOK = Piece(0, PieceType.ROOK, Color.WHITE, Square(0, 0))
RIGHT_ROOK = Piece(7, PieceType.ROOK, Color.WHITE, Square(7, 0))


def test_two_file_king_move_is_castling() -> None:
    assert is_castling_move(KING, KING.moved_to(Square(5, 0)))
    assert is_castling_move(KING, KING.moved_to(Square(1, 0)))
    assert not is_castling_move(KING, KING.moved_to(Square(4, 0)))


def test_rook_two_file_move_is_not_castling() -> None:
    assert not is_castling_move(LEFT_ROOK, LEFT_ROOK.moved_to(Square(2, 0)))


def test_castling_destination() -> None:
    assert castling_destination(KING, LEFT_ROOK) == Square(1, 0)
    assert castling_destination(KING, RIGHT_ROOK) == Square(5, 0)


def test_castling_rook_picks_side() -> None:
    pieces = [KING, LEFT_ROOK, RIGHT_ROOK]
    assert castling_rook(pieces, KING, Square(5, 0)) == RIGHT_ROOK
    assert castling_rook(pieces, KING, Square(1, 0)) == LEFT_ROOK


def test_castling_rook_ignores_moved_rook() -> None:
    moved_rook = Piece(7, PieceType.ROOK, Color.WHITE, Square(7, 0), move_count=2)
    assert castling_rook([KING, moved_rook], KING, Square(5, 0)) is None


def test_rook_lands_next_to_king_start() -> None:
    assert castling_rook_square(KING, Square(5, 0)) == Square(4, 0)
    assert castling_rook_square(KING, Square(1, 0)) == Square(2, 0)


def test_squares_between_on_rank() -> None:
    assert squares_between_on_rank(Square(3, 0), Square(7, 0)) == [
        Square(4, 0),
        Square(5, 0),
        Square(6, 0),
    ]
    assert squares_between_on_rank(Square(3, 7), Square(0, 7)) == [
        Square(1, 7),
        Square(2, 7),
    ]


def test_squares_between_requires_same_rank() -> None:
    with pytest.raises(ValueError):
        squares_between_on_rank(Square(3, 0), Square(3, 7))
