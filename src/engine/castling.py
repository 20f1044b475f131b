"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from typing import Iterable, Optional

from src.core.shared_types import PieceType
from src.engine.pieces import Piece
from src.engine.square import Square

# Castling moves the king by two files towards the rook
CASTLING_KING_STEP = 2


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_castling_move(old_king: Piece, king: Piece) -> bool:
    """A king moving two files is always a castling move."""
    return (
        king.type == PieceType.KING
        and abs(king.coord.file - old_king.coord.file) == CASTLING_KING_STEP
    )


def castling_destination(king: Piece, rook: Piece) -> Square:
    """Where the king lands when castling with the given rook."""
    step = -CASTLING_KING_STEP if rook.coord.file < king.coord.file else CASTLING_KING_STEP
    return king.coord.offset(step, 0)


def castling_rook(
    pieces: Iterable[Piece], old_king: Piece, destination: Square
) -> Optional[Piece]:
    """Find the unmoved rook of the king's color, on the destination rank, on the side the king is moving to."""
    direction = _sign(destination.file - old_king.coord.file)
    return next(
        (
            piece
            for piece in pieces
            if piece.type == PieceType.ROOK
            and piece.color == old_king.color
            and piece.coord.rank == destination.rank
            and piece.move_count == 0
            and _sign(piece.coord.file - old_king.coord.file) == direction
        ),
        None,
    )


def castling_rook_square(old_king: Piece, destination: Square) -> Square:
    """The rook jumps over the king: it lands on the square the king passed."""
    direction = _sign(destination.file - old_king.coord.file)
    return Square(old_king.coord.file + direction, destination.rank)


def squares_between_on_rank(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares in between the two squares specified that are on the same rank

    Needed for checking if you can still castle (the caller checks which of those are occupied)
    """
    if from_square.rank != to_square.rank:
        raise ValueError(
            f"squares_between_on_rank requires both squares to lie on the same rank. \n from: {from_square}\n to:{to_square}"
        )
    low, high = sorted((from_square.file, to_square.file))
    return [Square(file, from_square.rank) for file in range(low + 1, high)]
