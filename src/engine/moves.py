"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the candidate destination squares for each piece type.

A candidate is always on the board and never occupied by a piece of the mover's own color.
Filtering (attacks only / not leaving your own king in check) is done later by game.py
"""

from typing import Callable

from src.core.shared_types import PieceType
from src.engine.board import GameState, get_en_passant_piece
from src.engine.pieces import Piece
from src.engine.square import Square

Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(1, 0), (0, 1), (-1, 0), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (-1, -1), (1, -1)]
ALL_DIRECTIONS: list[Vector] = STRAIGHTS + DIAGONALS
KNIGHT_DELTAS: list[Vector] = [
    (1, 2),
    (-1, 2),
    (1, -2),
    (-1, -2),
    (2, 1),
    (-2, 1),
    (2, -1),
    (-2, -1),
]


def is_available(game: GameState, piece: Piece, square: Square) -> bool:
    """On the board and not blocked by a friendly piece."""
    if not square.is_within_bounds():
        return False
    occupant = game.piece_at(square)
    return occupant is None or occupant.color != piece.color


# --- MOVEMENT RULES ---
def raycasting_move(
    game: GameState, piece: Piece, directions: list[Vector]
) -> list[Square]:
    """
    Raycasting algorithm
    -----

    ---
    We move along each direction until we hit another piece or the edge of the board.
    The first occupied square is included if it holds an opponent's piece (it can be captured), and the ray stops there.
    """
    squares: list[Square] = []
    for df, dr in directions:
        target_square = piece.coord.offset(df, dr)
        while is_available(game, piece, target_square):
            squares.append(target_square)
            if game.piece_at(target_square) is not None:
                break
            target_square = target_square.offset(df, dr)
    return squares


def single_step_move(
    game: GameState, piece: Piece, deltas: list[Vector]
) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump by a fixed offset"""
    return [
        target_square
        for df, dr in deltas
        if is_available(game, piece, target_square := piece.coord.offset(df, dr))
    ]


def candidate_pawn_moves(game: GameState, piece: Piece) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward, if that square is empty.
    - It can move by two in its first move, if both squares are empty
    - takes diagonally (including en passant)
    """
    squares: list[Square] = []
    direction = piece.direction

    for df in (-1, 1):
        target_square = piece.coord.offset(df, direction)
        occupant = game.piece_at(target_square)
        if occupant is not None:
            if occupant.color != piece.color:
                squares.append(target_square)
        elif get_en_passant_piece(game, piece, target_square) is not None:
            squares.append(target_square)

    push = piece.coord.offset(0, direction)
    if push.is_within_bounds() and game.piece_at(push) is None:
        squares.append(push)

        double_push = piece.coord.offset(0, 2 * direction)
        if (
            piece.move_count == 0
            and double_push.is_within_bounds()
            and game.piece_at(double_push) is None
        ):
            squares.append(double_push)

    return [square for square in squares if square.is_within_bounds()]


def candidate_knight_moves(game: GameState, piece: Piece) -> list[Square]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(game, piece, KNIGHT_DELTAS)


def candidate_bishop_moves(game: GameState, piece: Piece) -> list[Square]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(game, piece, DIAGONALS)


def candidate_rook_moves(game: GameState, piece: Piece) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(game, piece, STRAIGHTS)


def candidate_queen_moves(game: GameState, piece: Piece) -> list[Square]:
    """The Queen combines the rook moves and the bishop moves"""
    return raycasting_move(game, piece, ALL_DIRECTIONS)


def candidate_king_moves(game: GameState, piece: Piece) -> list[Square]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled separately, it needs check detection).
    """
    return single_step_move(game, piece, ALL_DIRECTIONS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[GameState, Piece], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}
