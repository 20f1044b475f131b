"""
Legality of moves: check, checkmate, stalemate, castling and promotion.

NOTE on recursion: get_valid_moves() simulates every candidate with update_piece() + is_in_check(),
and is_in_check() calls get_valid_moves(..., attacks_only=True) for every opponent piece.
The attacks-only branch never filters for self-check and never adds castling moves, so the recursion is one level deep.
"""

from typing import Optional

from src.core.shared_types import Color, PieceType, Status
from src.engine.board import GameState, get_en_passant_piece, update_piece
from src.engine.castling import castling_destination, squares_between_on_rank
from src.engine.moves import MOVEMENT_RULES, is_available
from src.engine.pieces import Piece
from src.engine.square import Square


def get_valid_moves(
    game: GameState, piece: Piece, attacks_only: bool = False
) -> list[Square]:
    """
    The squares the given piece can move to.
    ----

    attacks_only=True: only the squares holding an opponent's piece that this piece could take.
    Used for check detection; skips castling and the self-check filter.

    Otherwise: every candidate, minus the ones that leave your own king in check.
    """
    candidates = MOVEMENT_RULES[piece.type](game, piece)

    if attacks_only:
        return [square for square in candidates if _holds_opponent(game, piece, square)]

    if piece.type == PieceType.KING:
        candidates.extend(_castling_candidates(game, piece))

    return [
        square
        for square in candidates
        if not is_in_check(update_piece(game, piece.moved_to(square)), piece.color)
    ]


def can_attack(game: GameState, piece: Piece, square: Square) -> bool:
    """True if the given piece could take on the given square (en passant included)."""
    victim = game.piece_at(square)
    return (victim is not None and victim.color != piece.color) or (
        get_en_passant_piece(game, piece, square) is not None
    )


def get_vulnerabilities(game: GameState, piece: Piece) -> list[Piece]:
    """The opponent's pieces that attack the given piece."""
    return [
        attacker
        for attacker in game.pieces_of(piece.color.opponent)
        if piece.coord in get_valid_moves(game, attacker, attacks_only=True)
    ]


def is_vulnerable(game: GameState, piece: Piece) -> bool:
    return len(get_vulnerabilities(game, piece)) > 0


def is_in_check(game: GameState, color: Color) -> bool:
    """Raises GameStateError when there is not exactly one king of this color."""
    return is_vulnerable(game, game.king(color))


def can_castle(game: GameState, king: Piece, rook: Piece) -> bool:
    """
    You are allowed to castle if
    ---

    * Neither the king nor the rook moved before.
    * There is no piece in between the king and the rook.
    * The king is not in check right now.

    NOTE: the squares the king passes / lands on are not checked for attacks here.
    The landing square is covered by the self-check filter in get_valid_moves.
    """
    if king.type != PieceType.KING or rook.type != PieceType.ROOK:
        return False
    if king.move_count or rook.move_count:
        return False
    if king.coord.rank != rook.coord.rank:
        return False
    if any(
        game.piece_at(square) is not None
        for square in squares_between_on_rank(king.coord, rook.coord)
    ):
        return False
    return not is_vulnerable(game, king)


def can_promote(game: GameState, piece: Piece) -> bool:
    """A pawn standing on its last rank."""
    return piece.type == PieceType.PAWN and piece.coord.rank == piece.last_rank


def can_move(game: GameState, color: Color) -> bool:
    """Does the player with the 'color' pieces have any legal move?"""
    return any(get_valid_moves(game, piece) for piece in game.pieces_of(color))


def game_status(game: GameState) -> Status:
    """No legal move for the side to move: checkmate if in check, stalemate otherwise."""
    color = game.turn_color
    if can_move(game, color):
        return Status.IN_PROGRESS
    return Status.CHECKMATE if is_in_check(game, color) else Status.STALEMATE


def winner(game: GameState) -> Optional[Color]:
    """Only a checkmate has a winner: the player who is NOT to move."""
    if game_status(game) != Status.CHECKMATE:
        return None
    return game.turn_color.opponent


# -- PRIVATE HELPERS ---
def _holds_opponent(game: GameState, piece: Piece, square: Square) -> bool:
    occupant = game.piece_at(square)
    return occupant is not None and occupant.color != piece.color


def _castling_candidates(game: GameState, king: Piece) -> list[Square]:
    rooks = [
        piece for piece in game.pieces_of(king.color) if piece.type == PieceType.ROOK
    ]
    return [
        destination
        for rook in rooks
        if can_castle(game, king, rook)
        and is_available(game, king, destination := castling_destination(king, rook))
    ]
