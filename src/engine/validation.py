"""
Validation of a state transition submitted by a client.

The client computes the new state itself. The server must not trust it:
we replay the move with update_piece() and require the exact same result.
Legality is decided by get_valid_moves(), so there is no second copy of the chess rules here.
"""

import logging
from typing import Any

from src.core.exceptions import InvalidStateError
from src.core.shared_types import PieceType
from src.engine.board import GameState, update_piece
from src.engine.game import get_valid_moves
from src.engine.pieces import PROMOTION_OPTIONS, Piece

logger = logging.getLogger(__name__)


def is_valid_move(prev_state: GameState, new_state: GameState | dict[str, Any]) -> bool:
    """
    Is `new_state` the result of a single legal move played in `prev_state`?
    ----

    1. `new_state` must be structurally valid (the serialized form is parsed here, never raises).
    2. Find the pieces whose type or square changed (compared by id).
    3. One moved piece: replay it. Two moved pieces: only allowed for castling, replay the king's move
       (update_piece moves the rook deterministically, the comparison covers it).
    4. Anything else is rejected.
    """
    if not isinstance(new_state, GameState):
        try:
            new_state = GameState.from_dict(new_state)
        except InvalidStateError as exc:
            logger.info("Rejected state transition: malformed state (%s)", exc)
            return False

    moved_pieces = _moved_pieces(prev_state, new_state)

    if len(moved_pieces) == 1:
        return _is_replayable(prev_state, new_state, moved_pieces[0])

    if len(moved_pieces) == 2:
        king = next((p for p in moved_pieces if p.type == PieceType.KING), None)
        if king is None:
            logger.info("Rejected state transition: two pieces moved, none of them a king")
            return False
        return _is_replayable(prev_state, new_state, king)

    logger.info("Rejected state transition: %d pieces moved", len(moved_pieces))
    return False


def _moved_pieces(prev_state: GameState, new_state: GameState) -> list[Piece]:
    """Pieces in the new state that are new, changed square, or changed type."""
    moved: list[Piece] = []
    for piece in new_state.pieces:
        before = prev_state.find_piece(piece.id)
        if before is None or before.coord != piece.coord or before.type != piece.type:
            moved.append(piece)
    return moved


def _is_replayable(prev_state: GameState, new_state: GameState, piece: Piece) -> bool:
    old_piece = prev_state.find_piece(piece.id)
    if old_piece is None:
        logger.info("Rejected state transition: unknown piece id %s", piece.id)
        return False

    if old_piece.color != prev_state.turn_color:
        logger.info(
            "Rejected state transition: %s moved while it is %s's turn",
            old_piece.color,
            prev_state.turn_color,
        )
        return False

    if not _is_allowed_type_change(old_piece, piece):
        logger.info(
            "Rejected state transition: %s %s cannot become a %s",
            old_piece.color,
            old_piece.type,
            piece.type,
        )
        return False

    if piece.coord not in get_valid_moves(prev_state, old_piece):
        logger.info(
            "Rejected state transition: piece %s cannot move to %s",
            piece.id,
            piece.coord,
        )
        return False

    replayed = update_piece(prev_state, old_piece.moved_to(piece.coord, piece.type))
    if replayed != new_state:
        logger.info("Rejected state transition: submitted state differs from replay")
        return False
    return True


def _is_allowed_type_change(old_piece: Piece, piece: Piece) -> bool:
    """Only promotion changes a piece's type: a pawn reaching its last rank."""
    if old_piece.type == piece.type:
        return True
    return (
        old_piece.type == PieceType.PAWN
        and piece.coord.rank == old_piece.last_rank
        and piece.type in PROMOTION_OPTIONS
    )
