"""Requests and Response models"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, Status
from src.engine.pieces import PROMOTION_OPTIONS
from src.engine.square import BOARD_DIMENSIONS

# [file, rank] as used in the serialized game state
Coord = list[int]


# --- REQUEST MODELS ---
class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    piece_id: int


class SubmitStateRequest(BaseModel):
    """
    The client plays the move locally and sends the resulting state.
    NOTE: state stays a plain mapping. Checking its structure is part of validating the move (engine side).
    """

    game_id: UUID
    state: dict[str, Any]


class MoveRequest(BaseModel):
    game_id: UUID
    piece_id: int
    to_coord: Coord
    promote_to: Optional[PieceType] = None

    @field_validator("to_coord")
    @classmethod
    def validate_coord(cls, value: Coord) -> Coord:
        def _is_on_board(value: Coord) -> bool:
            if len(value) != 2:
                return False
            file, rank = value
            return 0 <= file < BOARD_DIMENSIONS[0] and 0 <= rank < BOARD_DIMENSIONS[1]

        if not _is_on_board(value):
            raise InvalidRequestError(
                f"Cannot interpret to_coord: {value!r} as a square on the board."
            )
        return value

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        if value is not None and value not in PROMOTION_OPTIONS:
            raise InvalidRequestError(f"A pawn cannot promote to a {value}.")
        return value


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    state: dict[str, Any]
    move_count: int
    turn: Color
    status: Status
    in_check: bool


class LegalMove(BaseModel):
    to_coord: Coord
    can_promote: bool


class LegalMovesResponse(BaseModel):
    game_id: UUID
    piece_id: int
    color: Color
    legal_moves: list[LegalMove]
