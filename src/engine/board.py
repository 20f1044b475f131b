"""
The board implements everything that changes the `position` (the configuration of pieces on the board).

A GameState is never mutated: update_piece() returns a new value, older snapshots stay valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Any, Optional

from src.core.exceptions import GameStateError, InvalidStateError, PieceNotFoundError
from src.core.shared_types import Color, PieceType
from src.engine.castling import castling_rook, castling_rook_square, is_castling_move
from src.engine.pieces import Piece, starting_pieces
from src.engine.square import Square


@dataclass(frozen=True)
class GameState:
    """
    pieces: ordered by id, so two states holding the same pieces compare equal.
    move_count: half-moves played. Even: white to move, odd: black to move.
    prev_state: the state one half-move ago (its own prev_state is always stripped). Only used for en passant.
    """

    pieces: tuple[Piece, ...]
    move_count: int = 0
    prev_state: Optional[GameState] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "pieces", tuple(sorted(self.pieces, key=lambda piece: piece.id))
        )

    @classmethod
    def from_dict(cls, data: Any) -> GameState:
        """Parse the serialized form. Raises InvalidStateError on structural problems."""
        if not isinstance(data, dict):
            raise InvalidStateError("Game state must be a mapping.")
        raw_pieces = data.get("pieces")
        if not isinstance(raw_pieces, list):
            raise InvalidStateError("Game state must contain a list of pieces.")
        move_count = data.get("moveCount")
        if not isinstance(move_count, int) or isinstance(move_count, bool):
            raise InvalidStateError(f"moveCount must be an integer, got {move_count!r}")

        pieces = [Piece.from_dict(raw) for raw in raw_pieces]
        if len({piece.id for piece in pieces}) != len(pieces):
            raise InvalidStateError("Piece ids must be unique.")
        if len({piece.coord for piece in pieces}) != len(pieces):
            raise InvalidStateError("Two pieces cannot occupy the same square.")

        raw_prev = data.get("prevState")
        if raw_prev is None:
            return cls(tuple(pieces), move_count)
        # History is one half-move deep
        if isinstance(raw_prev, dict) and raw_prev.get("prevState") is not None:
            raise InvalidStateError("prevState cannot have a prevState of its own.")
        return cls(tuple(pieces), move_count, cls.from_dict(raw_prev))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "pieces": [piece.to_dict() for piece in self.pieces],
            "moveCount": self.move_count,
        }
        if self.prev_state is not None:
            data["prevState"] = self.prev_state.to_dict()
        return data

    @property
    def turn_color(self) -> Color:
        return Color.WHITE if self.move_count % 2 == 0 else Color.BLACK

    @cached_property
    def _by_square(self) -> dict[Square, Piece]:
        return {piece.coord: piece for piece in self.pieces}

    @cached_property
    def _by_id(self) -> dict[int, Piece]:
        return {piece.id: piece for piece in self.pieces}

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self._by_square.get(square)

    def find_piece(self, piece_id: int) -> Optional[Piece]:
        return self._by_id.get(piece_id)

    def piece_by_id(self, piece_id: int) -> Piece:
        piece = self.find_piece(piece_id)
        if piece is None:
            raise PieceNotFoundError(f"No piece with id {piece_id} on the board.")
        return piece

    def pieces_of(self, color: Color) -> list[Piece]:
        return [piece for piece in self.pieces if piece.color == color]

    def king(self, color: Color) -> Piece:
        """Exactly one king per color. Anything else is a broken game state."""
        kings = [
            piece
            for piece in self.pieces
            if piece.color == color and piece.type == PieceType.KING
        ]
        if len(kings) != 1:
            raise GameStateError(
                f"Expected exactly one {color} king on the board, found {len(kings)}."
            )
        return kings[0]

    def snapshot(self) -> GameState:
        """Copy to store as prev_state: history is kept one level deep."""
        return replace(self, prev_state=None)


def make_game() -> GameState:
    """Creates a new game (match)."""
    return GameState(pieces=tuple(starting_pieces()), move_count=0)


def get_en_passant_piece(
    game: GameState, piece: Piece, square: Square
) -> Optional[Piece]:
    """
    The piece a pawn would take en passant by moving to `square`, or None.

    The victim stands one rank behind `square` right now, and stood one rank in front of it one half-move ago:
    the same pawn (same id) just double stepped past `square`.
    """
    if piece.type != PieceType.PAWN or game.prev_state is None:
        return None

    current = game.piece_at(square.offset(0, -piece.direction))
    previous = game.prev_state.piece_at(square.offset(0, piece.direction))
    if (
        current is not None
        and previous is not None
        and current.id == previous.id
        and previous.type == PieceType.PAWN
        and previous.color != piece.color
    ):
        return current
    return None


def update_piece(game: GameState, piece: Piece, move_count: int = 1) -> GameState:
    """
    Apply a move and return the new game state.
    ----

    `piece` is a modified copy of a piece on the board (same id, new coord and/or new type).
    The piece it replaces is looked up by id. The game's move_count increases by `move_count`,
    and so does the move_count of every piece that moved.

    1. Castling: king moves two files --> the rook on that side lands next to the king's starting square.
    2. En passant: the captured pawn is NOT on the destination square, it gets removed by id.
    3. Anything else (quiet move, capture, promotion): whatever stands on the destination square is removed.
    """
    old_piece = game.piece_by_id(piece.id)
    destination = piece.coord
    moved_piece = replace(piece, move_count=piece.move_count + move_count)

    if is_castling_move(old_piece, piece):
        rook = castling_rook(game.pieces, old_piece, destination)
        if rook is None:
            raise GameStateError(
                f"King {piece.id} cannot castle towards {destination}: no unmoved rook on that side."
            )
        pieces = [
            x
            for x in game.pieces
            if x.coord != destination and x.id not in (piece.id, rook.id)
        ]
        pieces.append(moved_piece)
        pieces.append(
            replace(
                rook,
                coord=castling_rook_square(old_piece, destination),
                move_count=rook.move_count + move_count,
            )
        )
    elif (victim := get_en_passant_piece(game, old_piece, destination)) is not None:
        pieces = [x for x in game.pieces if x.id not in (piece.id, victim.id)]
        pieces.append(moved_piece)
    else:
        pieces = [
            x for x in game.pieces if x.coord != destination and x.id != piece.id
        ]
        pieces.append(moved_piece)

    return GameState(
        pieces=tuple(pieces),
        move_count=game.move_count + move_count,
        prev_state=game.snapshot(),
    )
