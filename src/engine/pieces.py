"""Defines the chess pieces and the starting layout"""

from dataclasses import dataclass, replace
from typing import Any, Optional, Self

from src.core.exceptions import InvalidStateError
from src.core.shared_types import Color, PieceType
from src.engine.square import BOARD_DIMENSIONS, Square

LAYOUT_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

# Starting layout, read from rank 0 upwards. NOTE: the king stands left of the queen on this board.
STARTING_LAYOUT: tuple[str, ...] = (
    "rnbkqbnr",
    "pppppppp",
    "........",
    "........",
    "........",
    "........",
    "pppppppp",
    "rnbkqbnr",
)

# Ranks 0-1 hold the white pieces, everything above the middle of the board is black
WHITE_RANKS = range(0, BOARD_DIMENSIONS[1] // 2)

# Options offered to a pawn reaching its last rank
PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.QUEEN,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
]


@dataclass(frozen=True)
class Piece:
    """
    A piece keeps its `id` for the entire game, whatever square it is standing on.
    move_count == 0 means the piece never moved (pawn double step, castling).
    """

    id: int
    type: PieceType
    color: Color
    coord: Square
    move_count: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        """Parse one piece of a serialized game state. Raises InvalidStateError if anything is off."""
        if not isinstance(data, dict):
            raise InvalidStateError(f"Piece must be a mapping, got {data!r}")

        piece_id = data.get("id")
        if not isinstance(piece_id, int) or isinstance(piece_id, bool):
            raise InvalidStateError(f"Piece id must be an integer, got {piece_id!r}")

        if data.get("type") not in PieceType.__members__.values():
            raise InvalidStateError(f"Unknown piece type: {data.get('type')!r}")
        if data.get("color") not in Color.__members__.values():
            raise InvalidStateError(f"Unknown color: {data.get('color')!r}")

        coord = data.get("coord")
        if (
            not isinstance(coord, (list, tuple))
            or len(coord) != 2
            or not all(isinstance(c, int) and not isinstance(c, bool) for c in coord)
        ):
            raise InvalidStateError(f"coord must be a pair of integers, got {coord!r}")
        square = Square.from_pair(coord)
        if not square.is_within_bounds():
            raise InvalidStateError(f"coord {coord!r} is not on the board")

        move_count = data.get("moveCount", 0)
        if not isinstance(move_count, int) or isinstance(move_count, bool):
            raise InvalidStateError(f"moveCount must be an integer, got {move_count!r}")

        return cls(
            id=piece_id,
            type=PieceType(data["type"]),
            color=Color(data["color"]),
            coord=square,
            move_count=move_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": str(self.type),
            "color": str(self.color),
            "coord": self.coord.to_pair(),
            "moveCount": self.move_count,
        }

    def moved_to(self, square: Square, new_type: Optional[PieceType] = None) -> Self:
        """The modified copy that gets handed to update_piece(). Move counters are left to the engine."""
        return replace(self, coord=square, type=new_type or self.type)

    @property
    def last_rank(self) -> int:
        """Where a pawn of this color promotes"""
        return BOARD_DIMENSIONS[1] - 1 if self.color == Color.WHITE else 0

    @property
    def direction(self) -> int:
        """White moves UP the board, black moves DOWN"""
        return 1 if self.color == Color.WHITE else -1


def starting_pieces() -> list[Piece]:
    """Every piece gets its flattened board index as id."""
    pieces: list[Piece] = []
    for rank, row in enumerate(STARTING_LAYOUT):
        color = Color.WHITE if rank in WHITE_RANKS else Color.BLACK
        for file, character in enumerate(row):
            if character not in LAYOUT_TO_PIECE:
                continue
            pieces.append(
                Piece(
                    id=rank * BOARD_DIMENSIONS[0] + file,
                    type=LAYOUT_TO_PIECE[character],
                    color=color,
                    coord=Square(file, rank),
                )
            )
    return pieces
