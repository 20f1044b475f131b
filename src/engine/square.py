"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Squares are zero-based: (0, 0) - (7, 7)
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_pair(cls, coord: list[int] | tuple[int, int]) -> Square:
        """Serialized form is a two element list: [file, rank]"""
        file, rank = coord
        return cls(file, rank)

    def to_pair(self) -> list[int]:
        return [self.file, self.rank]

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )
