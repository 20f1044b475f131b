"""
Chess rule engine.

Pure functions over immutable GameState values: no I/O, no hidden state.
"""

from src.engine.board import GameState, get_en_passant_piece, make_game, update_piece
from src.engine.game import (
    can_attack,
    can_castle,
    can_move,
    can_promote,
    game_status,
    get_valid_moves,
    get_vulnerabilities,
    is_in_check,
    is_vulnerable,
    winner,
)
from src.engine.pieces import PROMOTION_OPTIONS, Piece
from src.engine.square import BOARD_DIMENSIONS, Square
from src.engine.validation import is_valid_move

__all__ = [
    "BOARD_DIMENSIONS",
    "PROMOTION_OPTIONS",
    "GameState",
    "Piece",
    "Square",
    "can_attack",
    "can_castle",
    "can_move",
    "can_promote",
    "game_status",
    "get_en_passant_piece",
    "get_valid_moves",
    "get_vulnerabilities",
    "is_in_check",
    "is_valid_move",
    "is_vulnerable",
    "make_game",
    "update_piece",
    "winner",
]
