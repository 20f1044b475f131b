"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Any
from uuid import UUID

from src.api.models import (
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMove,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    SubmitStateRequest,
)
from src.core.exceptions import GameStateError, IllegalMoveError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.repository import GameRepository
from src.engine import (
    GameState,
    Square,
    can_promote,
    game_status,
    get_valid_moves,
    is_in_check,
    is_valid_move,
    make_game,
    update_piece,
)

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self) -> GameResponse:
        """A player requested to create a new game."""

        # Set up the starting position and convert into GameModel
        game = make_game()
        created_game_data = self._to_model(game)

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)

        # Return a GameResponse
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when the opponent made a move.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Retrieve the squares a single piece can move to (to highlight them / offer a promotion menu)."""

        stored_model = self._fetch_game(request.game_id)
        game = GameState.from_dict(stored_model.state)
        self._assert_in_progress(stored_model)

        piece = game.piece_by_id(request.piece_id)
        legal_moves = [
            LegalMove(
                to_coord=square.to_pair(),
                can_promote=can_promote(game, piece.moved_to(square)),
            )
            for square in get_valid_moves(game, piece)
        ]
        return LegalMovesResponse(
            game_id=request.game_id,
            piece_id=piece.id,
            color=piece.color,
            legal_moves=legal_moves,
        )

    def submit_state(self, request: SubmitStateRequest) -> GameResponse:
        """
        The client played a move and sends the resulting state.
        ----

        The state is only stored if it is exactly what the engine produces for a legal move from the stored state.
        """
        stored_model = self._fetch_game(request.game_id)
        self._assert_in_progress(stored_model)
        return self._store_transition(request.game_id, stored_model, request.state)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Let the server play the move (for clients that do not run the engine themselves)."""

        stored_model = self._fetch_game(request.game_id)
        self._assert_in_progress(stored_model)
        game = GameState.from_dict(stored_model.state)

        piece = game.piece_by_id(request.piece_id)
        moved = piece.moved_to(Square.from_pair(request.to_coord), request.promote_to)
        if moved.coord not in get_valid_moves(game, piece):
            raise IllegalMoveError(
                f"Piece {piece.id} ({piece.color} {piece.type}) cannot move to {request.to_coord}."
            )

        new_state = update_piece(game, moved)
        return self._store_transition(request.game_id, stored_model, new_state.to_dict())

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _store_transition(
        self, game_id: UUID, stored_model: GameModel, new_state: dict[str, Any]
    ) -> GameResponse:
        """Validate, then write with a compare-and-swap on the move count we validated against."""
        previous = GameState.from_dict(stored_model.state)
        if not is_valid_move(previous, new_state):
            logger.info("Rejected move for game %s", game_id)
            raise IllegalMoveError(f"Submitted state is not a legal move in game {game_id}.")

        # Store the normalized form, not the client's payload
        accepted = GameState.from_dict(new_state)
        updated = self.repo.update_game(
            game_id,
            self._to_model(accepted),
            expected_move_count=stored_model.move_count,
        )
        if updated is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return self._create_game_response(game_id, updated)

    def _to_model(self, game: GameState) -> GameModel:
        return GameModel(
            state=game.to_dict(),
            move_count=game.move_count,
            status=str(game_status(game)),
        )

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = GameState.from_dict(model.state)
        return GameResponse(
            game_id=game_id,
            state=model.state,
            move_count=model.move_count,
            turn=game.turn_color,
            status=Status(model.status),
            in_check=is_in_check(game, game.turn_color),
        )

    def _assert_in_progress(self, model: GameModel) -> None:
        if model.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {model.status}")

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
