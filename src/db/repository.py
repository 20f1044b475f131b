"""Protocol repository (implemented with SQLAlchemy in sql_repository.py, tests use an in-memory dictionary)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(
        self, game_id: UUID, game: GameModel, expected_move_count: int
    ) -> GameModel | None:
        """
        Replace the stored state, but only if the stored move_count still equals `expected_move_count`.
        Raises StaleGameStateError otherwise. Returns None if the record does not exist.
        """
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...
