"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from src.core.exceptions import StaleGameStateError
from src.core.models import GameModel
from src.db.schema import DBGame, utc_now

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(days=30)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session, ttl: timedelta = DEFAULT_TTL) -> None:
        self.db = db_session
        self.ttl = ttl

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists (and did not expire yet)."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            state=game.state,
            move_count=game.move_count,
            status=game.status,
            expires_at=utc_now() + self.ttl,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.info("Created game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(
        self, game_id: UUID, game: GameModel, expected_move_count: int
    ) -> GameModel | None:
        """
        Compare-and-swap update
        ---

        A single UPDATE ... WHERE move_count = expected: two clients racing on the same game
        cannot both write a move against the same prior state.
        """
        if not self._fetch_game(game_id):
            return None

        result = self.db.execute(
            update(DBGame)
            .where(DBGame.id == game_id)
            .where(DBGame.move_count == expected_move_count)
            .values(
                state=game.state,
                move_count=game.move_count,
                status=game.status,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        if result.rowcount == 0:
            logger.warning(
                "Stale update for game %s: expected move count %s",
                game_id,
                expected_move_count,
            )
            raise StaleGameStateError(
                f"Game {game_id} changed since move {expected_move_count}. Reload and try again."
            )

        game_db = self._fetch_game(game_id)
        # Expired or deleted right after the write
        if game_db is None:
            return None
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        logger.info("Deleted game %s", game_id)
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        game_db = self.db.scalar(query)
        if game_db is None or self._is_expired(game_db):
            return None
        return game_db

    def _is_expired(self, game_db: DBGame) -> bool:
        expires_at = game_db.expires_at
        # SQLite drops the timezone info
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= datetime.now(timezone.utc)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            state=game_db.state,
            move_count=game_db.move_count,
            status=game_db.status,
        )
