"""Generate database session"""

from datetime import timedelta
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base
from src.db.sql_repository import SQLGameRepository


def make_session_factory(settings: Settings) -> sessionmaker[Session]:
    """Create the engine for the configured database and ensure all tables are created"""
    engine = create_engine(settings.database_url, echo=settings.sql_echo)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def make_repository(db: Session, settings: Settings) -> SQLGameRepository:
    return SQLGameRepository(db, ttl=timedelta(days=settings.game_ttl_days))
