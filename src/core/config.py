"""Application settings (read from environment variables) and logging setup."""

import logging
import os
from typing import Any, Literal, Self

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "CHESS_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    database_url: str = "sqlite:///./chess.db"
    sql_echo: bool = False
    # Games are dropped a month after they were created
    game_ttl_days: int = Field(default=30, ge=1)
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Self:
        """Pick up CHESS_<FIELD> variables. Anything not set keeps its default."""
        environ = dict(os.environ) if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(settings.log_level)
