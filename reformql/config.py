"""Environment-based configuration using pydantic-settings.

Every setting can be supplied as an environment variable with the
``REFORM_`` prefix, or in a ``.env`` file in the working directory::

    REFORM_DATABASE_URL=postgresql+psycopg://user:pw@localhost/app
    REFORM_LOG_LEVEL=DEBUG
    REFORM_LOG_FORMAT=json
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """reformql runtime settings.

    Attributes:
        database_url: SQLAlchemy URL used by :func:`reformql.db.open_db`.
        log_level: Level for the ``reformql`` loggers.
        log_format: ``console`` for human-readable lines, ``json`` for
            one JSON object per event.
        log_args: Whether statement arguments are included in log events.
    """

    model_config = SettingsConfigDict(
        env_prefix="REFORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = Field(default="sqlite://")
    log_level: str = Field(default="INFO")
    log_format: Literal["console", "json"] = "console"
    log_args: bool = True

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
