"""Application settings management."""

import logging
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)

DEFAULT_POOL_CAPACITY = 10


class Settings(BaseSettings):
    """Global settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = "Identity Bot"
    app_version: str = "0.1.0"
    environment: str = "development"

    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    pg_host: str = Field(default="localhost", alias="PG_HOST")
    pg_port: int = Field(default=5432, alias="PG_PORT")
    pg_user: str = Field(default="postgres", alias="PG_USER")
    pg_password: str | None = Field(default=None, alias="PG_PASSWORD")
    pg_database: str = Field(default="bot", alias="PG_DATABASE")
    pg_pool_capacity: int = Field(default=DEFAULT_POOL_CAPACITY, alias="PG_POOL_CAPACITY")
    pg_pool_timeout: float = Field(default=30.0, alias="PG_POOL_TIMEOUT")
    pg_connect_timeout: int = Field(default=10, alias="PG_CONNECT_TIMEOUT")
    pg_statement_timeout: float = Field(default=30.0, alias="PG_STATEMENT_TIMEOUT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    name_split_policy: Literal["join", "second_token"] = Field(default="join", alias="NAME_SPLIT_POLICY")
    bot_username: str | None = Field(default=None, alias="BOT_USERNAME")

    @field_validator("pg_pool_capacity", mode="before")
    @classmethod
    def _fallback_pool_capacity(cls, value: Any) -> int:
        try:
            capacity = int(str(value).strip())
        except (TypeError, ValueError):
            logger.warning("Invalid PG_POOL_CAPACITY %r, using %d", value, DEFAULT_POOL_CAPACITY)
            return DEFAULT_POOL_CAPACITY
        if capacity < 1:
            logger.warning("Non-positive PG_POOL_CAPACITY %r, using %d", value, DEFAULT_POOL_CAPACITY)
            return DEFAULT_POOL_CAPACITY
        return capacity

    @property
    def sqlalchemy_url(self) -> str | URL:
        """Full database URL, built from the PG_* parts unless DATABASE_URL is set."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg",
            username=self.pg_user,
            password=self.pg_password,
            host=self.pg_host,
            port=self.pg_port,
            database=self.pg_database,
        )


settings = Settings()
