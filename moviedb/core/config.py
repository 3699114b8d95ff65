"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(default="sqlite:///./moviedb.db", alias="DATABASE_URL")
    api_prefix: str = Field(default="/api/v1", alias="API_PREFIX")
    jwt_secret: str | None = Field(default=None, alias="JWT_SECRET")
    jwt_issuer: str = Field(default="MovieDatabaseAPI", alias="JWT_ISSUER")
    jwt_audience: str = Field(default="MovieDatabaseAPIClients", alias="JWT_AUDIENCE")
    jwt_expiry_days: int = Field(default=7, alias="JWT_EXPIRY_DAYS")
    seed_database: bool = Field(default=True, alias="SEED_DATABASE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    rate_limit: str = Field(default="100/minute", alias="RATE_LIMIT")
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_storage_uri: str = Field(default="memory://", alias="RATE_LIMIT_STORAGE_URI")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
