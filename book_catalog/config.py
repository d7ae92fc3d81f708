"""Application configuration and environment variables."""
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB. Older deployments export DATABASE_URI instead of MONGO_URI.
    mongo_uri: str = Field(
        default="",
        validation_alias=AliasChoices("MONGO_URI", "DATABASE_URI"),
    )
    database_name: str = Field(
        default="exercise-1",
        validation_alias=AliasChoices("MONGO_DATABASE", "database_name"),
    )
    collection_name: str = Field(
        default="information",
        validation_alias=AliasChoices("MONGO_COLLECTION", "collection_name"),
    )
    # Bounds the startup connect + ping only, never request handling.
    connect_timeout_seconds: float = 10.0

    # Server
    host: str = "0.0.0.0"
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
