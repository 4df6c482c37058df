"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str

    # Field length limits
    max_title_length: int = Field(default=255, validation_alias="MAX_TITLE_LENGTH")
    max_url_length: int = Field(default=255, validation_alias="MAX_URL_LENGTH")
    max_description_length: int = Field(
        default=255, validation_alias="MAX_DESCRIPTION_LENGTH",
    )

    # Authorization - demo accounts can read but never mutate bookmarks
    demo_users_read_only: bool = Field(default=True, validation_alias="DEMO_USERS_READ_ONLY")

    # Days a removed bookmark is kept before the cleanup task purges it
    removed_retention_days: int = Field(default=30, validation_alias="REMOVED_RETENTION_DAYS")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
