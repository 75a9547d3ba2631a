"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "health-tracker.db"
    environment: str = _ENVIRONMENT
    max_import_bytes: int = 50 * 1024 * 1024
    export_filename_prefix: str = "health"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def export_filename(prefix: str, day: str) -> str:
    """Return the archive filename for an exported day."""
    cleaned = prefix.strip() or "health"
    return f"{cleaned}-{day}.zip"
