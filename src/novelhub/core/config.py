"""Application configuration using pydantic-settings."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "NovelAI Hub"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # REST API
    api_base_url: str = "http://localhost:5000/api"
    request_timeout_seconds: float = 30.0

    # Session persistence
    session_file: Path = Path.home() / ".novelhub" / "session.json"
    revalidate_session: bool = True

    # Route guard
    guard_max_attempts: int = 3
    guard_retry_delay_seconds: float = 1.0

    # Browse
    stories_page_size: int = 12

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def effective_api_base_url(self) -> str:
        """Get the API base URL without a trailing slash."""
        return self.api_base_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
