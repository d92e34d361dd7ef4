"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_BACKEND_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "LernDeutsch Extraction API"
    gemini_api_key: str | None = None
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_api_version: str = "v1"
    gemini_model: str = "gemini-2.5-flash"
    extraction_max_attempts: int = 3
    extraction_attempt_timeout_seconds: float = 30.0
    extraction_backoff_base_seconds: float = 2.0
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["http://localhost:8081", "http://127.0.0.1:8081"]

    model_config = SettingsConfigDict(
        env_file=str(_BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
