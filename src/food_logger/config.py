"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ai_provider: str = "lmstudio"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    gemini_api_key: str | None = None
    lmstudio_base_url: str = "http://localhost:1234/v1"
    lmstudio_model: str = "local-model"
    ai_max_tokens: int = 300
    ai_temperature: float = 0.7
    ai_timeout_seconds: float = 120.0
    mongodb_uri: str | None = None
    mongodb_db_name: str = "rapid-flare"
    mongodb_timeout_ms: int = 2000
    data_file: Path = Path("data/db.json")
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_provider(raw: str | None) -> str:
    """Normalize the configured AI provider tag."""
    if raw is None:
        return "lmstudio"
    cleaned = raw.strip().lower()
    return cleaned or "lmstudio"
