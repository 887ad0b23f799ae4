"""Tests for configuration helpers."""

from food_logger.config import Settings, normalize_provider


def test_normalize_provider_defaults_to_lmstudio() -> None:
    assert normalize_provider(None) == "lmstudio"
    assert normalize_provider("  ") == "lmstudio"


def test_normalize_provider_is_case_insensitive() -> None:
    assert normalize_provider(" Gemini ") == "gemini"


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("AI_PROVIDER", "openai")
    monkeypatch.setenv("MONGODB_URI", "mongodb://db:27017")
    monkeypatch.setenv("MONGODB_DB_NAME", "food")

    settings = Settings(_env_file=None)

    assert settings.ai_provider == "openai"
    assert settings.mongodb_uri == "mongodb://db:27017"
    assert settings.mongodb_db_name == "food"
    assert settings.lmstudio_base_url == "http://localhost:1234/v1"
