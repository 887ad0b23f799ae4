"""Tests for the user settings service."""

from food_logger.domain.settings import UserSettings, UserStats
from food_logger.services.user_settings import UserSettingsService
from tests.conftest import InMemoryStorage


def test_get_returns_defaults_for_empty_store() -> None:
    service = UserSettingsService(InMemoryStorage())

    settings = service.get()

    assert settings.daily_goal == 2000
    assert settings.protein_goal == 150
    assert settings.carbs_goal == 250
    assert settings.fat_goal == 70
    assert settings.user_stats is None


def test_update_merges_only_provided_fields() -> None:
    storage = InMemoryStorage()
    service = UserSettingsService(storage)

    merged = service.update({"daily_goal": 2200})

    assert merged == UserSettings(
        daily_goal=2200, protein_goal=150, carbs_goal=250, fat_goal=70
    )
    assert storage.data.settings == merged


def test_update_replaces_user_stats_wholesale() -> None:
    storage = InMemoryStorage()
    storage.data.settings = UserSettings(
        user_stats=UserStats(
            age=30, height_cm=180, weight_kg=80, gender="male", activity_level="active"
        ),
        api_base_url="http://localhost:1234/v1",
    )
    service = UserSettingsService(storage)

    merged = service.update(
        {
            "user_stats": {
                "age": 31,
                "height": 181,
                "weight": 78,
                "gender": "male",
                "activityLevel": "moderate",
            }
        }
    )

    assert merged.user_stats is not None
    assert merged.user_stats.age == 31
    assert merged.user_stats.activity_level == "moderate"
    assert merged.api_base_url == "http://localhost:1234/v1"

