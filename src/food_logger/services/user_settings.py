"""User settings service."""

from dataclasses import dataclass

from food_logger.domain.settings import UserSettings
from food_logger.services.storage import StorageBackend


@dataclass
class UserSettingsService:
    """Service for the settings singleton."""

    storage: StorageBackend

    def get(self) -> UserSettings:
        """Return stored settings with defaults applied."""
        return self.storage.get_all_data().settings

    def update(self, changes: dict[str, object]) -> UserSettings:
        """Merge the provided fields into the stored settings.

        Only keys present in ``changes`` overwrite; ``user_stats`` is
        replaced as a whole.
        """
        current = self.get()
        merged = UserSettings.model_validate(
            {**current.model_dump(), **changes}
        )
        self.storage.save_settings(merged)
        return merged
