"""Storage interface and the document-store-to-file fallback."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from food_logger.domain.entries import AppData, Entry
from food_logger.domain.errors import DocumentStoreError
from food_logger.domain.settings import UserSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageBackend(Protocol):
    """Persistence interface for settings and entries."""

    def get_all_data(self) -> AppData:
        """Return settings and all entries."""

    def save_settings(self, settings: UserSettings) -> None:
        """Persist the settings singleton."""

    def add_entry(self, entry: Entry) -> None:
        """Persist a new entry."""

    def delete_entry(self, entry_id: str) -> None:
        """Remove an entry by id; unknown ids are ignored."""

    def list_entries(self) -> list[Entry]:
        """Return all entries."""


@dataclass
class FallbackStorage(StorageBackend):
    """Try the primary backend and fall back to the secondary on store errors."""

    primary: StorageBackend
    secondary: StorageBackend

    def get_all_data(self) -> AppData:
        return self._run("get_all_data", lambda backend: backend.get_all_data())

    def save_settings(self, settings: UserSettings) -> None:
        self._run("save_settings", lambda backend: backend.save_settings(settings))

    def add_entry(self, entry: Entry) -> None:
        self._run("add_entry", lambda backend: backend.add_entry(entry))

    def delete_entry(self, entry_id: str) -> None:
        self._run("delete_entry", lambda backend: backend.delete_entry(entry_id))

    def list_entries(self) -> list[Entry]:
        return self._run("list_entries", lambda backend: backend.list_entries())

    def _run(self, operation: str, call: Callable[[StorageBackend], T]) -> T:
        try:
            return call(self.primary)
        except DocumentStoreError as exc:
            logger.warning(
                "Document store %s failed, using file storage: %s", operation, exc
            )
            return call(self.secondary)
