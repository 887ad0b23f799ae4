"""MongoDB storage for settings and entries."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from bson import ObjectId
from pydantic import ValidationError
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from food_logger.domain.entries import AppData, Entry
from food_logger.domain.errors import DocumentStoreError
from food_logger.domain.settings import UserSettings
from food_logger.services.storage import StorageBackend

logger = logging.getLogger(__name__)

SETTINGS_COLLECTION = "settings"
ENTRIES_COLLECTION = "entries"


@dataclass
class MongoConnection:
    """Process-wide MongoDB client, created on first use and then reused."""

    uri: str
    db_name: str
    timeout_ms: int = 2000
    _client: MongoClient | None = field(default=None, init=False, repr=False)

    def get_database(self) -> Database:
        """Return the configured database, connecting lazily."""
        if self._client is None:
            self._client = MongoClient(
                self.uri, serverSelectionTimeoutMS=self.timeout_ms
            )
            logger.info("Created MongoDB client for database %s", self.db_name)
        return self._client[self.db_name]

    def close(self) -> None:
        """Close the client if one was created."""
        if self._client is not None:
            self._client.close()
            self._client = None


@dataclass
class MongoStorage(StorageBackend):
    """Stores settings as a single document and entries one document each."""

    database_provider: Callable[[], Database]

    def get_all_data(self) -> AppData:
        with _store_errors("read data"):
            database = self.database_provider()
            settings_doc = database[SETTINGS_COLLECTION].find_one({})
            rows = list(database[ENTRIES_COLLECTION].find({}))
            return AppData(
                settings=settings_from_document(settings_doc),
                entries=[entry_from_document(row) for row in rows],
            )

    def save_settings(self, settings: UserSettings) -> None:
        """Insert the settings document, or replace the only one present."""
        with _store_errors("save settings"):
            collection = self.database_provider()[SETTINGS_COLLECTION]
            document = settings.to_document()
            if collection.count_documents({}) == 0:
                collection.insert_one(document)
            else:
                collection.replace_one({}, document)

    def add_entry(self, entry: Entry) -> None:
        with _store_errors("add entry"):
            self.database_provider()[ENTRIES_COLLECTION].insert_one(
                entry.to_document()
            )

    def delete_entry(self, entry_id: str) -> None:
        """Delete by `id`, or by `_id` for rows saved without one."""
        with _store_errors("delete entry"):
            collection = self.database_provider()[ENTRIES_COLLECTION]
            result = collection.delete_one({"id": entry_id})
            if result.deleted_count == 0 and ObjectId.is_valid(entry_id):
                collection.delete_one({"_id": ObjectId(entry_id)})

    def list_entries(self) -> list[Entry]:
        with _store_errors("list entries"):
            rows = self.database_provider()[ENTRIES_COLLECTION].find({})
            return [entry_from_document(row) for row in rows]


def resolve_id(row: dict[str, Any]) -> str:
    """Return the entry id, using the store's `_id` for rows saved without one."""
    explicit = row.get("id")
    if explicit:
        return str(explicit)
    return str(row["_id"])


def entry_from_document(row: dict[str, Any]) -> Entry:
    payload = {key: value for key, value in row.items() if key != "_id"}
    payload["id"] = resolve_id(row)
    return Entry.model_validate(payload)


def settings_from_document(document: dict[str, Any] | None) -> UserSettings:
    """Build settings from the stored document, defaulting missing goals."""
    if not document:
        return UserSettings()
    payload = {
        key: value
        for key, value in document.items()
        if key != "_id" and value is not None
    }
    return UserSettings.model_validate(payload)


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except (PyMongoError, ValidationError, KeyError) as exc:
        raise DocumentStoreError(f"MongoDB failed to {action}: {exc}") from exc
