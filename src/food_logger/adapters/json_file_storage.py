"""Single JSON file storage."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from food_logger.domain.entries import AppData, Entry
from food_logger.domain.errors import StorageError
from food_logger.domain.settings import UserSettings
from food_logger.services.storage import StorageBackend


@dataclass
class JsonFileStorage(StorageBackend):
    """Stores settings and entries in one JSON document.

    Writes are read-modify-write without locking, so concurrent writers
    can lose updates. Intended for one user and one process.
    """

    path: Path

    def get_all_data(self) -> AppData:
        """Read the document, creating it with defaults when missing."""
        self._ensure_file()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return AppData.model_validate(raw)
        except OSError as exc:
            raise StorageError(f"Failed to read {self.path}: {exc}") from exc
        except (ValueError, ValidationError) as exc:
            raise StorageError(f"Invalid data file {self.path}: {exc}") from exc

    def save_settings(self, settings: UserSettings) -> None:
        data = self.get_all_data()
        data.settings = settings
        self._write(data)

    def add_entry(self, entry: Entry) -> None:
        data = self.get_all_data()
        data.entries.append(entry)
        self._write(data)

    def delete_entry(self, entry_id: str) -> None:
        data = self.get_all_data()
        remaining = [entry for entry in data.entries if entry.id != entry_id]
        if len(remaining) == len(data.entries):
            return
        data.entries = remaining
        self._write(data)

    def list_entries(self) -> list[Entry]:
        return self.get_all_data().entries

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        self._write(AppData())

    def _write(self, data: AppData) -> None:
        """Replace the file atomically via a temp file in the same directory."""
        payload = json.dumps(data.to_document(), indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {self.path}: {exc}") from exc
