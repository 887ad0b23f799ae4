"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from food_logger.adapters.json_file_storage import JsonFileStorage
from food_logger.config import Settings
from food_logger.containers import AppContainer
from food_logger.domain.ai import AIResponse
from food_logger.domain.entries import AppData, Entry
from food_logger.domain.settings import UserSettings
from food_logger.services.ai import ChatClient
from food_logger.services.analysis import AnalysisService
from food_logger.services.entries import EntryService
from food_logger.services.storage import StorageBackend
from food_logger.services.user_settings import UserSettingsService

SALAD_REPLY = (
    '{"name": "Caesar salad", "calories": 420, "protein": 18, "carbs": 22, '
    '"fat": 29, "items": [{"name": "romaine", "calories": 20, "protein": 1, '
    '"carbs": 4, "fat": 0}, {"name": "dressing", "calories": 400, '
    '"protein": 17, "carbs": 18, "fat": 29}]}'
)


@dataclass
class FakeChatClient(ChatClient):
    """Fake chat client that records calls and returns a fixed reply."""

    content: str = SALAD_REPLY
    error: Exception | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)
    closed: bool = False

    async def complete(  # noqa: PLR0913
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        image: str | None = None,
        response_format: dict[str, object] | None = None,
        base_url: str | None = None,
    ) -> AIResponse:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "image": image,
                "response_format": response_format,
                "base_url": base_url,
            }
        )
        if self.error is not None:
            raise self.error
        return AIResponse(content=self.content)

    async def close(self) -> None:
        self.closed = True


@dataclass
class InMemoryStorage(StorageBackend):
    """In-memory storage backend for tests."""

    data: AppData = field(default_factory=AppData)

    def get_all_data(self) -> AppData:
        return self.data.model_copy(deep=True)

    def save_settings(self, settings: UserSettings) -> None:
        self.data.settings = settings

    def add_entry(self, entry: Entry) -> None:
        self.data.entries.append(entry)

    def delete_entry(self, entry_id: str) -> None:
        self.data.entries = [e for e in self.data.entries if e.id != entry_id]

    def list_entries(self) -> list[Entry]:
        return list(self.data.entries)


@dataclass
class FakeInsertResult:
    inserted_id: ObjectId


@dataclass
class FakeDeleteResult:
    deleted_count: int


@dataclass
class FakeCollection:
    """Subset of a pymongo collection backed by a list."""

    documents: list[dict[str, Any]] = field(default_factory=list)
    fail: bool = False

    def _check(self) -> None:
        if self.fail:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    def _matches(self, document: dict[str, Any], query: dict[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in query.items())

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        for document in self.documents:
            if self._matches(document, query):
                return dict(document)
        return None

    def find(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        self._check()
        return [dict(d) for d in self.documents if self._matches(d, query)]

    def count_documents(self, query: dict[str, Any]) -> int:
        self._check()
        return len(self.find(query))

    def insert_one(self, document: dict[str, Any]) -> FakeInsertResult:
        self._check()
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return FakeInsertResult(inserted_id=document["_id"])

    def replace_one(self, query: dict[str, Any], document: dict[str, Any]) -> None:
        self._check()
        for index, current in enumerate(self.documents):
            if self._matches(current, query):
                self.documents[index] = {"_id": current["_id"], **document}
                return

    def delete_one(self, query: dict[str, Any]) -> FakeDeleteResult:
        self._check()
        for index, current in enumerate(self.documents):
            if self._matches(current, query):
                del self.documents[index]
                return FakeDeleteResult(deleted_count=1)
        return FakeDeleteResult(deleted_count=0)


@dataclass
class FakeDatabase:
    """Dictionary of fake collections addressed like a pymongo database."""

    collections: dict[str, FakeCollection] = field(default_factory=dict)

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def fail_all(self) -> None:
        for name in ("settings", "entries"):
            self[name].fail = True


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        ai_provider="lmstudio",
        mongodb_uri=None,
        data_file=tmp_path / "data" / "db.json",
        environment="test",
    )


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def file_storage(settings: Settings) -> JsonFileStorage:
    return JsonFileStorage(settings.data_file)


@pytest.fixture
def container(
    settings: Settings,
    chat_client: FakeChatClient,
    file_storage: JsonFileStorage,
) -> AppContainer:
    user_settings_service = UserSettingsService(file_storage)
    analysis_service = AnalysisService(
        client=chat_client,
        settings_service=user_settings_service,
    )

    async def close_resources() -> None:
        await chat_client.close()

    return AppContainer(
        settings=settings,
        storage=file_storage,
        chat_client=chat_client,
        analysis_service=analysis_service,
        entry_service=EntryService(file_storage),
        user_settings_service=user_settings_service,
        close_resources=close_resources,
    )
