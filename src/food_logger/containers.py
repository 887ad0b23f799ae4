"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_logger.adapters.json_file_storage import JsonFileStorage
from food_logger.adapters.lmstudio_client import HttpxChatCompletionsClient
from food_logger.adapters.mongo_storage import MongoConnection, MongoStorage
from food_logger.adapters.openai_chat_client import OpenAIChatClient
from food_logger.config import Settings, normalize_provider
from food_logger.domain.errors import ConfigurationError, UnsupportedBackendError
from food_logger.services.ai import ChatClient, UnavailableChatClient
from food_logger.services.analysis import AnalysisService
from food_logger.services.entries import EntryService
from food_logger.services.storage import FallbackStorage, StorageBackend
from food_logger.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: StorageBackend
    chat_client: ChatClient
    analysis_service: AnalysisService
    entry_service: EntryService
    user_settings_service: UserSettingsService
    close_resources: Callable[[], Awaitable[None]]


def build_chat_client(settings: Settings) -> ChatClient:
    """Map the configured provider tag to a chat client."""
    provider = normalize_provider(settings.ai_provider)
    if provider == "lmstudio":
        return HttpxChatCompletionsClient.create(
            base_url=settings.lmstudio_base_url,
            model=settings.lmstudio_model,
            max_tokens=settings.ai_max_tokens,
            temperature=settings.ai_temperature,
            timeout=settings.ai_timeout_seconds,
        )
    if provider == "openai":
        if not settings.openai_api_key:
            return UnavailableChatClient(
                ConfigurationError(
                    "AI provider 'openai' is not configured: OPENAI_API_KEY is missing"
                )
            )
        return OpenAIChatClient.create(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            max_tokens=settings.ai_max_tokens,
            temperature=settings.ai_temperature,
            timeout=settings.ai_timeout_seconds,
        )
    return UnavailableChatClient(
        UnsupportedBackendError(f"AI provider '{provider}' is not supported")
    )


def build_storage(
    settings: Settings,
) -> tuple[StorageBackend, MongoConnection | None]:
    """Return file storage, or MongoDB with file fallback when configured."""
    file_storage = JsonFileStorage(settings.data_file)
    if not settings.mongodb_uri:
        return file_storage, None
    connection = MongoConnection(
        uri=settings.mongodb_uri,
        db_name=settings.mongodb_db_name,
        timeout_ms=settings.mongodb_timeout_ms,
    )
    storage = FallbackStorage(
        primary=MongoStorage(connection.get_database),
        secondary=file_storage,
    )
    return storage, connection


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage, mongo_connection = build_storage(resolved_settings)
    chat_client = build_chat_client(resolved_settings)
    user_settings_service = UserSettingsService(storage)
    analysis_service = AnalysisService(
        client=chat_client,
        settings_service=user_settings_service,
    )
    entry_service = EntryService(storage)

    async def close_resources() -> None:
        await chat_client.close()
        if mongo_connection is not None:
            mongo_connection.close()

    return AppContainer(
        settings=resolved_settings,
        storage=storage,
        chat_client=chat_client,
        analysis_service=analysis_service,
        entry_service=entry_service,
        user_settings_service=user_settings_service,
        close_resources=close_resources,
    )
