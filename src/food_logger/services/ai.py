"""AI gateway interface for chat-completion backends."""

from dataclasses import dataclass
from typing import Protocol

from food_logger.domain.ai import AIResponse
from food_logger.domain.errors import ConfigurationError


class ChatClient(Protocol):
    """Interface for a chat-completion backend."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        image: str | None = None,
        response_format: dict[str, object] | None = None,
        base_url: str | None = None,
    ) -> AIResponse:
        """Return the raw text reply for a single prompt."""

    async def close(self) -> None:
        """Release network resources."""


@dataclass
class UnavailableChatClient(ChatClient):
    """Backend placeholder that fails every call without network access."""

    error: ConfigurationError

    async def complete(  # noqa: PLR0913
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        image: str | None = None,
        response_format: dict[str, object] | None = None,
        base_url: str | None = None,
    ) -> AIResponse:
        """Raise the configuration error for this backend."""
        raise self.error

    async def close(self) -> None:
        """Nothing to release."""


def build_messages(
    system_prompt: str, user_prompt: str, image: str | None
) -> list[dict[str, object]]:
    """Build OpenAI-compatible chat messages, attaching the image if present."""
    user_content: object = user_prompt
    if image:
        user_content = [
            {"type": "text", "text": user_prompt},
            {"type": "image_url", "image_url": {"url": image}},
        ]
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_content},
    ]
