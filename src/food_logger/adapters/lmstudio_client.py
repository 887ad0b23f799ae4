"""OpenAI-compatible chat completions client for local inference servers."""

import logging
from dataclasses import dataclass

import httpx

from food_logger.domain.ai import AIResponse
from food_logger.domain.errors import AIBackendError
from food_logger.services.ai import ChatClient, build_messages

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 300
DEFAULT_TEMPERATURE = 0.7


@dataclass
class HttpxChatCompletionsClient(ChatClient):
    """Chat client for LM Studio and other `/chat/completions` servers."""

    base_url: str
    model: str
    http_client: httpx.AsyncClient
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    timeout: float = 120.0

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        base_url: str,
        model: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = 120.0,
    ) -> "HttpxChatCompletionsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            model=model,
            http_client=httpx.AsyncClient(),
            max_tokens=max_tokens,
            temperature=temperature,
            timeout=timeout,
        )

    async def complete(  # noqa: PLR0913
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        image: str | None = None,
        response_format: dict[str, object] | None = None,
        base_url: str | None = None,
    ) -> AIResponse:
        """Send one chat completion request and return the message content."""
        url = f"{(base_url or self.base_url).rstrip('/')}/chat/completions"
        payload: dict[str, object] = {
            "model": self.model,
            "messages": build_messages(system_prompt, user_prompt, image),
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        if response_format is not None:
            payload["response_format"] = response_format

        try:
            response = await self.http_client.post(
                url, json=payload, timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            logger.warning("Chat completion request failed", extra={"url": url})
            raise AIBackendError(
                str(exc) or "Failed to connect to the AI backend"
            ) from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success or not isinstance(data, dict):
            logger.warning(
                "Chat completion returned an error",
                extra={"url": url, "status_code": response.status_code},
            )
            raise AIBackendError(
                _error_message(data)
                or f"AI backend responded with status {response.status_code}"
            )
        return AIResponse(content=_extract_content(data))

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_message(data: object) -> str | None:
    """Pull the backend's own error message out of a reply body."""
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    if data.get("message"):
        return str(data["message"])
    return None


def _extract_content(data: dict[str, object]) -> str:
    """Return `choices[0].message.content` or raise AIBackendError."""
    try:
        content = data["choices"][0]["message"]["content"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError) as exc:
        raise AIBackendError(
            _error_message(data) or "AI backend returned no completion choices"
        ) from exc
    if not isinstance(content, str) or not content.strip():
        raise AIBackendError("AI backend returned an empty completion")
    return content
