"""OpenAI Chat Completions client."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from food_logger.domain.ai import AIResponse
from food_logger.domain.errors import AIBackendError
from food_logger.services.ai import ChatClient, build_messages


@dataclass
class OpenAIChatClient(ChatClient):
    """Chat client backed by the hosted OpenAI API.

    The per-call ``base_url`` override is ignored; it only applies to
    local inference servers.
    """

    client: AsyncOpenAI
    model: str
    max_tokens: int = 300
    temperature: float = 0.7

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        max_tokens: int = 300,
        temperature: float = 0.7,
        timeout: float = 120.0,
    ) -> "OpenAIChatClient":
        """Create an OpenAI chat client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, timeout=timeout),
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
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
        """Call the Chat Completions API and return the message content."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "messages": build_messages(system_prompt, user_prompt, image),
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        if response_format is not None:
            request_payload["response_format"] = response_format

        try:
            response = await self.client.chat.completions.create(**request_payload)
        except OpenAIError as exc:
            raise AIBackendError(str(exc) or "OpenAI request failed") from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise AIBackendError("OpenAI returned no completion choices")
        content = choices[0].message.content
        if not content or not content.strip():
            raise AIBackendError("OpenAI returned an empty completion")
        return AIResponse(content=content)

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP client."""
        await self.client.close()
