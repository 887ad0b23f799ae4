"""Models for AI gateway replies."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AIResponse:
    """Raw text reply from a chat-completion backend."""

    content: str
