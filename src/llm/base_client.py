# src/llm/base_client.py — v1
"""Abstract text-generation client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from voxrelay.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for chat-completion providers.

    Implementations raise ``LLMClientError`` when the provider answers
    without any completion content.
    """

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Text completion."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (openai, anthropic)."""
