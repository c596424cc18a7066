# src/llm/adapters/anthropic_adapter.py — v1
"""Anthropic Claude adapter implementing BaseLLMClient.

Uses the official anthropic SDK, lazily imported on first call.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from voxrelay.core.errors import LLMClientError
from voxrelay.llm.base_client import BaseLLMClient
from voxrelay.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)


class AnthropicAdapter(BaseLLMClient):
    """Adapter for Anthropic Claude models."""

    def __init__(
        self,
        model: str = "claude-3-5-haiku-latest",
        api_key: str | None = None,
        client: Any = None,
        **kwargs: Any,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self.__client = client

    @property
    def _client(self) -> Any:
        """Lazy-init Anthropic client (only on first API call)."""
        if self.__client is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError(
                    "anthropic package required: pip install anthropic"
                ) from e
            self.__client = anthropic.AsyncAnthropic(api_key=self._api_key or "")
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Text completion via the Messages API."""
        # The Messages API takes the system prompt out of band.
        params: dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [
                {"role": m.role, "content": m.content} for m in messages if m.role != "system"
            ],
        }
        if system:
            params["system"] = system

        start = time.monotonic()
        response = await self._client.messages.create(**params)
        latency_ms = int((time.monotonic() - start) * 1000)

        text = self._extract_text(response)
        if text is None:
            raise LLMClientError("Completion returned no text content")

        return LLMResponse(
            content=text,
            model=getattr(response, "model", None) or self._model,
            provider=self.provider_name,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            latency_ms=latency_ms,
            finish_reason=getattr(response, "stop_reason", None),
            raw_response=response,
        )

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @staticmethod
    def _extract_text(response: Any) -> str | None:
        """Concatenate text blocks; None when there are none."""
        texts = [
            block.text
            for block in getattr(response, "content", None) or []
            if getattr(block, "type", None) == "text"
        ]
        if not texts:
            return None
        return "".join(texts)
