# src/llm/adapters/openai_adapter.py — v1
"""OpenAI chat-completions adapter implementing BaseLLMClient.

Uses the official openai SDK. ``base_url`` points the same client at any
OpenAI-compatible host (hosted Llama endpoints, local gateways).
"""

from __future__ import annotations

import time
from typing import Any

from voxrelay.core.errors import LLMClientError
from voxrelay.llm.base_client import BaseLLMClient
from voxrelay.llm.models import LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    """OpenAI (or OpenAI-compatible) chat adapter."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str = "",
        base_url: str | None = None,
        client: Any = None,
        **kwargs: Any,
    ):
        self._model = model
        self._api_key = api_key
        self._base_url = base_url or None
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        oai_messages: list[dict[str, Any]] = []
        if system:
            oai_messages.append({"role": "system", "content": system})
        for m in messages:
            oai_messages.append({"role": m.role, "content": m.content})

        t0 = time.monotonic()
        resp = await self._get_client().chat.completions.create(
            model=self._model,
            messages=oai_messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        latency = int((time.monotonic() - t0) * 1000)

        if not resp.choices:
            raise LLMClientError("Completion returned no choices")
        choice = resp.choices[0]
        if choice.message is None or choice.message.content is None:
            raise LLMClientError("Completion returned no message content")

        usage = resp.usage
        return LLMResponse(
            content=choice.message.content,
            model=getattr(resp, "model", None) or self._model,
            provider=self.provider_name,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            latency_ms=latency,
            finish_reason=getattr(choice, "finish_reason", None),
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "openai"
