# src/adapters/llm_responder.py — v1
"""Response generation: fixed system instruction + transcript as user turn."""

from __future__ import annotations

import logging

from voxrelay.adapters.base import BaseResponder
from voxrelay.config.settings import DEFAULT_SYSTEM_PROMPT
from voxrelay.core.errors import GenerationError
from voxrelay.llm.base_client import BaseLLMClient
from voxrelay.llm.models import Message

logger = logging.getLogger(__name__)


class LLMResponder(BaseResponder):
    """Reply to a transcript through any BaseLLMClient.

    Args:
        llm_client: Completion client.
        system_prompt: Instruction sent with every request.
        max_tokens: Completion budget.
        temperature: Sampling temperature.
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> None:
        self._llm = llm_client
        self._system_prompt = system_prompt
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def invoke(self, transcript: str) -> str:
        try:
            response = await self._llm.complete(
                [Message(role="user", content=transcript)],
                system=self._system_prompt,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as exc:
            raise GenerationError("LLM processing failed", detail=str(exc)) from exc

        if response is None or response.content is None:
            raise GenerationError("LLM processing failed", detail="no completion content")

        logger.debug(
            "Generated %d chars (%d tokens, %dms)",
            len(response.content), response.total_tokens, response.latency_ms,
        )
        return response.content

    @property
    def provider_name(self) -> str:
        return self._llm.provider_name
