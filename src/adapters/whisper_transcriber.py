# src/adapters/whisper_transcriber.py — v1
"""OpenAI Whisper transcription adapter.

Uses the openai SDK's audio transcription endpoint. The SDK client is
created lazily so the adapter can be constructed without credentials.
"""

from __future__ import annotations

import logging
from typing import Any

from voxrelay.adapters.base import BaseTranscriber
from voxrelay.core.errors import TranscriptionError
from voxrelay.core.models import InputArtifact

logger = logging.getLogger(__name__)


class WhisperTranscriber(BaseTranscriber):
    """Speech-to-text through ``client.audio.transcriptions.create``."""

    def __init__(
        self,
        model: str = "whisper-1",
        api_key: str = "",
        language: str | None = None,
        client: Any = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._language = language or None
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def invoke(self, artifact: InputArtifact) -> str:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "file": (artifact.name or "audio", artifact.data, artifact.media_type or None),
            "response_format": "json",
        }
        if self._language:
            kwargs["language"] = self._language

        try:
            response = await self._get_client().audio.transcriptions.create(**kwargs)
        except Exception as exc:
            raise TranscriptionError("Whisper transcription failed", detail=str(exc)) from exc

        text = response.get("text") if isinstance(response, dict) else getattr(response, "text", None)
        if not isinstance(text, str):
            raise TranscriptionError(
                "Whisper transcription failed",
                detail="provider response has no text field",
            )

        logger.debug("Transcribed %d bytes into %d chars", artifact.size, len(text))
        return text

    @property
    def provider_name(self) -> str:
        return "openai-whisper"
