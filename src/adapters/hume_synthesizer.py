# src/adapters/hume_synthesizer.py — v1
"""Hume text-to-speech adapter over plain HTTP (httpx).

POST {base_url}/v0/tts with the ``X-Hume-Api-Key`` header; the first
generation's base64 ``audio`` field is the stage output.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from voxrelay.adapters.base import BaseSynthesizer
from voxrelay.core.errors import SynthesisError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.hume.ai"
_TTS_PATH = "/v0/tts"
_FAILED = "Text-to-speech synthesis failed"


class HumeSynthesizer(BaseSynthesizer):
    """Speech synthesis through Hume's TTS endpoint.

    Args:
        api_key: Hume API key.
        base_url: API root.
        voice_description: Optional acting/voice description for the utterance.
        audio_format: Requested container (wav, mp3, pcm).
        timeout_s: HTTP timeout for the single request.
        transport: Optional httpx transport (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        voice_description: str | None = None,
        audio_format: str = "wav",
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._voice_description = voice_description or None
        self._audio_format = audio_format
        self._timeout_s = timeout_s
        self._transport = transport

    def _build_payload(self, text: str) -> dict[str, Any]:
        utterance: dict[str, Any] = {"text": text}
        if self._voice_description:
            utterance["description"] = self._voice_description
        return {
            "utterances": [utterance],
            "format": {"type": self._audio_format},
            "num_generations": 1,
        }

    async def invoke(self, text: str) -> str:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    _TTS_PATH,
                    json=self._build_payload(text),
                    headers={"X-Hume-Api-Key": self._api_key},
                )
        except httpx.HTTPError as exc:
            raise SynthesisError(_FAILED, detail=f"Hume request error: {exc}") from exc

        if response.is_error:
            raise SynthesisError(
                _FAILED,
                detail=f"Hume API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise SynthesisError(_FAILED, detail=f"Malformed Hume response: {exc}") from exc

        generations = body.get("generations") if isinstance(body, dict) else None
        if not generations:
            raise SynthesisError(_FAILED, detail="No audio generated by TTS service")
        if not isinstance(generations, list) or not isinstance(generations[0], dict):
            raise SynthesisError(
                _FAILED,
                detail=f"Malformed Hume response: unexpected generations {generations!r:.200}",
            )

        first = generations[0]
        audio = first.get("audio")
        if not audio:
            raise SynthesisError(_FAILED, detail="No audio generated by TTS service")
        if not isinstance(audio, str):
            raise SynthesisError(
                _FAILED,
                detail=f"Malformed Hume response: audio is {type(audio).__name__}, not str",
            )

        logger.debug(
            "Synthesized %d chars (generation_id=%s)",
            len(text), first.get("generation_id") or first.get("generationId"),
        )
        return audio

    @property
    def provider_name(self) -> str:
        return "hume"
