# src/adapters/factory.py — v1
"""Build the three stage dependencies from Settings."""

from __future__ import annotations

import logging

from voxrelay.adapters.hume_synthesizer import HumeSynthesizer
from voxrelay.adapters.llm_responder import LLMResponder
from voxrelay.adapters.whisper_transcriber import WhisperTranscriber
from voxrelay.config.settings import Settings
from voxrelay.llm.base_client import BaseLLMClient
from voxrelay.llm.client_factory import create_llm_client_from_settings
from voxrelay.pipeline.orchestrator import PipelineDependencies

logger = logging.getLogger(__name__)


def build_dependencies(
    settings: Settings,
    llm_client: BaseLLMClient | None = None,
) -> PipelineDependencies:
    """Wire Whisper → LLM → Hume adapters from configuration.

    Args:
        settings: Application settings.
        llm_client: Pre-built completion client; created from
            ``LLM_PROVIDER``/``LLM_MODEL`` when None.
    """
    transcriber = WhisperTranscriber(
        model=settings.transcription_model,
        api_key=settings.openai_api_key,
        language=settings.transcription_language,
    )
    responder = LLMResponder(
        llm_client or create_llm_client_from_settings(settings),
        system_prompt=settings.llm_system_prompt,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
    )
    synthesizer = HumeSynthesizer(
        api_key=settings.hume_api_key,
        base_url=settings.hume_base_url,
        voice_description=settings.tts_voice_description,
        audio_format=settings.tts_format,
        timeout_s=settings.stage_timeout_s,
    )
    logger.debug(
        "Stage adapters: %s → %s → %s",
        transcriber.provider_name, responder.provider_name, synthesizer.provider_name,
    )
    return PipelineDependencies(
        transcribe=transcriber.invoke,
        generate=responder.invoke,
        synthesize=synthesizer.invoke,
    )
