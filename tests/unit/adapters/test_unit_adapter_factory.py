# tests/unit/adapters/test_unit_adapter_factory.py — v1
"""Tests for adapters/factory.py — dependency wiring from Settings."""

from __future__ import annotations

from unittest.mock import MagicMock

from voxrelay.adapters.factory import build_dependencies
from voxrelay.adapters.hume_synthesizer import HumeSynthesizer
from voxrelay.adapters.llm_responder import LLMResponder
from voxrelay.adapters.whisper_transcriber import WhisperTranscriber
from voxrelay.config.settings import Settings
from voxrelay.llm.adapters.openai_adapter import OpenAIAdapter


class TestBuildDependencies:
    def test_wires_adapters(self):
        settings = Settings(
            _env_file=None,
            openai_api_key="sk-test",
            hume_api_key="hume-key",
            transcription_language="en",
            stage_timeout_s=12,
        )
        deps = build_dependencies(settings)

        transcriber = deps.transcribe.__self__
        responder = deps.generate.__self__
        synthesizer = deps.synthesize.__self__
        assert isinstance(transcriber, WhisperTranscriber)
        assert isinstance(responder, LLMResponder)
        assert isinstance(synthesizer, HumeSynthesizer)
        assert transcriber._language == "en"
        assert isinstance(responder._llm, OpenAIAdapter)
        assert synthesizer._timeout_s == 12

    def test_injected_llm_client(self):
        llm = MagicMock()
        deps = build_dependencies(Settings(_env_file=None), llm_client=llm)
        assert deps.generate.__self__._llm is llm
