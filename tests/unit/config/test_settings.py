# tests/unit/config/test_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from voxrelay.config.settings import (
    DEFAULT_SYSTEM_PROMPT,
    ConfigurationError,
    Settings,
    load_settings,
)


class TestSettingsDefaults:
    def test_default_audio_limits(self):
        s = Settings(_env_file=None)
        assert s.max_audio_size_mb == 25
        assert s.max_audio_size_bytes == 25 * 1024 * 1024

    def test_default_formats(self):
        s = Settings(_env_file=None)
        assert s.supported_audio_formats_list == [
            "wav", "mp3", "mpeg", "mp4", "m4a", "webm", "mpga",
        ]

    def test_default_llm(self):
        s = Settings(_env_file=None)
        assert s.llm_provider == "openai"
        assert s.llm_max_tokens == 1024
        assert s.llm_temperature == 0.7
        assert s.llm_system_prompt == DEFAULT_SYSTEM_PROMPT

    def test_default_orchestration(self):
        s = Settings(_env_file=None)
        assert s.stage_max_attempts == 1
        assert s.stage_timeout_s == 30.0
        assert s.run_timeout_s == 60.0

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_format == "json"
        assert s.log_file is None


class TestSettingsValidation:
    def test_zero_attempts_rejected(self):
        with pytest.raises(ValidationError, match="stage_max_attempts"):
            Settings(_env_file=None, stage_max_attempts=0)

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, stage_timeout_s=-1)

    def test_stage_timeout_above_run_budget(self):
        with pytest.raises(ConfigurationError, match="STAGE_TIMEOUT_S"):
            Settings(_env_file=None, stage_timeout_s=90, run_timeout_s=60)

    def test_zero_size_limit(self):
        with pytest.raises(ConfigurationError, match="MAX_AUDIO_SIZE_MB"):
            Settings(_env_file=None, max_audio_size_mb=0)

    def test_empty_format_list(self):
        with pytest.raises(ConfigurationError, match="SUPPORTED_AUDIO_FORMATS"):
            Settings(_env_file=None, supported_audio_formats=" , ")

    def test_unknown_tts_format(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, tts_format="flac")


class TestSettingsHelpers:
    def test_format_list_normalized(self):
        s = Settings(_env_file=None, supported_audio_formats=" .WAV, mp3 ,,Ogg")
        assert s.supported_audio_formats_list == ["wav", "mp3", "ogg"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STAGE_MAX_ATTEMPTS", "3")
        monkeypatch.setenv("LLM_PROVIDER", "anthropic")
        s = Settings(_env_file=None)
        assert s.stage_max_attempts == 3
        assert s.llm_provider == "anthropic"


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, max_audio_size_mb=10)
        assert s.max_audio_size_bytes == 10 * 1024 * 1024
