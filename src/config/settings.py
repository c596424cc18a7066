# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for provider credentials, audio limits,
orchestration timeouts and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant that processes user speech input "
    "and provides thoughtful responses."
)


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Audio limits ===
    max_audio_size_mb: int = 25
    supported_audio_formats: str = "wav,mp3,mpeg,mp4,m4a,webm,mpga"

    # === Transcription ===
    transcription_model: str = "whisper-1"
    transcription_language: str = ""

    # === Response generation ===
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_base_url: str = ""
    llm_max_tokens: int = 1024
    llm_temperature: float = 0.7
    llm_system_prompt: str = DEFAULT_SYSTEM_PROMPT

    # === Speech synthesis ===
    hume_api_key: str = ""
    hume_base_url: str = "https://api.hume.ai"
    tts_voice_description: str = ""
    tts_format: Literal["wav", "mp3", "pcm"] = "wav"

    # Provider API keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # === Orchestration ===
    stage_max_attempts: int = 1
    stage_timeout_s: float = 30.0
    run_timeout_s: float = 60.0

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("stage_max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("stage_max_attempts must be >= 1")
        return v

    @field_validator("stage_timeout_s", "run_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.max_audio_size_mb <= 0:
            errors.append("MAX_AUDIO_SIZE_MB must be > 0")

        if not self.supported_audio_formats_list:
            errors.append("SUPPORTED_AUDIO_FORMATS must list at least one format")

        if self.stage_timeout_s > self.run_timeout_s:
            errors.append("STAGE_TIMEOUT_S must be <= RUN_TIMEOUT_S")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def max_audio_size_bytes(self) -> int:
        return self.max_audio_size_mb * 1024 * 1024

    @property
    def supported_audio_formats_list(self) -> list[str]:
        """Parse comma-separated audio formats (lowercased)."""
        return [
            f.strip().lower().lstrip(".")
            for f in self.supported_audio_formats.split(",")
            if f.strip()
        ]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-request config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
