# src/adapters/base.py — v1
"""Stage adapter interfaces.

Each adapter wraps one external capability behind ``invoke``: one
external call per invocation, stateless between calls, every failure
surfaced as the adapter's StageAdapterError subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from voxrelay.core.models import InputArtifact


class BaseTranscriber(ABC):
    """Audio → transcript text."""

    @abstractmethod
    async def invoke(self, artifact: InputArtifact) -> str:
        """Transcribe the artifact. Raises TranscriptionError."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""


class BaseResponder(ABC):
    """Transcript → generated response text."""

    @abstractmethod
    async def invoke(self, transcript: str) -> str:
        """Generate a reply. Raises GenerationError."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""


class BaseSynthesizer(ABC):
    """Response text → base64-encoded audio."""

    @abstractmethod
    async def invoke(self, text: str) -> str:
        """Synthesize speech. Raises SynthesisError."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""
