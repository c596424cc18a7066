# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides sample artifacts, a deterministic clock and stub stage
dependencies. All I/O is mocked.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from voxrelay.core.models import InputArtifact
from voxrelay.logging.context import clear_context
from voxrelay.pipeline.clock import ManualClock
from voxrelay.pipeline.orchestrator import PipelineDependencies

SAMPLE_AUDIO_B64 = "UklGRiQAAABXQVZFZm10IBAAAAABAAEA"


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


# === FIXTURES: Sample data ===


@pytest.fixture
def wav_artifact() -> InputArtifact:
    """1 KB WAV upload."""
    return InputArtifact(data=b"\x00" * 1024, media_type="audio/wav", name="question.wav")


@pytest.fixture
def oversize_artifact() -> InputArtifact:
    """30 MiB upload: declared size only, payload kept small."""
    return InputArtifact(
        data=b"\x00" * 16,
        media_type="audio/wav",
        name="long.wav",
        size=30 * 1024 * 1024,
    )


@pytest.fixture
def manual_clock() -> ManualClock:
    """Clock advancing 5 ms per reading."""
    return ManualClock(start_ms=1_000, step_ms=5)


# === FIXTURES: Stub stage dependencies ===


@pytest.fixture
def transcribe() -> AsyncMock:
    return AsyncMock(return_value="hello world")


@pytest.fixture
def generate() -> AsyncMock:
    return AsyncMock(return_value="Hi there!")


@pytest.fixture
def synthesize() -> AsyncMock:
    return AsyncMock(return_value=SAMPLE_AUDIO_B64)


@pytest.fixture
def dependencies(
    transcribe: AsyncMock, generate: AsyncMock, synthesize: AsyncMock
) -> PipelineDependencies:
    """Happy-path dependencies: 'hello world' → 'Hi there!' → audio."""
    return PipelineDependencies(
        transcribe=transcribe,
        generate=generate,
        synthesize=synthesize,
    )
