# tests/unit/api/test_unit_facade.py — v1
"""Tests for api.facade — public entry point."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from voxrelay.api.facade import build_pipeline, process_voice, process_voice_outcome
from voxrelay.config.settings import Settings
from voxrelay.core.errors import PipelineError
from voxrelay.core.models import FailureKind, StageId
from voxrelay.pipeline.orchestrator import VoicePipeline


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, stage_timeout_s=5, run_timeout_s=10)


class TestBuildPipeline:
    def test_uses_given_dependencies(self, settings, dependencies):
        pipeline = build_pipeline(settings, dependencies)
        assert isinstance(pipeline, VoicePipeline)

    def test_builds_dependencies_from_settings(self, settings, dependencies):
        with patch(
            "voxrelay.adapters.factory.build_dependencies", return_value=dependencies,
        ) as factory:
            build_pipeline(settings)
        factory.assert_called_once_with(settings)


class TestProcessVoice:
    @pytest.mark.asyncio
    async def test_success(self, settings, dependencies, wav_artifact, manual_clock):
        result = await process_voice(wav_artifact, settings, dependencies, clock=manual_clock)
        assert result.transcript_length == 11
        assert len(result.stages) == 5

    @pytest.mark.asyncio
    async def test_raises_on_failure(self, settings, dependencies, oversize_artifact):
        with pytest.raises(PipelineError) as exc_info:
            await process_voice(oversize_artifact, settings, dependencies)
        assert exc_info.value.stage == StageId.VALIDATION

    @pytest.mark.asyncio
    async def test_outcome_variant_does_not_raise(
        self, settings, dependencies, wav_artifact, generate
    ):
        generate.side_effect = RuntimeError("quota exceeded")
        outcome = await process_voice_outcome(wav_artifact, settings, dependencies)
        assert outcome.ok is False
        assert outcome.failure.stage == StageId.RESPONSE_GENERATION
        assert outcome.failure.kind == FailureKind.STAGE_ADAPTER
