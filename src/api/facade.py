# src/api/facade.py — v1
"""Public API facade — single entry point for one voice turn.

Usage:
    from voxrelay.api.facade import process_voice
    result = await process_voice(InputArtifact.from_path("question.wav"))
"""

from __future__ import annotations

import logging

from voxrelay.config.settings import Settings
from voxrelay.core.models import InputArtifact, PipelineResult
from voxrelay.pipeline.clock import Clock
from voxrelay.pipeline.orchestrator import PipelineDependencies, PipelineOutcome, VoicePipeline

logger = logging.getLogger(__name__)


def build_pipeline(
    settings: Settings | None = None,
    dependencies: PipelineDependencies | None = None,
    clock: Clock | None = None,
) -> VoicePipeline:
    """Configure a VoicePipeline from settings.

    Args:
        settings: Global settings. Loaded from .env if None.
        dependencies: Stage callables. Built from settings (Whisper, LLM,
            Hume) if None.
        clock: Duration source; monotonic if None.
    """
    settings = settings or Settings()
    if dependencies is None:
        from voxrelay.adapters.factory import build_dependencies

        dependencies = build_dependencies(settings)
    return VoicePipeline.from_settings(settings, dependencies, clock=clock)


async def process_voice(
    artifact: InputArtifact,
    settings: Settings | None = None,
    dependencies: PipelineDependencies | None = None,
    clock: Clock | None = None,
) -> PipelineResult:
    """Run one audio clip through the full pipeline.

    Returns:
        PipelineResult with the synthesized audio and stage metadata.

    Raises:
        PipelineError: On the first failing stage.
    """
    pipeline = build_pipeline(settings, dependencies, clock)
    return await pipeline.run(artifact)


async def process_voice_outcome(
    artifact: InputArtifact,
    settings: Settings | None = None,
    dependencies: PipelineDependencies | None = None,
    clock: Clock | None = None,
) -> PipelineOutcome:
    """Like ``process_voice`` but returns the tagged outcome instead of raising."""
    pipeline = build_pipeline(settings, dependencies, clock)
    return await pipeline.execute(pipeline.start(artifact))
