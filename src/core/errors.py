# src/core/errors.py — v1
"""Exception taxonomy for the voice pipeline.

Adapters raise StageAdapterError subclasses; LLM clients raise
LLMClientError. The orchestrator never classifies by exception type:
it converts any exception into a PipelineFailure value tagged with the
stage it was running, and only the public entry point raises
PipelineError.
"""

from __future__ import annotations

import traceback

from voxrelay.core.models import FailureKind, PipelineFailure, StageId, StageOutcome


class PipelineError(Exception):
    """A run terminated with a stage-tagged failure."""

    def __init__(
        self,
        failure: PipelineFailure,
        stages: tuple[StageOutcome, ...] = (),
    ) -> None:
        self.failure = failure
        self.stages = stages
        super().__init__(failure.message)

    @property
    def stage(self) -> StageId:
        return self.failure.stage

    @property
    def detail(self) -> str | None:
        return self.failure.detail

    @property
    def kind(self) -> FailureKind:
        return self.failure.kind


class StageAdapterError(Exception):
    """An external dependency call failed.

    Args:
        message: Short description of what failed.
        detail: Underlying provider/transport message.
        status_code: HTTP status returned by the provider, if any.
    """

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message
        self.detail = detail
        self.status_code = status_code
        super().__init__(message if detail is None else f"{message}: {detail}")


class TranscriptionError(StageAdapterError):
    """Speech-to-text call failed or returned no text."""


class GenerationError(StageAdapterError):
    """Language-model call failed or returned no completion."""


class SynthesisError(StageAdapterError):
    """Text-to-speech call failed or returned no audio."""


class LLMClientError(Exception):
    """LLM provider returned an unusable response."""


def describe_exception(exc: BaseException) -> str:
    """One-line 'TypeName: message' summary of an exception."""
    lines = traceback.format_exception_only(type(exc), exc)
    return lines[-1].strip() if lines else type(exc).__name__
