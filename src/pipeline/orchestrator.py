# src/pipeline/orchestrator.py — v1
"""Voice pipeline orchestrator.

Drives one uploaded clip through the fixed stage sequence:

  1. Validation           (local, pure)
  2. Transcription        (external call)
  3. Response generation  (external call)
     Output check         (local; failures are tagged 'assembly')
  4. Synthesis            (external call)
  5. Assembly             (local metadata)

Every step returns a tagged StageOk / StageFailed value and appends
exactly one StageOutcome to the run's log. The first failure ends the
run. Runs share no mutable state; each PipelineRun owns its log, its
in-flight stage marker and its cancellation flag.
"""

from __future__ import annotations

import asyncio
import logging
import math
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from voxrelay.core.errors import PipelineError, StageAdapterError, describe_exception
from voxrelay.core.models import (
    FailureKind,
    InputArtifact,
    PipelineFailure,
    PipelineResult,
    StageId,
    StageOutcome,
    ValidationOutcome,
)
from voxrelay.core.results import StageFailed, StageOk, StageResult
from voxrelay.logging.context import clear_context, set_run_context, set_stage_context
from voxrelay.pipeline.clock import Clock, MonotonicClock
from voxrelay.pipeline.retry import AttemptCounter, retrying
from voxrelay.pipeline.stage_log import StageLog
from voxrelay.validation.input_validator import validate_artifact
from voxrelay.validation.output_validator import check_outputs

if TYPE_CHECKING:
    from voxrelay.config.settings import Settings

logger = logging.getLogger(__name__)

# Bytes per second assumed when estimating the clip duration from its size.
BYTES_PER_SECOND_ESTIMATE = 16_000

_STAGE_FAILURE_MESSAGES: dict[StageId, str] = {
    StageId.TRANSCRIPTION: "Transcription failed",
    StageId.RESPONSE_GENERATION: "LLM processing failed",
    StageId.SYNTHESIS: "Text-to-speech synthesis failed",
}

Transcribe = Callable[[InputArtifact], Awaitable[str]]
Generate = Callable[[str], Awaitable[str]]
Synthesize = Callable[[str], Awaitable[str]]
Validator = Callable[[InputArtifact], ValidationOutcome]


@dataclass(frozen=True)
class PipelineDependencies:
    """The three external capabilities, as plain async callables."""

    transcribe: Transcribe
    generate: Generate
    synthesize: Synthesize


@dataclass(frozen=True)
class PipelineOutcome:
    """Either a result or a failure, plus the stage log of the run."""

    stages: tuple[StageOutcome, ...]
    result: PipelineResult | None = None
    failure: PipelineFailure | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    def unwrap(self) -> PipelineResult:
        """Return the result or raise PipelineError carrying the failure."""
        if self.result is not None:
            return self.result
        if self.failure is None:
            raise RuntimeError("PipelineOutcome has neither a result nor a failure")
        raise PipelineError(self.failure, self.stages)


class PipelineRun:
    """Per-run state: stage log, in-flight stage, cancellation flag."""

    def __init__(self, artifact: InputArtifact, clock: Clock) -> None:
        self.run_id = f"run_{uuid.uuid4().hex[:12]}"
        self.artifact = artifact
        self.log = StageLog(clock)
        self.current_stage: StageId | None = None
        self.started_ms: int | None = None
        self._cancelled = False

    def cancel(self) -> None:
        """Stop issuing stage calls; an in-flight call's result is discarded."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def stages(self) -> tuple[StageOutcome, ...]:
        return self.log.outcomes


class VoicePipeline:
    """Sequential validate → transcribe → respond → synthesize → assemble.

    Args:
        dependencies: External stage callables.
        clock: Duration source (monotonic by default).
        max_attempts: Attempts per external call (1 = no retry).
        stage_timeout_s: Optional bound on each external call attempt.
        run_timeout_s: Optional wall-clock budget for the whole run.
        validator: Input validator (size/format limits baked in).
    """

    def __init__(
        self,
        dependencies: PipelineDependencies,
        clock: Clock | None = None,
        max_attempts: int = 1,
        stage_timeout_s: float | None = None,
        run_timeout_s: float | None = None,
        validator: Validator = validate_artifact,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._deps = dependencies
        self._clock = clock or MonotonicClock()
        self._max_attempts = max_attempts
        self._stage_timeout_s = stage_timeout_s
        self._run_timeout_s = run_timeout_s
        self._validator = validator

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        dependencies: PipelineDependencies,
        clock: Clock | None = None,
    ) -> VoicePipeline:
        """Configure retry, timeouts and validation limits from Settings."""
        formats = tuple(settings.supported_audio_formats_list)
        max_size = settings.max_audio_size_bytes

        def validator(artifact: InputArtifact) -> ValidationOutcome:
            return validate_artifact(artifact, max_size_bytes=max_size, supported_formats=formats)

        return cls(
            dependencies,
            clock=clock,
            max_attempts=settings.stage_max_attempts,
            stage_timeout_s=settings.stage_timeout_s,
            run_timeout_s=settings.run_timeout_s,
            validator=validator,
        )

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def start(self, artifact: InputArtifact) -> PipelineRun:
        """Create the run handle (exposes in-flight stage and cancel())."""
        return PipelineRun(artifact, self._clock)

    async def run(self, artifact: InputArtifact) -> PipelineResult:
        """Run the pipeline; raises PipelineError on the first failing stage."""
        outcome = await self.execute(self.start(artifact))
        return outcome.unwrap()

    async def execute(self, run: PipelineRun) -> PipelineOutcome:
        """Drive ``run`` to completion and return the tagged outcome.

        Never raises for stage failures. A caller cancelling the
        surrounding task still propagates ``asyncio.CancelledError``.
        """
        set_run_context(run.run_id)
        logger.info(
            "Pipeline run started: name=%r, type=%r, size=%d",
            run.artifact.name, run.artifact.media_type, run.artifact.size,
        )
        try:
            if self._run_timeout_s is None:
                outcome = await self._drive(run)
            else:
                outcome = await asyncio.wait_for(self._drive(run), self._run_timeout_s)
        except asyncio.TimeoutError:
            outcome = self._abandon_on_timeout(run)
        finally:
            clear_context()
        return outcome

    # ------------------------------------------------------------------
    # Stage sequence
    # ------------------------------------------------------------------

    async def _drive(self, run: PipelineRun) -> PipelineOutcome:
        run.started_ms = self._clock.now_ms()

        validated = self._validate(run)
        if isinstance(validated, StageFailed):
            return self._failed(run, validated.failure)

        transcribed = await self._call_stage(run, StageId.TRANSCRIPTION, self._deps.transcribe, run.artifact)
        if isinstance(transcribed, StageFailed):
            return self._failed(run, transcribed.failure)
        transcript: str = transcribed.value

        generated = await self._call_stage(run, StageId.RESPONSE_GENERATION, self._deps.generate, transcript)
        if isinstance(generated, StageFailed):
            return self._failed(run, generated.failure)
        response_text: str = generated.value

        checked = self._check_outputs(run, transcript, response_text)
        if isinstance(checked, StageFailed):
            return self._failed(run, checked.failure)

        synthesized = await self._call_stage(run, StageId.SYNTHESIS, self._deps.synthesize, response_text)
        if isinstance(synthesized, StageFailed):
            return self._failed(run, synthesized.failure)

        assembled = self._assemble(run, transcript, response_text, synthesized.value)
        if isinstance(assembled, StageFailed):
            return self._failed(run, assembled.failure)

        result = assembled.value
        logger.info(
            "Pipeline run complete: %d stages in %dms, transcript=%d chars",
            len(result.stages), result.total_duration_ms, result.transcript_length,
        )
        return PipelineOutcome(stages=result.stages, result=result)

    def _enter(self, run: PipelineRun, stage: StageId) -> None:
        run.current_stage = stage
        set_stage_context(stage.value)
        run.log.start()

    def _validate(self, run: PipelineRun) -> StageResult[ValidationOutcome]:
        self._enter(run, StageId.VALIDATION)
        try:
            validation = self._validator(run.artifact)
        except Exception as exc:
            failure = PipelineFailure(
                message="Validation failed",
                stage=StageId.VALIDATION,
                kind=FailureKind.UNCLASSIFIED,
                detail=describe_exception(exc),
            )
            run.log.record(StageId.VALIDATION, False, error=failure.detail)
            return StageFailed(failure)

        if not validation.valid:
            reason = validation.reason or "Validation failed"
            run.log.record(StageId.VALIDATION, False, error=reason)
            return StageFailed(
                PipelineFailure(
                    message=reason,
                    stage=StageId.VALIDATION,
                    kind=FailureKind.VALIDATION,
                    detail=validation.details.model_dump_json() if validation.details else None,
                )
            )
        if run.cancelled:
            return self._discard_cancelled(run, StageId.VALIDATION)
        run.log.record(StageId.VALIDATION, True)
        return StageOk(validation)

    async def _call_stage(
        self,
        run: PipelineRun,
        stage: StageId,
        call: Callable[[Any], Awaitable[Any]],
        arg: Any,
    ) -> StageResult[Any]:
        """Invoke one external dependency under the retry/timeout policy."""
        self._enter(run, stage)
        counter = AttemptCounter()
        wrapped = retrying(
            self._max_attempts,
            label=f"Stage '{stage.value}'",
            per_attempt_timeout_s=self._stage_timeout_s,
            counter=counter,
            should_continue=lambda: not run.cancelled,
        )(call)

        try:
            value = await wrapped(arg)
        except Exception as exc:
            if run.cancelled:
                return self._discard_cancelled(run, stage, attempts=counter.attempts)
            failure = self._classify(stage, exc, counter.attempts)
        else:
            if run.cancelled:
                return self._discard_cancelled(run, stage, attempts=counter.attempts)
            run.log.record(stage, True, attempts=counter.attempts)
            return StageOk(value, attempts=counter.attempts)

        run.log.record(
            stage, False, error=failure.detail or failure.message, attempts=counter.attempts,
        )
        return StageFailed(failure, attempts=counter.attempts)

    def _classify(self, stage: StageId, exc: Exception, attempts: int) -> PipelineFailure:
        """Map an exception from a stage call onto a stage-tagged failure."""
        # TIMEOUT only when a stage bound is set; otherwise an adapter failure.
        if isinstance(exc, asyncio.TimeoutError) and self._stage_timeout_s is not None:
            return PipelineFailure(
                message=f"Stage '{stage.value}' timed out",
                stage=stage,
                kind=FailureKind.TIMEOUT,
                detail=f"no response within {self._stage_timeout_s:g}s ({attempts} attempt(s))",
            )
        if isinstance(exc, StageAdapterError):
            return PipelineFailure(
                message=exc.message,
                stage=stage,
                kind=FailureKind.STAGE_ADAPTER,
                detail=exc.detail,
            )
        return PipelineFailure(
            message=_STAGE_FAILURE_MESSAGES.get(stage, f"Stage '{stage.value}' failed"),
            stage=stage,
            kind=FailureKind.STAGE_ADAPTER,
            detail=describe_exception(exc),
        )

    def _check_outputs(self, run: PipelineRun, transcript: str, response_text: str) -> StageResult[None]:
        """Non-empty transcript and response; a pass records nothing."""
        run.current_stage = StageId.ASSEMBLY
        set_stage_context(StageId.ASSEMBLY.value)
        check = check_outputs(transcript, response_text)
        if check.passed:
            return StageOk(None)
        run.log.record(StageId.ASSEMBLY, False, duration_ms=0, error="Invalid pipeline output")
        return StageFailed(
            PipelineFailure(
                message="output validation failed",
                stage=StageId.ASSEMBLY,
                kind=FailureKind.OUTPUT_VALIDATION,
                detail="; ".join(check.errors),
            )
        )

    def _assemble(
        self,
        run: PipelineRun,
        transcript: str,
        response_text: str,
        audio_base64: str,
    ) -> StageResult[PipelineResult]:
        self._enter(run, StageId.ASSEMBLY)
        try:
            size = run.artifact.size
            original_duration_s = math.ceil(size / BYTES_PER_SECOND_ESTIMATE) if size > 0 else None
            transcript_length = len(transcript)
        except Exception as exc:
            failure = PipelineFailure(
                message="Unknown pipeline error",
                stage=StageId.ASSEMBLY,
                kind=FailureKind.UNCLASSIFIED,
                detail=describe_exception(exc),
            )
            run.log.record(StageId.ASSEMBLY, False, error=failure.detail)
            return StageFailed(failure)

        run.log.record(StageId.ASSEMBLY, True)
        started = run.started_ms if run.started_ms is not None else self._clock.now_ms()
        return StageOk(
            PipelineResult(
                run_id=run.run_id,
                audio_base64=audio_base64,
                transcript=transcript,
                response_text=response_text,
                transcript_length=transcript_length,
                original_duration_s=original_duration_s,
                total_duration_ms=max(0, self._clock.now_ms() - started),
                stages=run.log.outcomes,
            )
        )

    # ------------------------------------------------------------------
    # Termination helpers
    # ------------------------------------------------------------------

    def _discard_cancelled(self, run: PipelineRun, stage: StageId, attempts: int = 1) -> StageFailed:
        run.log.record(stage, False, error="run cancelled", attempts=attempts)
        return StageFailed(
            PipelineFailure(
                message="Pipeline run cancelled",
                stage=stage,
                kind=FailureKind.CANCELLED,
                detail=f"result of stage '{stage.value}' discarded",
            ),
            attempts=attempts,
        )

    def _abandon_on_timeout(self, run: PipelineRun) -> PipelineOutcome:
        stage = run.current_stage or StageId.VALIDATION
        failure = PipelineFailure(
            message="Pipeline run timed out",
            stage=stage,
            kind=FailureKind.TIMEOUT,
            detail=f"run budget of {self._run_timeout_s:g}s exceeded during '{stage.value}'",
        )
        if run.log.in_flight:
            run.log.record(stage, False, error=failure.detail)
        return self._failed(run, failure)

    def _failed(self, run: PipelineRun, failure: PipelineFailure) -> PipelineOutcome:
        logger.error(
            "Pipeline run failed at '%s' (%s): %s",
            failure.stage.value, failure.kind.value, failure.message,
            extra={"data": {"detail": failure.detail, "stages": len(run.log)}},
        )
        return PipelineOutcome(stages=run.log.outcomes, failure=failure)


async def run_pipeline(
    artifact: InputArtifact,
    dependencies: PipelineDependencies,
    clock: Clock | None = None,
    max_attempts: int = 1,
    stage_timeout_s: float | None = None,
    run_timeout_s: float | None = None,
) -> PipelineResult:
    """Run one artifact through the pipeline.

    Raises:
        PipelineError: On the first failing stage; ``.failure`` carries the
            stage-tagged PipelineFailure and ``.stages`` the outcome log.
    """
    pipeline = VoicePipeline(
        dependencies,
        clock=clock,
        max_attempts=max_attempts,
        stage_timeout_s=stage_timeout_s,
        run_timeout_s=run_timeout_s,
    )
    return await pipeline.run(artifact)
