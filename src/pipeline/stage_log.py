# src/pipeline/stage_log.py — v1
"""Per-run stage outcome log — the audit trail of one pipeline run."""

from __future__ import annotations

import logging

from voxrelay.core.models import StageId, StageOutcome
from voxrelay.pipeline.clock import Clock

logger = logging.getLogger(__name__)


class StageLog:
    """Accumulates one StageOutcome per attempted stage, in order."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._outcomes: list[StageOutcome] = []
        self._stage_started_ms: int | None = None

    def start(self) -> int:
        """Mark the start of a stage's work; returns the clock reading."""
        self._stage_started_ms = self._clock.now_ms()
        return self._stage_started_ms

    @property
    def in_flight(self) -> bool:
        """True between ``start()`` and the matching ``record()``."""
        return self._stage_started_ms is not None

    def elapsed_ms(self) -> int:
        """Milliseconds since the last ``start()`` (0 if none)."""
        if self._stage_started_ms is None:
            return 0
        return max(0, self._clock.now_ms() - self._stage_started_ms)

    def record(
        self,
        stage: StageId,
        success: bool,
        duration_ms: int | None = None,
        error: str | None = None,
        attempts: int = 1,
    ) -> StageOutcome:
        """Append the outcome of ``stage``; duration defaults to time since ``start()``."""
        if duration_ms is None:
            duration_ms = self.elapsed_ms()
        outcome = StageOutcome(
            stage=stage,
            success=success,
            duration_ms=max(0, duration_ms),
            error=error,
            attempts=attempts,
        )
        self._outcomes.append(outcome)
        self._stage_started_ms = None
        log = logger.info if success else logger.warning
        log(
            "Stage '%s' %s in %dms",
            stage.value, "succeeded" if success else "failed", outcome.duration_ms,
            extra={"data": outcome.model_dump(mode="json", exclude_none=True)},
        )
        return outcome

    @property
    def outcomes(self) -> tuple[StageOutcome, ...]:
        return tuple(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)
