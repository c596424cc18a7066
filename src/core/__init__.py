# src/core/__init__.py — v1
"""Domain models, tagged stage results and the error taxonomy."""

from voxrelay.core.errors import PipelineError
from voxrelay.core.models import (
    DiagnosticRecord,
    FailureKind,
    InputArtifact,
    PipelineFailure,
    PipelineResult,
    StageId,
    StageOutcome,
)

__all__ = [
    "DiagnosticRecord",
    "FailureKind",
    "InputArtifact",
    "PipelineError",
    "PipelineFailure",
    "PipelineResult",
    "StageId",
    "StageOutcome",
]
