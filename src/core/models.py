# src/core/models.py — v1
"""Core domain models shared across the voice pipeline.

InputArtifact, StageId, StageOutcome, PipelineFailure, PipelineResult,
DiagnosticRecord and the validation result types.
"""

from __future__ import annotations

import mimetypes
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StageId(str, Enum):
    """Closed set of pipeline stages, in execution order."""

    VALIDATION = "validation"
    TRANSCRIPTION = "transcription"
    RESPONSE_GENERATION = "response-generation"
    SYNTHESIS = "synthesis"
    ASSEMBLY = "assembly"

    @classmethod
    def ordered(cls) -> list[StageId]:
        return list(cls)

    @property
    def position(self) -> int:
        return StageId.ordered().index(self)


class FailureKind(str, Enum):
    """Classification of a pipeline failure."""

    VALIDATION = "validation"
    STAGE_ADAPTER = "stage_adapter"
    OUTPUT_VALIDATION = "output_validation"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    UNCLASSIFIED = "unclassified"


class InputArtifact(BaseModel):
    """Uploaded audio clip. Read-only to the pipeline."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    media_type: str = ""
    name: str = ""
    size: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _fill_size(cls, values: Any) -> Any:
        """Default the declared size to the payload length."""
        if isinstance(values, dict) and values.get("size") is None:
            values = {**values, "size": len(values.get("data") or b"")}
        return values

    @property
    def extension(self) -> str:
        """Lowercased filename extension without the dot ('' if none)."""
        suffix = Path(self.name).suffix
        return suffix[1:].lower() if suffix else ""

    @classmethod
    def from_path(cls, path: Path | str, media_type: str | None = None) -> InputArtifact:
        """Read an audio file from disk, guessing the media type from its name."""
        path = Path(path)
        if media_type is None:
            guessed, _ = mimetypes.guess_type(path.name)
            media_type = guessed or ""
        data = path.read_bytes()
        return cls(data=data, media_type=media_type, name=path.name, size=len(data))


class ValidationDetails(BaseModel):
    """Structured payload describing the checked artifact."""

    file_size: int
    file_type: str
    max_size_exceeded: bool = False
    unsupported_format: bool = False


class ValidationOutcome(BaseModel):
    """Result of input validation. Never raised, always returned."""

    valid: bool
    reason: str | None = None
    details: ValidationDetails | None = None


class StageOutcome(BaseModel):
    """Audit record of one attempted stage."""

    model_config = ConfigDict(frozen=True)

    stage: StageId
    success: bool
    duration_ms: int = Field(ge=0)
    error: str | None = None
    attempts: int = 1


class PipelineFailure(BaseModel):
    """Stage-tagged failure value terminating a run."""

    model_config = ConfigDict(frozen=True)

    message: str
    stage: StageId
    kind: FailureKind = FailureKind.UNCLASSIFIED
    detail: str | None = None


class PipelineResult(BaseModel):
    """Final artifact plus metadata of a fully successful run."""

    model_config = ConfigDict(frozen=True)

    run_id: str
    audio_base64: str
    media_type: str = "audio/wav"
    transcript: str
    response_text: str
    transcript_length: int
    original_duration_s: int | None = None
    total_duration_ms: int = Field(ge=0)
    stages: tuple[StageOutcome, ...]


class DiagnosticRecord(BaseModel):
    """Externally reportable rendering of any failure."""

    model_config = ConfigDict(frozen=True)

    error: str
    stage: StageId | None = None
    details: str | None = None
    timestamp: datetime
    request_id: str

    def as_dict(self) -> dict[str, Any]:
        """JSON-ready dict with None fields dropped and ISO-8601 timestamp."""
        return self.model_dump(mode="json", exclude_none=True)
