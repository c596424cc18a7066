# src/validation/output_validator.py — v1
"""Sanity check on intermediate text before paying for speech synthesis."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OutputCheck(BaseModel):
    """Which intermediate products passed the non-empty check."""

    transcript_valid: bool
    response_valid: bool
    errors: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.transcript_valid and self.response_valid


def check_outputs(transcript: str | None, response_text: str | None) -> OutputCheck:
    """Both texts must be non-empty once surrounding whitespace is trimmed."""
    errors: list[str] = []
    transcript_valid = bool(transcript and transcript.strip())
    response_valid = bool(response_text and response_text.strip())
    if not transcript_valid:
        errors.append("transcript is empty")
    if not response_valid:
        errors.append("generated response is empty")
    return OutputCheck(
        transcript_valid=transcript_valid,
        response_valid=response_valid,
        errors=errors,
    )
