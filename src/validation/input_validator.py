# src/validation/input_validator.py — v1
"""Pre-flight checks on the uploaded audio before any external call.

Size is checked first, then format (declared media type OR filename
extension). Pure and deterministic: only the artifact's declared
metadata is inspected, never its bytes.
"""

from __future__ import annotations

from collections.abc import Iterable

from voxrelay.core.models import InputArtifact, ValidationDetails, ValidationOutcome

MAX_AUDIO_SIZE_BYTES = 25 * 1024 * 1024
SUPPORTED_FORMATS: tuple[str, ...] = ("wav", "mp3", "mpeg", "mp4", "m4a", "webm", "mpga")


def _normalize_media_type(media_type: str) -> str:
    """'Audio/WebM; codecs=opus' -> 'audio/webm'."""
    return media_type.split(";", 1)[0].strip().lower()


def _format_mb(size_bytes: int) -> str:
    mb = size_bytes / 1024 / 1024
    return f"{mb:g}MB"


def validate_artifact(
    artifact: InputArtifact,
    max_size_bytes: int = MAX_AUDIO_SIZE_BYTES,
    supported_formats: Iterable[str] = SUPPORTED_FORMATS,
) -> ValidationOutcome:
    """Check an artifact against size and format constraints.

    Args:
        artifact: Uploaded audio.
        max_size_bytes: Inclusive upper bound on the declared size.
        supported_formats: Accepted format names (``wav``, ``mp3``...).
            A media type ``audio/<format>`` or a ``.<format>`` extension
            both qualify.

    Returns:
        ValidationOutcome; ``valid`` is False with a reason and details
        when a check fails.
    """
    formats = [f.lower() for f in supported_formats]

    if artifact.size > max_size_bytes:
        return ValidationOutcome(
            valid=False,
            reason=f"File size exceeds maximum allowed size of {_format_mb(max_size_bytes)}",
            details=ValidationDetails(
                file_size=artifact.size,
                file_type=artifact.media_type,
                max_size_exceeded=True,
            ),
        )

    media_type = _normalize_media_type(artifact.media_type)
    valid_media_type = media_type in {f"audio/{fmt}" for fmt in formats}
    valid_extension = bool(artifact.extension) and artifact.extension in formats

    if not valid_media_type and not valid_extension:
        return ValidationOutcome(
            valid=False,
            reason=f"Unsupported file format. Supported formats: {', '.join(formats)}",
            details=ValidationDetails(
                file_size=artifact.size,
                file_type=artifact.media_type,
                unsupported_format=True,
            ),
        )

    return ValidationOutcome(
        valid=True,
        details=ValidationDetails(file_size=artifact.size, file_type=artifact.media_type),
    )
