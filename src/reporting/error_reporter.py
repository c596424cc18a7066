# src/reporting/error_reporter.py — v1
"""Convert any failure into a DiagnosticRecord.

Pure transformation: stamps a fresh UTC timestamp and a process-unique
correlation id, never re-raises and never changes control flow.
"""

from __future__ import annotations

import itertools
import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone

from voxrelay.core.errors import PipelineError, StageAdapterError, describe_exception
from voxrelay.core.models import DiagnosticRecord, PipelineFailure, StageId

logger = logging.getLogger(__name__)

# Per-process sequence; keeps ids unique within the process.
_sequence = itertools.count(1)

_stamp_lock = threading.Lock()
_last_stamp: datetime | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _fresh_timestamp() -> datetime:
    """UTC now, strictly later than the previous stamp issued in this process."""
    global _last_stamp
    with _stamp_lock:
        stamp = _utcnow()
        if _last_stamp is not None and stamp <= _last_stamp:
            stamp = _last_stamp + timedelta(microseconds=1)
        _last_stamp = stamp
        return stamp


def generate_request_id() -> str:
    """Correlation id: ``req_<epoch-ms>_<sequence>_<random>``."""
    now_ms = int(_utcnow().timestamp() * 1000)
    return f"req_{now_ms}_{next(_sequence)}_{uuid.uuid4().hex[:9]}"


def report_failure(
    error: BaseException | PipelineFailure,
    fallback_stage: StageId | str | None = None,
) -> DiagnosticRecord:
    """Build the externally reportable record for ``error``.

    Args:
        error: A PipelineError, a bare PipelineFailure value, or any exception.
        fallback_stage: Stage to attribute unclassified errors to.

    Returns:
        DiagnosticRecord with the failure's own stage/detail when it is a
        pipeline failure, otherwise ``fallback_stage`` and a one-line
        description of the exception.
    """
    failure: PipelineFailure | None = None
    if isinstance(error, PipelineFailure):
        failure = error
    elif isinstance(error, PipelineError):
        failure = error.failure

    if failure is not None:
        message, stage, details = failure.message, failure.stage, failure.detail
    else:
        message = str(error) or "Unknown error occurred"
        stage = _coerce_stage(fallback_stage)
        if isinstance(error, StageAdapterError):
            message = error.message
            details = error.detail or describe_exception(error)
        else:
            details = describe_exception(error)

    record = DiagnosticRecord(
        error=message,
        stage=stage,
        details=details,
        timestamp=_fresh_timestamp(),
        request_id=generate_request_id(),
    )
    logger.debug(
        "Diagnostic %s: stage=%s error=%s",
        record.request_id, stage.value if stage else None, message,
    )
    return record


def _coerce_stage(stage: StageId | str | None) -> StageId | None:
    """Accept a StageId or its string value; unknown names map to None."""
    if stage is None or isinstance(stage, StageId):
        return stage
    try:
        return StageId(stage)
    except ValueError:
        return None
