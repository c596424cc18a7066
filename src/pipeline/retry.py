# src/pipeline/retry.py — v1
"""Bounded retry for stage adapter calls.

Fixed attempt count, no backoff, applied uniformly by the orchestrator
to every external call. The last error is re-raised unchanged once the
attempts are spent.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AttemptCounter:
    """Records how many attempts the last wrapped call used."""

    def __init__(self) -> None:
        self.attempts = 0


def retrying(
    max_attempts: int,
    label: str = "call",
    per_attempt_timeout_s: float | None = None,
    counter: AttemptCounter | None = None,
    should_continue: Callable[[], bool] | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator: retry an async callable up to ``max_attempts`` times.

    Args:
        max_attempts: Total attempts (1 = no retry).
        label: Name used in log messages.
        per_attempt_timeout_s: Optional ``asyncio.wait_for`` bound per attempt.
        counter: Optional sink for the number of attempts used.
        should_continue: Checked after each failed attempt; returning
            False re-raises immediately instead of retrying.

    Raises:
        ValueError: If ``max_attempts`` < 1.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 0
            while True:
                attempt += 1
                if counter is not None:
                    counter.attempts = attempt
                try:
                    if per_attempt_timeout_s is None:
                        return await fn(*args, **kwargs)
                    return await asyncio.wait_for(fn(*args, **kwargs), per_attempt_timeout_s)
                except Exception as exc:
                    if attempt >= max_attempts:
                        raise
                    if should_continue is not None and not should_continue():
                        logger.info("%s not retried: caller stopped the run", label)
                        raise
                    logger.warning(
                        "%s failed (attempt %d/%d), retrying: %s",
                        label, attempt, max_attempts, exc,
                    )

        return wrapper

    return decorator
