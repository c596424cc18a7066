# src/pipeline/clock.py — v1
"""Monotonic clock abstraction used for every stage duration."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of monotonic milliseconds."""

    def now_ms(self) -> int: ...


class MonotonicClock:
    """Wall-clock independent time from ``time.monotonic_ns``."""

    def now_ms(self) -> int:
        return time.monotonic_ns() // 1_000_000


class ManualClock:
    """Deterministic clock advanced explicitly (or by ``step_ms`` per read).

    Args:
        start_ms: Initial reading.
        step_ms: Amount added after every ``now_ms()`` call.
    """

    def __init__(self, start_ms: int = 0, step_ms: int = 0) -> None:
        self._now = start_ms
        self._step = step_ms

    def now_ms(self) -> int:
        value = self._now
        self._now += self._step
        return value

    def advance(self, ms: int) -> None:
        if ms < 0:
            raise ValueError("clock cannot move backwards")
        self._now += ms
