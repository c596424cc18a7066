# src/core/results.py — v1
"""Tagged stage results: StageOk carries a value, StageFailed a failure.

Each pipeline step returns one of these instead of raising, so callers
branch on the variant rather than on exception identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from voxrelay.core.models import PipelineFailure

T = TypeVar("T")


@dataclass(frozen=True)
class StageOk(Generic[T]):
    """Successful stage with its typed output."""

    value: T
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class StageFailed:
    """Failed stage carrying the tagged failure."""

    failure: PipelineFailure
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return False


StageResult = Union[StageOk[T], StageFailed]
