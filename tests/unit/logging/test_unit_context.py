# tests/unit/logging/test_unit_context.py — v1
"""Tests for logging/context.py — run/stage context variables."""

from __future__ import annotations

import asyncio

import pytest

from voxrelay.logging.context import (
    LogContext,
    clear_context,
    get_context,
    set_run_context,
    set_stage_context,
)


class TestLogContext:
    def test_empty_by_default(self):
        assert get_context().as_dict() == {}

    def test_run_context_resets_stage(self):
        set_stage_context("synthesis")
        set_run_context("run_1")
        ctx = get_context()
        assert ctx.run_id == "run_1"
        assert ctx.stage is None

    def test_stage_context(self):
        set_run_context("run_1")
        set_stage_context("validation")
        assert get_context().as_dict() == {"run_id": "run_1", "stage": "validation"}

    def test_clear(self):
        set_run_context("run_1")
        clear_context()
        assert get_context() == LogContext()

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self):
        async def worker(run_id: str) -> str | None:
            set_run_context(run_id)
            await asyncio.sleep(0)
            return get_context().run_id

        results = await asyncio.gather(worker("a"), worker("b"))
        assert results == ["a", "b"]
