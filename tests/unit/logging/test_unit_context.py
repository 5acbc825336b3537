# tests/unit/logging/test_unit_context.py - v1
"""Tests for logging/context.py."""

from __future__ import annotations

import asyncio

import pytest

from sonar.logging.context import (
    LogContext,
    clear_context,
    get_context,
    set_build_context,
    set_state,
)


class TestLogContext:
    def teardown_method(self):
        clear_context()

    def test_empty(self):
        clear_context()
        assert get_context().as_dict() == {}

    def test_set_and_clear(self):
        set_build_context("bartik", "k1")
        set_state("validating")
        assert get_context() == LogContext(theme="bartik", cache_key="k1", state="validating")
        clear_context()
        assert get_context() == LogContext()

    def test_new_build_resets_state(self):
        set_build_context("bartik", "k1")
        set_state("failed")
        set_build_context("bartik", "k2")
        assert get_context().state is None

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self):
        async def worker(key: str) -> str | None:
            set_build_context("t", key)
            await asyncio.sleep(0)
            return get_context().cache_key

        assert await asyncio.gather(worker("a"), worker("b")) == ["a", "b"]
