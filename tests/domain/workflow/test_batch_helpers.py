"""Tests for parallel batch helpers."""

import asyncio

import pytest

from eventarchitect.domain.workflow.batch import gather_all, run_isolated
from eventarchitect.llm.models import InvalidResponse


async def _value(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


async def _fail(error, delay=0.0):
    await asyncio.sleep(delay)
    raise error


class TestRunIsolated:

    @pytest.mark.asyncio
    async def test_failures_do_not_cancel_siblings(self):
        batch = await run_isolated(
            [_value("a", 0.01), _fail(InvalidResponse("bad")), _value("c", 0.02)],
            ["A", "B", "C"],
            "test",
        )

        assert batch.successes == [(0, "a"), (2, "c")]
        assert batch.values == ["a", "c"]
        assert len(batch.failures) == 1
        failure = batch.failures[0]
        assert (failure.index, failure.label, failure.error_type) == (1, "B", "invalid_response")
        assert not batch.all_failed

    @pytest.mark.asyncio
    async def test_all_failed(self):
        batch = await run_isolated([_fail(ValueError("x"))], ["only"], "test")
        assert batch.all_failed
        assert batch.failures[0].error_type == "ValueError"

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            await run_isolated([_fail(ValueError("x"))], ["only"], "crest")
        assert "crest: item 0 (only) failed" in caplog.text


class TestGatherAll:

    @pytest.mark.asyncio
    async def test_returns_in_order(self):
        assert await gather_all(_value(1, 0.02), _value(2)) == [1, 2]

    @pytest.mark.asyncio
    async def test_raises_after_siblings_finish(self):
        finished = []

        async def slow():
            await asyncio.sleep(0.02)
            finished.append("slow")
            return "slow"

        with pytest.raises(InvalidResponse):
            await gather_all(_fail(InvalidResponse("bad")), slow())
        assert finished == ["slow"]
