from __future__ import annotations

import asyncio

import pytest

from ceprace.services.models import Failure, Success
from ceprace.services.race import RaceFailed, RaceTimedOut, race_first_success


def _after(delay: float, outcome):
    async def _operation():
        await asyncio.sleep(delay)
        return outcome

    return _operation


@pytest.mark.asyncio
async def test_first_success_wins():
    winner = await race_first_success(
        {
            "fast": _after(0.01, Success("fast value")),
            "slow": _after(0.2, Success("slow value")),
        },
        timeout=1.0,
    )

    assert winner.name == "fast"
    assert winner.value == "fast value"
    assert winner.failures == {}


@pytest.mark.asyncio
async def test_early_failure_does_not_short_circuit():
    winner = await race_first_success(
        {
            "broken": _after(0.01, Failure("boom")),
            "working": _after(0.05, Success(1)),
        },
        timeout=1.0,
    )

    assert winner.name == "working"
    assert winner.failures == {"broken": "boom"}


@pytest.mark.asyncio
async def test_all_failures_are_reported_in_arrival_order():
    with pytest.raises(RaceFailed) as excinfo:
        await race_first_success(
            {
                "a": _after(0.05, Failure("second")),
                "b": _after(0.01, Failure("first")),
            },
            timeout=1.0,
        )

    assert list(excinfo.value.failures.items()) == [("b", "first"), ("a", "second")]


@pytest.mark.asyncio
async def test_timeout_when_nothing_completes():
    loop = asyncio.get_running_loop()
    started = loop.time()

    with pytest.raises(RaceTimedOut) as excinfo:
        await race_first_success(
            {"a": _after(5, Success(1)), "b": _after(5, Success(2))},
            timeout=0.05,
        )

    assert excinfo.value.timeout == 0.05
    assert loop.time() - started < 1.0


@pytest.mark.asyncio
async def test_timeout_after_partial_failure():
    with pytest.raises(RaceTimedOut) as excinfo:
        await race_first_success(
            {"a": _after(0.01, Failure("nope")), "b": _after(5, Success(2))},
            timeout=0.05,
        )

    assert excinfo.value.failures == {"a": "nope"}


@pytest.mark.asyncio
async def test_losing_operation_is_abandoned():
    finished = asyncio.Event()

    async def _slow():
        await asyncio.sleep(0.1)
        finished.set()
        return Success("late")

    winner = await race_first_success(
        {"fast": _after(0, Success("early")), "slow": _slow},
        timeout=1.0,
    )
    await asyncio.sleep(0.2)

    assert winner.value == "early"
    assert not finished.is_set()


@pytest.mark.asyncio
async def test_unexpected_exception_counts_as_failure():
    async def _explode():
        raise RuntimeError("kaboom")

    winner = await race_first_success(
        {"explodes": _explode, "works": _after(0.01, Success("ok"))},
        timeout=1.0,
    )

    assert winner.value == "ok"
    assert "kaboom" in winner.failures["explodes"]


@pytest.mark.asyncio
async def test_empty_race_fails():
    with pytest.raises(RaceFailed):
        await race_first_success({}, timeout=1.0)
