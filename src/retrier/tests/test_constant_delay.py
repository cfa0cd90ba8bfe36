"""Tests for the constant-delay policy, alone and under the orchestrator."""

from __future__ import annotations

import asyncio
from fractions import Fraction

import pytest

from retrier import (
    ConstantDelay,
    InvalidParameterValue,
    ParameterTypeMismatch,
    get_registry,
    get_settings,
    retrier,
    retrying,
)

# Matches RETRIER_RETRY_DELAY_UNIT set by the autouse fixture.
DELAY_UNIT = 0.0001

# Scheduler may fire a timer up to one clock tick early.
SLACK = 1e-3


def test_registered_with_declared_params() -> None:
    entry = get_registry()["constant_delay"]
    assert entry.param_names == ("delay", "max_retries")
    assert [p.type.value for p in entry.params] == ["number", "number"]
    assert entry.signature() == "constant_delay(delay: number, max_retries: number)"


@pytest.mark.parametrize(("delay", "max_retries", "expected"), [
    (100, 3, (100, 3)),
    (2.9, 3.7, (2, 3)),
    (Fraction(7, 2), 0, (3, 0)),
    (-0.5, -0.9, (0, 0)),
])
def test_truncates_toward_zero(delay: float, max_retries: float, expected: tuple[int, int]) -> None:
    policy = ConstantDelay(delay, max_retries)
    assert (policy.delay, policy.max_retries) == expected
    assert policy.remaining == expected[1]


@pytest.mark.parametrize("param", ["delay", "max_retries"])
def test_negative_rejected(param: str) -> None:
    args = {"delay": 1, "max_retries": 1, param: -1}
    with pytest.raises(InvalidParameterValue, match="negative") as info:
        ConstantDelay(**args)
    assert info.value.parameter == param
    assert isinstance(info.value, ValueError)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_rejected(value: float) -> None:
    with pytest.raises(InvalidParameterValue, match="not finite"):
        ConstantDelay(1, value)


def test_non_number_rejected_on_direct_construction() -> None:
    with pytest.raises(ParameterTypeMismatch):
        ConstantDelay("10", 1)  # type: ignore[arg-type]


def test_negative_rejected_through_descriptor() -> None:
    async def subject() -> None: ...

    with pytest.raises(InvalidParameterValue):
        retrier(subject, {"constant_delay": {"delay": 10, "max_retries": -3}})


def test_delay_unit_from_settings() -> None:
    assert get_settings().retry.delay_unit == DELAY_UNIT
    policy = ConstantDelay(100, 1)
    assert policy.delay_unit == DELAY_UNIT
    assert policy.delay_seconds == pytest.approx(100 * DELAY_UNIT)
    assert ConstantDelay(2, 1, delay_unit=1.0).delay_seconds == 2.0


# ─────────────────────────────────────────────────────────────────────────────
# Decision behavior
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_counter_decrements_after_delay() -> None:
    policy = ConstantDelay(50, 2)
    pending = asyncio.ensure_future(policy(ValueError("x")))
    await asyncio.sleep(0)
    assert policy.remaining == 2  # still sleeping
    await pending
    assert policy.remaining == 1
    assert policy.retries_used == 1


@pytest.mark.asyncio
async def test_exhausted_reraises_same_reason_immediately() -> None:
    policy = ConstantDelay(10_000, 0)
    reason = ValueError("original")
    loop = asyncio.get_running_loop()
    start = loop.time()
    with pytest.raises(ValueError) as info:
        await policy(reason)
    assert info.value is reason
    assert loop.time() - start < 0.5


@pytest.mark.asyncio
async def test_counter_never_resets() -> None:
    policy = ConstantDelay(0, 1)
    await policy(ValueError("a"))
    with pytest.raises(ValueError):
        await policy(ValueError("b"))
    with pytest.raises(ValueError):
        await policy(ValueError("c"))
    assert policy.remaining == 0


# ─────────────────────────────────────────────────────────────────────────────
# Under the orchestrator
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize("max_retries", [0, 1, 3])
async def test_always_failing_subject(flaky, max_retries: int) -> None:
    subject = flaky(100)
    with pytest.raises(ConnectionError) as info:
        await retrier(subject, {"constant_delay": {"delay": 100, "max_retries": max_retries}})
    assert subject.calls == max_retries + 1
    assert info.value is subject.errors[-1]
    gaps = [b - a for a, b in zip(subject.times, subject.times[1:])]
    assert all(gap >= 100 * DELAY_UNIT - SLACK for gap in gaps)


@pytest.mark.asyncio
@pytest.mark.parametrize(("failures", "max_retries"), [(0, 2), (1, 2), (2, 2)])
async def test_fails_then_succeeds_within_budget(flaky, failures: int, max_retries: int) -> None:
    subject = flaky(failures, value={"id": 1})
    result = await retrier(subject, {"constant_delay": {"delay": 1, "max_retries": max_retries}})
    assert result == {"id": 1}
    assert subject.calls == failures + 1


@pytest.mark.asyncio
async def test_zero_retries_single_attempt_no_delay(flaky) -> None:
    subject = flaky(1)
    loop = asyncio.get_running_loop()
    start = loop.time()
    with pytest.raises(ConnectionError):
        await retrier(subject, {"constant_delay": {"delay": 100_000, "max_retries": 0}})
    assert subject.calls == 1
    assert loop.time() - start < 0.5


@pytest.mark.asyncio
async def test_three_failures_then_success_with_three_delays(flaky) -> None:
    subject = flaky(3, value="fourth time lucky")
    result = await retrier(subject, {"constant_delay": {"delay": 100, "max_retries": 3}})
    assert result == "fourth time lucky"
    assert subject.calls == 4
    gaps = [b - a for a, b in zip(subject.times, subject.times[1:])]
    assert len(gaps) == 3
    assert all(gap >= 100 * DELAY_UNIT - SLACK for gap in gaps)


@pytest.mark.asyncio
async def test_separate_runs_do_not_share_budget(flaky) -> None:
    descriptor = {"constant_delay": {"delay": 0, "max_retries": 1}}
    first, second = flaky(1), flaky(1)
    assert await retrier(first, descriptor) == "ok"
    assert await retrier(second, descriptor) == "ok"
    assert (first.calls, second.calls) == (2, 2)


@pytest.mark.asyncio
async def test_shared_instance_budget_holds_under_concurrency() -> None:
    shared = ConstantDelay(0, 1)
    calls = 0

    @retrying(shared)
    async def fetch() -> None:
        nonlocal calls
        calls += 1
        raise ConnectionError(f"call {calls}")

    results = await asyncio.wait_for(asyncio.gather(fetch(), fetch(), return_exceptions=True), timeout=1)
    assert all(isinstance(r, ConnectionError) for r in results)
    assert calls <= 4
    assert shared.remaining <= 0
