"""Constant-delay retry policy.

Waits a fixed delay before every retry and gives up after a fixed number of
retries, re-raising the last failure unchanged. Registered as
`"constant_delay"` with parameters `delay` and `max_retries`, both numbers.

Delays are in units of `RETRIER_RETRY_DELAY_UNIT` seconds (milliseconds by
default). Fractional values are truncated toward zero; negative or non-finite
values are rejected at construction.

Example:
    >>> await retrier(fetch, {"constant_delay": {"delay": 250, "max_retries": 3}})
    >>> # Or use an instance directly as the decision function
    >>> await retrier(fetch, ConstantDelay(250, 3))
"""

from __future__ import annotations

import asyncio
import math

from retrier.foundation.config import get_settings
from retrier.foundation.errors import InvalidParameterValue, ParameterTypeMismatch
from retrier.foundation.registry import Param, ParamType, policy, type_of
from retrier.runtime.observability import get_logger

CONSTANT_DELAY = "constant_delay"

log = get_logger("retrier.policy", policy=CONSTANT_DELAY)


def _whole(param: str, value: object) -> int:
    """Truncate toward zero; reject non-numbers, non-finite and negative values."""
    if not ParamType.NUMBER.matches(value):
        raise ParameterTypeMismatch.create(CONSTANT_DELAY, param, type_of(value), ParamType.NUMBER.value)
    try:
        n = math.trunc(value)  # type: ignore[call-overload]
    except (ValueError, OverflowError):
        raise InvalidParameterValue.create(CONSTANT_DELAY, param, f"{value!r} is not finite") from None
    if n < 0:
        raise InvalidParameterValue.create(CONSTANT_DELAY, param, f"{value!r} is negative")
    return n


class ConstantDelay:
    """Decision function: retry after `delay` units, at most `max_retries` times.

    Each instance owns its retry budget. The budget is decremented only once
    the delay has elapsed, and never reset, so resolve a fresh instance per run.
    Concurrent runs sharing one instance draw from the same budget.
    """

    __slots__ = ("delay", "max_retries", "delay_unit", "_remaining")

    def __init__(self, delay: float, max_retries: float, *, delay_unit: float | None = None) -> None:
        self.delay = _whole("delay", delay)
        self.max_retries = _whole("max_retries", max_retries)
        self.delay_unit = delay_unit if delay_unit is not None else get_settings().retry.delay_unit
        self._remaining = self.max_retries

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def retries_used(self) -> int:
        return self.max_retries - self._remaining

    @property
    def delay_seconds(self) -> float:
        return self.delay * self.delay_unit

    async def __call__(self, reason: Exception) -> None:
        if self._remaining <= 0:
            log.info("retry budget exhausted", max_retries=self.max_retries, reason=type(reason).__name__)
            raise reason
        log.debug("retry scheduled", retry=self.retries_used + 1, max_retries=self.max_retries, delay=self.delay)
        await asyncio.sleep(self.delay_seconds)
        self._remaining -= 1

    def __repr__(self) -> str:
        return f"ConstantDelay(delay={self.delay}, max_retries={self.max_retries}, remaining={self._remaining})"


@policy(CONSTANT_DELAY, Param("delay", ParamType.NUMBER), Param("max_retries", ParamType.NUMBER))
def constant_delay(delay: float, max_retries: float) -> ConstantDelay:
    """Fixed delay between attempts, fixed retry budget."""
    return ConstantDelay(delay, max_retries)
