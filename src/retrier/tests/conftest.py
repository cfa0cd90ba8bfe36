"""Shared fixtures: quiet logging, fast delay unit, isolated registry."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator

import pytest

from retrier import clear_settings_cache, get_registry
from retrier.foundation.registry import PolicyRegistry
from retrier.runtime.observability import reset_logging

# 1 delay unit = 0.1ms, so delay=100 sleeps 10ms.
DELAY_UNIT = 0.0001


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Silence logs and shrink the delay unit for every test."""
    monkeypatch.setenv("RETRIER_RETRY_DELAY_UNIT", str(DELAY_UNIT))
    monkeypatch.setenv("RETRIER_LOG_FORMAT", "none")
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()


@pytest.fixture
def registry() -> PolicyRegistry:
    """Copy of the global registry (built-ins included) safe to mutate."""
    return get_registry().copy()


class Flaky:
    """Async subject that fails `failures` times, then returns `value`."""

    def __init__(self, failures: int, value: object = "ok") -> None:
        self.failures = failures
        self.value = value
        self.calls = 0
        self.errors: list[Exception] = []
        self.times: list[float] = []

    async def __call__(self) -> object:
        self.times.append(asyncio.get_running_loop().time())
        self.calls += 1
        if self.calls <= self.failures:
            err = ConnectionError(f"attempt {self.calls} failed")
            self.errors.append(err)
            raise err
        return self.value


@pytest.fixture
def flaky() -> type[Flaky]:
    return Flaky
