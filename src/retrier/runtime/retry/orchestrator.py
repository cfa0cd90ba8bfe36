"""Retry orchestration: run a subject until it succeeds or its policy gives up.

The loop alternates strictly between one subject attempt and one decision:

    ATTEMPTING --success--> SUCCEEDED
    ATTEMPTING --failure--> AWAITING_DECISION
    AWAITING_DECISION --proceed--> ATTEMPTING
    AWAITING_DECISION --abort--> FAILED

The orchestrator imposes no attempt limit or timeout of its own; both belong
to the decision function. Only `Exception`s count as failures, so
cancellation and interpreter exits pass straight through.

Example:
    >>> from retrier import retrier
    >>> result = await retrier(fetch_user, {"constant_delay": {"delay": 100, "max_retries": 3}})
    >>>
    >>> # Custom decision: retry only timeouts, immediately
    >>> async def on_timeout(reason: Exception) -> None:
    ...     if not isinstance(reason, TimeoutError):
    ...         raise reason
    >>> result = await retrier(fetch_user, on_timeout)
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Awaitable, Callable, Coroutine
from enum import StrEnum
from typing import Any, Generic, ParamSpec, TypeVar

from retrier.foundation.registry import PolicyRegistry
from retrier.runtime.observability import get_logger

from .resolver import resolve_policy
from .types import DecisionFn, PolicyDescriptor, Subject

T = TypeVar("T")
P = ParamSpec("P")

logger = get_logger("retrier.orchestrator")


class RetryState(StrEnum):
    ATTEMPTING = "attempting"
    AWAITING_DECISION = "awaiting_decision"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


async def _settle(value: Awaitable[T] | T) -> T:
    return await value if inspect.isawaitable(value) else value


def _describe(reason: BaseException) -> str:
    return f"{type(reason).__name__}: {reason}" if str(reason) else type(reason).__name__


class RetryLoop(Generic[T]):
    """One retry run: a subject, its resolved decision function, and progress.

    Runs at most once. `attempts` counts subject invocations so far.
    """

    __slots__ = ("_subject", "_decide", "_name", "_state", "_attempts", "_started", "_log")

    def __init__(self, subject: Subject[T], decide: DecisionFn, *, name: str | None = None) -> None:
        self._subject = subject
        self._decide = decide
        self._name = name or getattr(subject, "__name__", type(subject).__name__)
        self._state = RetryState.ATTEMPTING
        self._attempts = 0
        self._started = False
        self._log = logger.bind(run=self._name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> RetryState:
        return self._state

    @property
    def attempts(self) -> int:
        return self._attempts

    def _transition(self, state: RetryState) -> None:
        self._log.debug("state change", previous=self._state.value, state=state.value, attempt=self._attempts)
        self._state = state

    async def run(self) -> T:
        """Attempt the subject until it succeeds or the decision function raises."""
        if self._started:
            raise RuntimeError(f"RetryLoop '{self._name}' has already run")
        self._started = True

        while True:
            self._attempts += 1
            try:
                result = await _settle(self._subject())
            except Exception as exc:
                reason = exc
            else:
                self._transition(RetryState.SUCCEEDED)
                if self._attempts > 1:
                    self._log.info("succeeded after retries", attempts=self._attempts)
                return result

            # Decide outside the except block so an abort is not chained to the failure it re-raises.
            self._log.info("attempt failed", attempt=self._attempts, reason=_describe(reason))
            self._transition(RetryState.AWAITING_DECISION)
            try:
                await _settle(self._decide(reason))
            except Exception as final:
                self._transition(RetryState.FAILED)
                self._log.warning("gave up", attempts=self._attempts, reason=_describe(final))
                raise
            self._transition(RetryState.ATTEMPTING)

    def __repr__(self) -> str:
        return f"RetryLoop({self._name!r}, state={self._state.value}, attempts={self._attempts})"


def retrier(
    subject: Subject[T],
    policy: PolicyDescriptor,
    *,
    registry: PolicyRegistry | None = None,
    name: str | None = None,
) -> Coroutine[Any, Any, T]:
    """Retry `subject` under `policy`.

    Resolves the policy immediately, so descriptor errors are raised here,
    before anything is awaited or attempted. Returns a coroutine that resolves
    with the subject's first successful value, or raises the reason the
    decision function aborted with.

    Args:
        subject: Zero-argument callable returning an awaitable per attempt
        policy: Decision function, or `{registered_name: {param: value}}`
        registry: Registry for named policies (default: process-wide)
        name: Label for log lines (default: subject's __name__)

    Raises:
        TypeError: `subject` is not callable
        PolicyConfigurationError: Malformed descriptor (see resolve_policy)
    """
    if not callable(subject):
        raise TypeError(f"subject must be a zero-argument callable, got {type(subject).__name__}")
    decide = resolve_policy(policy, registry)
    return RetryLoop(subject, decide, name=name).run()


def retrying(
    policy: PolicyDescriptor,
    *,
    registry: PolicyRegistry | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Coroutine[Any, Any, T]]]:
    """Decorator: run every call of an async function through retrier().

    Named policies are resolved per call, so each call gets its own retry
    budget. A callable policy is shared by all calls as given. The descriptor
    is also validated once at decoration time.

    Example:
        >>> @retrying({"constant_delay": {"delay": 500, "max_retries": 2}})
        ... async def fetch(url: str) -> bytes: ...
    """
    resolve_policy(policy, registry)

    def decorator(fn: Callable[P, Awaitable[T]]) -> Callable[P, Coroutine[Any, Any, T]]:
        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await retrier(lambda: fn(*args, **kwargs), policy, registry=registry, name=fn.__name__)
        return wrapper

    return decorator
