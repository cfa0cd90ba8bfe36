"""Callable shapes shared by the resolver and the orchestrator."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import TypeAlias, TypeVar

T = TypeVar("T")

# Zero-argument operation; returns an awaitable (or a plain value) per attempt.
Subject: TypeAlias = Callable[[], Awaitable[T] | T]

# Completes normally to retry; raises to give up with the raised reason.
DecisionFn: TypeAlias = Callable[[Exception], Awaitable[None] | None]

# A decision function, or {registered_name: {param: value, ...}}.
PolicyDescriptor: TypeAlias = DecisionFn | Mapping[str, Mapping[str, object]]
