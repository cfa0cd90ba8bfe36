"""Retry orchestration with pluggable, registry-backed policies.

Example:
    >>> from retrier.runtime.retry import retrier
    >>> value = await retrier(fetch, {"constant_delay": {"delay": 100, "max_retries": 3}})
"""

from .constant import CONSTANT_DELAY, ConstantDelay, constant_delay
from .orchestrator import RetryLoop, RetryState, retrier, retrying
from .resolver import resolve_policy
from .types import DecisionFn, PolicyDescriptor, Subject

__all__ = [
    # Orchestration
    "retrier",
    "retrying",
    "RetryLoop",
    "RetryState",
    # Resolution
    "resolve_policy",
    # Built-in policy
    "CONSTANT_DELAY",
    "ConstantDelay",
    "constant_delay",
    # Types
    "DecisionFn",
    "PolicyDescriptor",
    "Subject",
]
