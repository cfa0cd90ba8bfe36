"""retrier - retry an async operation under a pluggable policy.

Decouples *what* to attempt (a zero-argument async callable) from *how* to
decide retry timing and limits (a decision function, or a named policy from
the registry).

Quick Start:
    >>> from retrier import retrier
    >>>
    >>> async def fetch() -> bytes: ...
    >>>
    >>> # Named policy: wait 100ms between attempts, retry at most 3 times
    >>> data = await retrier(fetch, {"constant_delay": {"delay": 100, "max_retries": 3}})

Custom Decision Functions:
    >>> async def only_timeouts(reason: Exception) -> None:
    ...     if not isinstance(reason, TimeoutError):
    ...         raise reason  # give up with this reason
    ...     # returning normally means: try again
    >>> data = await retrier(fetch, only_timeouts)

Registering Policies:
    >>> from retrier import Param, policy
    >>>
    >>> @policy("immediate", Param("max_retries"))
    ... def immediate(max_retries):
    ...     remaining = int(max_retries)
    ...     async def decide(reason: Exception) -> None:
    ...         nonlocal remaining
    ...         if remaining == 0:
    ...             raise reason
    ...         remaining -= 1
    ...     return decide
    >>> data = await retrier(fetch, {"immediate": {"max_retries": 5}})

Malformed descriptors raise a PolicyConfigurationError from the retrier()
call itself, before the subject is ever invoked.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    ErrorCode,
    InvalidParameterValue,
    InvalidPolicyDescriptor,
    MissingParameter,
    ParameterTypeMismatch,
    PolicyConfigurationError,
    PolicyError,
    RetrierError,
    UnknownPolicy,
)

# Settings
from .foundation.config import RetrierSettings, clear_settings_cache, get_settings

# Registry
from .foundation.registry import Param, ParamType, PolicyEntry, PolicyRegistry, get_registry, policy

# Observability
from .runtime.observability import configure_logging, get_logger

# Retry
from .runtime.retry import (
    CONSTANT_DELAY,
    ConstantDelay,
    DecisionFn,
    PolicyDescriptor,
    RetryLoop,
    RetryState,
    Subject,
    constant_delay,
    resolve_policy,
    retrier,
    retrying,
)

__all__ = [
    "__version__",
    # Retry
    "retrier", "retrying", "RetryLoop", "RetryState", "resolve_policy",
    "ConstantDelay", "constant_delay", "CONSTANT_DELAY",
    "DecisionFn", "PolicyDescriptor", "Subject",
    # Registry
    "PolicyRegistry", "PolicyEntry", "Param", "ParamType", "get_registry", "policy",
    # Errors
    "ErrorCode", "PolicyError", "RetrierError", "PolicyConfigurationError",
    "InvalidPolicyDescriptor", "UnknownPolicy", "MissingParameter",
    "ParameterTypeMismatch", "InvalidParameterValue",
    # Settings
    "RetrierSettings", "get_settings", "clear_settings_cache",
    # Observability
    "configure_logging", "get_logger",
]
