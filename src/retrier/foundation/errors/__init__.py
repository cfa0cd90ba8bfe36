"""Error taxonomy for policy resolution.

- ErrorCode: Failure classification
- PolicyError: Frozen structured error model
- PolicyConfigurationError and subclasses: Exceptions raised before any attempt
"""

from .errors import (
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

__all__ = [
    "ErrorCode", "PolicyError",
    "RetrierError", "PolicyConfigurationError",
    "InvalidPolicyDescriptor", "UnknownPolicy", "MissingParameter",
    "ParameterTypeMismatch", "InvalidParameterValue",
]
