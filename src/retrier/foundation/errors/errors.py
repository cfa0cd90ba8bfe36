"""Structured errors for retry policy construction.

Every error raised while turning a policy descriptor into a decision function
carries a frozen PolicyError model, so callers can branch on `code` or
serialize the failure without parsing messages.

Subject failures are never wrapped: they are routed to the decision function
untouched and the reason it aborts with is what the caller sees.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorCode(StrEnum):
    """Machine-readable classification of policy construction failures."""
    INVALID_POLICY_DESCRIPTOR = "INVALID_POLICY_DESCRIPTOR"
    UNKNOWN_POLICY = "UNKNOWN_POLICY"
    MISSING_PARAMETER = "MISSING_PARAMETER"
    PARAMETER_TYPE_MISMATCH = "PARAMETER_TYPE_MISMATCH"
    INVALID_PARAMETER_VALUE = "INVALID_PARAMETER_VALUE"


class PolicyError(BaseModel):
    """Structured description of a rejected policy descriptor.

    Attributes:
        code: Failure classification
        message: Human-readable error message
        policy: Registered policy name involved, if any
        parameter: Offending parameter name, if any
        actual_type: Runtime type of the supplied value (type mismatches)
        expected_type: Declared type of the parameter (type mismatches)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Policy Error",
            "description": "Structured error from retry policy resolution",
            "examples": [{
                "code": "PARAMETER_TYPE_MISMATCH",
                "message": "constant_delay.delay is incorrect type: string instead of number",
                "policy": "constant_delay",
                "parameter": "delay",
                "actual_type": "string",
                "expected_type": "number",
            }],
        },
    )

    code: ErrorCode
    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    policy: str | None = Field(default=None, description="Registered policy name")
    parameter: str | None = Field(default=None, description="Offending parameter name")
    actual_type: str | None = Field(default=None, description="Type of the supplied value")
    expected_type: str | None = Field(default=None, description="Declared parameter type")

    @computed_field
    @property
    def qualified_parameter(self) -> str | None:
        """`policy.parameter` when both are known."""
        if self.policy and self.parameter:
            return f"{self.policy}.{self.parameter}"
        return self.parameter

    def render(self) -> str:
        return f"[{self.code}] {self.message}"

    __str__ = render


class RetrierError(Exception):
    """Base class for errors raised by retrier itself."""


class PolicyConfigurationError(RetrierError):
    """A policy descriptor could not be turned into a decision function.

    Raised synchronously by resolution, before any subject attempt.
    """

    code: ErrorCode = ErrorCode.INVALID_POLICY_DESCRIPTOR

    def __init__(self, error: PolicyError) -> None:
        self.error = error
        super().__init__(error.message)

    @property
    def policy(self) -> str | None:
        return self.error.policy

    @property
    def parameter(self) -> str | None:
        return self.error.parameter


class InvalidPolicyDescriptor(PolicyConfigurationError, TypeError):
    """Descriptor is neither a callable nor a single-entry mapping."""

    code = ErrorCode.INVALID_POLICY_DESCRIPTOR

    @classmethod
    def create(cls, descriptor: object, reason: str = "", *, policy: str | None = None) -> Self:
        detail = reason or (
            "expected a decision function or a single-entry mapping, "
            f"got {type(descriptor).__name__}"
        )
        return cls(PolicyError(
            code=cls.code, message=f"Invalid retry policy descriptor: {detail}", policy=policy,
        ))


class UnknownPolicy(PolicyConfigurationError, LookupError):
    """Descriptor names a policy that is not registered."""

    code = ErrorCode.UNKNOWN_POLICY

    @classmethod
    def create(cls, name: object) -> Self:
        return cls(PolicyError(
            code=cls.code, message=f"No such registered retry policy: {name!r}", policy=str(name),
        ))


class MissingParameter(PolicyConfigurationError, LookupError):
    """A required policy parameter is absent from the descriptor."""

    code = ErrorCode.MISSING_PARAMETER

    @classmethod
    def create(cls, policy: str, parameter: str) -> Self:
        return cls(PolicyError(
            code=cls.code, message=f"{policy} is missing a parameter: {parameter}",
            policy=policy, parameter=parameter,
        ))


class ParameterTypeMismatch(PolicyConfigurationError, TypeError):
    """A policy parameter has a different runtime type than declared."""

    code = ErrorCode.PARAMETER_TYPE_MISMATCH

    @classmethod
    def create(cls, policy: str, parameter: str, actual: str, expected: str) -> Self:
        return cls(PolicyError(
            code=cls.code,
            message=f"{policy}.{parameter} is incorrect type: {actual} instead of {expected}",
            policy=policy, parameter=parameter, actual_type=actual, expected_type=expected,
        ))

    @property
    def actual_type(self) -> str | None:
        return self.error.actual_type

    @property
    def expected_type(self) -> str | None:
        return self.error.expected_type


class InvalidParameterValue(PolicyConfigurationError, ValueError):
    """A policy parameter has the right type but an unusable value."""

    code = ErrorCode.INVALID_PARAMETER_VALUE

    @classmethod
    def create(cls, policy: str, parameter: str, reason: str) -> Self:
        return cls(PolicyError(
            code=cls.code, message=f"{policy}.{parameter} has an invalid value: {reason}",
            policy=policy, parameter=parameter,
        ))
