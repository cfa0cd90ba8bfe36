"""Turn a policy descriptor into a decision function.

A descriptor is either a decision function (returned unchanged) or a
single-entry mapping naming a registered policy and its arguments:

    >>> resolve_policy({"constant_delay": {"delay": 100, "max_retries": 3}})
    ConstantDelay(delay=100, max_retries=3, remaining=3)

Registered parameters are checked in declared order and passed to the
constructor positionally. Every failure is raised here, synchronously, so a
malformed descriptor never reaches the retry loop.
"""

from __future__ import annotations

from collections.abc import Mapping

from retrier.foundation.errors import (
    InvalidPolicyDescriptor,
    MissingParameter,
    ParameterTypeMismatch,
    UnknownPolicy,
)
from retrier.foundation.registry import Param, PolicyEntry, PolicyRegistry, get_registry, type_of
from retrier.runtime.observability import get_logger

from .types import DecisionFn, PolicyDescriptor

log = get_logger("retrier.resolver")


def resolve_policy(descriptor: PolicyDescriptor, registry: PolicyRegistry | None = None) -> DecisionFn:
    """Validate `descriptor` and build a fresh decision function from it.

    Args:
        descriptor: Decision function, or `{name: {param: value}}`
        registry: Registry to look names up in (default: process-wide)

    Raises:
        InvalidPolicyDescriptor: Neither callable nor a single-entry mapping
        UnknownPolicy: Name not registered
        MissingParameter: A declared parameter is absent
        ParameterTypeMismatch: A parameter has the wrong primitive type
    """
    if callable(descriptor):
        return descriptor
    if not isinstance(descriptor, Mapping):
        raise InvalidPolicyDescriptor.create(descriptor)
    if len(descriptor) != 1:
        raise InvalidPolicyDescriptor.create(
            descriptor, f"expected exactly one policy name, got {len(descriptor)} keys",
        )

    ((name, args),) = descriptor.items()
    entry = (registry if registry is not None else get_registry()).get(name) if isinstance(name, str) else None
    if entry is None:
        raise UnknownPolicy.create(name)
    if not isinstance(args, Mapping):
        raise InvalidPolicyDescriptor.create(
            args, f"arguments for '{name}' must be a mapping, got {type_of(args)}", policy=name,
        )

    decide = entry.constructor(*(_checked(entry, p, args) for p in entry.params))
    if not callable(decide):
        raise TypeError(f"Policy '{name}' constructor returned a non-callable: {decide!r}")
    log.debug("policy resolved", policy=name, params=len(entry.params))
    return decide


def _checked(entry: PolicyEntry, param: Param, args: Mapping[str, object]) -> object:
    # Key membership, not truthiness: 0 is a legitimate value.
    if param.name not in args:
        raise MissingParameter.create(entry.name, param.name)
    value = args[param.name]
    if not param.type.matches(value):
        raise ParameterTypeMismatch.create(entry.name, param.name, type_of(value), param.type.value)
    return value
