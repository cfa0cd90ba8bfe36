"""Policy registry: named, parameterized retry policy constructors."""

from .params import Param, ParamType, coerce_param, type_of
from .registry import PolicyEntry, PolicyRegistry, get_registry, policy

__all__ = [
    "Param", "ParamType", "coerce_param", "type_of",
    "PolicyEntry", "PolicyRegistry", "get_registry", "policy",
]
