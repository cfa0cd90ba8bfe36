"""Parameter declarations for registered policies.

Descriptor arguments arrive as plain data (often parsed from config), so each
registered parameter declares a coarse primitive type rather than a Python
class. `type_of` names runtime values in the same vocabulary for error
messages.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from numbers import Real


class ParamType(StrEnum):
    """Primitive types a policy parameter may declare."""
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    CALLABLE = "callable"

    def matches(self, value: object) -> bool:
        """Whether `value` belongs to this type. Booleans are never numbers."""
        return type_of(value) == self.value


def type_of(value: object) -> str:
    """Name the primitive type of `value`, falling back to its class name."""
    match value:
        case bool():
            return ParamType.BOOLEAN.value
        case Real() | Decimal():
            return ParamType.NUMBER.value
        case str():
            return ParamType.STRING.value
        case Mapping():
            return ParamType.MAPPING.value
        case bytes() | bytearray():
            return type(value).__name__
        case Sequence():
            return ParamType.SEQUENCE.value
        case None:
            return "none"
    return ParamType.CALLABLE.value if callable(value) else type(value).__name__


@dataclass(frozen=True, slots=True)
class Param:
    """A named, typed positional parameter of a policy constructor."""

    name: str
    type: ParamType = ParamType.NUMBER

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Parameter name must be a non-empty string, got {self.name!r}")
        if not isinstance(self.type, ParamType):
            object.__setattr__(self, "type", ParamType(self.type))


ParamLike = str | Param | tuple[str, ParamType | str] | Mapping[str, ParamType | str]


def coerce_param(spec: ParamLike) -> Param:
    """Accept `Param`, a bare name (number), `(name, type)` or `{name: type}`."""
    match spec:
        case Param():
            return spec
        case str():
            return Param(spec)
        case (str() as name, kind):
            return Param(name, ParamType(kind))
        case Mapping() if len(spec) == 1:
            ((name, kind),) = spec.items()
            return Param(name, ParamType(kind))
    raise TypeError(f"Cannot interpret parameter spec: {spec!r}")
