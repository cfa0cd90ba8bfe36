"""Process-wide registry of named retry policies.

The registry maps a policy name to a constructor and the ordered parameters it
takes. Resolution reads it; registration is expected during process start-up,
so there is no locking.

Example:
    >>> from retrier import Param, ParamType, get_registry, policy
    >>> def linear(step, max_retries): ...
    >>> get_registry().register("linear", linear, [Param("step"), Param("max_retries")])
    >>>
    >>> # Or as a decorator; bare names declare numbers
    >>> @policy("on_codes", ("codes", ParamType.SEQUENCE), "max_retries")
    ... def on_codes(codes, max_retries): ...
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from .params import Param, ParamLike, coerce_param

if TYPE_CHECKING:
    from retrier.runtime.retry.types import DecisionFn

F = TypeVar("F", bound=Callable[..., object])


@dataclass(frozen=True, slots=True)
class PolicyEntry:
    """A registered policy: constructor plus its ordered parameter spec."""

    name: str
    constructor: Callable[..., DecisionFn]
    params: tuple[Param, ...] = ()
    description: str = field(default="", compare=False)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    def signature(self) -> str:
        """Render as `name(param: type, ...)`."""
        return f"{self.name}({', '.join(f'{p.name}: {p.type}' for p in self.params)})"


class PolicyRegistry:
    """Name -> PolicyEntry mapping consulted at resolution time.

    Append-only in normal use: registering an existing name is an error.
    `unregister` exists so tests can restore a clean state.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[PolicyEntry] = ()) -> None:
        self._entries: dict[str, PolicyEntry] = {}
        for entry in entries:
            if entry.name in self._entries:
                raise ValueError(f"Policy '{entry.name}' already registered. Use unregister() first.")
            self._entries[entry.name] = entry

    def register(
        self,
        name: str,
        constructor: Callable[..., DecisionFn],
        params: Iterable[ParamLike] = (),
        *,
        description: str | None = None,
    ) -> PolicyEntry:
        """Register a policy constructor under `name`.

        Args:
            name: Key used in policy descriptors
            constructor: Called with validated parameter values, positionally
            params: Ordered parameter specs (Param, (name, type) or {name: type})
            description: Optional one-line summary (defaults to the constructor's docstring)

        Raises:
            ValueError: Name empty or already registered, or duplicate parameter names
            TypeError: Constructor not callable or unreadable parameter spec
        """
        if not isinstance(name, str) or not name:
            raise ValueError(f"Policy name must be a non-empty string, got {name!r}")
        if name in self._entries:
            raise ValueError(f"Policy '{name}' already registered. Use unregister() first.")
        if not callable(constructor):
            raise TypeError(f"Policy '{name}' constructor is not callable: {constructor!r}")

        spec = tuple(coerce_param(p) for p in params)
        names = [p.name for p in spec]
        if len(set(names)) != len(names):
            raise ValueError(f"Policy '{name}' declares duplicate parameters: {names}")

        if description is None:
            doc = (constructor.__doc__ or "").strip()
            description = doc.splitlines()[0] if doc else ""
        entry = PolicyEntry(name, constructor, spec, description)
        self._entries[name] = entry
        return entry

    def policy(self, name: str, *params: ParamLike, description: str | None = None) -> Callable[[F], F]:
        """Decorator form of register(); returns the constructor unchanged."""
        def decorator(constructor: F) -> F:
            self.register(name, constructor, params, description=description)
            return constructor
        return decorator

    def unregister(self, name: str) -> bool:
        """Remove a policy by name. Returns True if found."""
        return self._entries.pop(name, None) is not None

    def get(self, name: str) -> PolicyEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return sorted(self._entries)

    def copy(self) -> PolicyRegistry:
        """Independent registry holding the same entries."""
        return PolicyRegistry(self._entries.values())

    def __getitem__(self, name: str) -> PolicyEntry:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PolicyEntry]:
        return iter(self._entries.values())

    def __repr__(self) -> str:
        return f"PolicyRegistry({self.names()})"


_registry: PolicyRegistry | None = None


def get_registry() -> PolicyRegistry:
    """Get the process-wide policy registry."""
    global _registry
    if _registry is None:
        _registry = PolicyRegistry()
    return _registry


def policy(name: str, *params: ParamLike, description: str | None = None) -> Callable[[F], F]:
    """Register the decorated constructor in the process-wide registry.

    Example:
        >>> @policy("fixed_budget", Param("max_retries"))
        ... def fixed_budget(max_retries):
        ...     ...
    """
    return get_registry().policy(name, *params, description=description)
