from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class Resolver(Protocol):
    """Name lookup used by variable substitution.

    `resolve` returns None when the name is unknown. An empty string is a
    valid, found value.
    """

    def resolve(self, name: str) -> str | None: ...


@dataclass(frozen=True, slots=True)
class MappingResolver:
    # Held by reference: a dict that keeps growing stays visible.
    mapping: Mapping[str, str]

    def resolve(self, name: str) -> str | None:
        return self.mapping.get(name)


@dataclass(frozen=True, slots=True)
class FunctionResolver:
    func: Callable[[str], str | None]

    def resolve(self, name: str) -> str | None:
        return self.func(name)


class NullResolver:
    def resolve(self, name: str) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class ChainResolver:
    """Try each resolver in order; the first hit wins."""

    resolvers: tuple[Resolver, ...]

    def resolve(self, name: str) -> str | None:
        for r in self.resolvers:
            v = r.resolve(name)
            if v is not None:
                return v
        return None


Lookup = Union[Resolver, Mapping[str, str], Callable[[str], Union[str, None]], None]


def as_resolver(lookup: Lookup) -> Resolver:
    """Normalize the accepted lookup shapes into a `Resolver`.

    Accepts:
    - None (nothing external is consulted)
    - an object with a `resolve(name)` method
    - a mapping such as `os.environ`
    - a callable such as `os.environ.get`
    """

    if lookup is None:
        return NullResolver()
    if isinstance(lookup, Resolver):
        return lookup
    if isinstance(lookup, Mapping):
        return MappingResolver(lookup)
    if callable(lookup):
        return FunctionResolver(lookup)
    raise TypeError(f"unsupported lookup: {type(lookup)!r}")
