"""
Typed references between graph nodes.

A Ref points at one attribute of another node and is the only way a node
depends on another through its attributes. Join builds strings out of
literals and Refs (ARNs, URLs) and keeps the edges visible.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterator


@dataclass(frozen=True)
class Ref:
    """Reference to ``attribute`` of the node named ``target``."""

    target: str
    attribute: str = "id"

    def __str__(self) -> str:
        return f"${{{self.target}.{self.attribute}}}"


@dataclass(frozen=True)
class Join:
    """String built by concatenating literals and references."""

    parts: tuple[Any, ...]

    def __init__(self, *parts: Any) -> None:
        object.__setattr__(self, "parts", tuple(parts))

    def __str__(self) -> str:
        return "".join(str(part) for part in self.parts)


class Unknown:
    """Placeholder for a value that is only known after apply."""

    _instance: "Unknown | None" = None

    def __new__(cls) -> "Unknown":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<unknown>"


UNKNOWN = Unknown()


def iter_refs(value: Any) -> Iterator[Ref]:
    """Yield every Ref nested anywhere inside ``value``."""
    if isinstance(value, Ref):
        yield value
    elif isinstance(value, Join):
        for part in value.parts:
            yield from iter_refs(part)
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_refs(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from iter_refs(item)


def resolve(value: Any, lookup: Callable[[Ref], Any]) -> Any:
    """
    Replace every Ref and Join inside ``value`` with concrete values.

    Args:
        value: Declared attribute value
        lookup: Returns the live value for a Ref, or UNKNOWN

    Returns:
        The resolved value. A Join with any unknown part resolves to UNKNOWN.
    """
    if isinstance(value, Ref):
        return lookup(value)
    if isinstance(value, Join):
        parts = [resolve(part, lookup) for part in value.parts]
        if any(part is UNKNOWN for part in parts):
            return UNKNOWN
        return "".join(str(part) for part in parts)
    if isinstance(value, dict):
        return {key: resolve(item, lookup) for key, item in value.items()}
    if isinstance(value, list):
        return [resolve(item, lookup) for item in value]
    if isinstance(value, tuple):
        return tuple(resolve(item, lookup) for item in value)
    return value


def contains_unknown(value: Any) -> bool:
    """Check whether a resolved value still holds an UNKNOWN."""
    if value is UNKNOWN:
        return True
    if isinstance(value, dict):
        return any(contains_unknown(item) for item in value.values())
    if isinstance(value, (list, tuple)):
        return any(contains_unknown(item) for item in value)
    return False


def symbolic(value: Any) -> Any:
    """Render references as ``${target.attribute}`` strings for hashing and display."""
    return resolve(value, str)
