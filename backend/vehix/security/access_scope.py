"""Department and location access scopes.

A stored access list that is empty means the member is not restricted. The
two cases are kept apart as distinct types so that "no restriction" can never
be read as "no access".
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Unrestricted:
    """Grants access to every department or location."""

    def allows(self, name: str) -> bool:
        return True

    def to_list(self) -> list[str]:
        return []


@dataclass(frozen=True)
class RestrictedTo:
    """Grants access only to the named departments or locations."""

    names: frozenset[str]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("RestrictedTo requires at least one name; use Unrestricted")

    def allows(self, name: str) -> bool:
        return name in self.names

    def to_list(self) -> list[str]:
        return sorted(self.names)


AccessScope = Unrestricted | RestrictedTo

UNRESTRICTED = Unrestricted()


def scope_from_list(names: Iterable[str] | None) -> AccessScope:
    """Build a scope from a stored list; an empty list is unrestricted."""
    cleaned = frozenset(name for name in (names or ()) if name)
    if not cleaned:
        return UNRESTRICTED
    return RestrictedTo(cleaned)


__all__ = [
    "AccessScope",
    "RestrictedTo",
    "UNRESTRICTED",
    "Unrestricted",
    "scope_from_list",
]
