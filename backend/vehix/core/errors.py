"""Domain error taxonomy for the account and permission layer."""

from __future__ import annotations


class VehixError(Exception):
    """Base class for errors raised by the accounts layer."""


class ConfigurationError(VehixError):
    """An account type or permission outside the known enumeration was supplied.

    Raised when a record is constructed or loaded, never while evaluating a
    permission check.
    """


class QuotaExceeded(VehixError):
    """A requested seat would exceed the limits of the active subscription plan."""

    def __init__(self, resource: str, current: int, limit: int, plan: str) -> None:
        self.resource = resource
        self.current = current
        self.limit = limit
        self.plan = plan
        super().__init__(
            f"Limit reached for {resource}: {current}/{limit} ({plan} plan)"
        )


class StoreError(VehixError):
    """The durable record store failed to load or save."""


class InvitationError(VehixError):
    """An invitation was rejected before any record was written."""


__all__ = [
    "VehixError",
    "ConfigurationError",
    "QuotaExceeded",
    "StoreError",
    "InvitationError",
]
