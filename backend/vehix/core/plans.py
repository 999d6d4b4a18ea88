"""Subscription plans and the limits each one grants.

``limitations`` is a pure table lookup; the seat and slot helpers below are
what the invitation workflow and vehicle/location creation call before
writing anything.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal

from vehix.core.errors import QuotaExceeded
from vehix.security.account_types import AccountType


class SubscriptionPlan(str, enum.Enum):
    """Available subscription tiers."""

    TRIAL = "trial"
    BASIC = "basic"
    PRO = "pro"
    ENTERPRISE = "enterprise"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def monthly_price(self) -> Decimal:
        """Monthly list price; enterprise is billed per vehicle."""
        return _MONTHLY_PRICES[self]

    @property
    def yearly_price(self) -> Decimal:
        """Yearly price with the 10% annual discount applied."""
        return (self.monthly_price * 12 * Decimal("0.9")).quantize(Decimal("0.01"))


class BillingPeriod(str, enum.Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ManagementStructure(str, enum.Enum):
    """How a business organises its managers."""

    SINGLE_MANAGER = "single_manager"
    MULTIPLE_MANAGERS = "multiple_managers"
    HIERARCHICAL = "hierarchical"


class FleetSize(str, enum.Enum):
    SMALL = "1-5"
    MEDIUM = "6-15"
    LARGE = "16-50"
    ENTERPRISE = "50+"


@dataclass(frozen=True)
class SubscriptionLimitations:
    """Seat limits and feature flags granted by a plan."""

    max_vehicles: int
    max_managers: int
    max_technicians: int
    max_locations: int
    features: tuple[str, ...]
    can_create_managers: bool
    can_access_reports: bool
    can_use_integrations: bool


_LIMITATIONS: dict[SubscriptionPlan, SubscriptionLimitations] = {
    SubscriptionPlan.TRIAL: SubscriptionLimitations(
        max_vehicles=5,
        max_managers=1,
        max_technicians=5,
        max_locations=1,
        features=("Trial access", "Basic vehicle tracking", "Email support"),
        can_create_managers=False,
        can_access_reports=False,
        can_use_integrations=False,
    ),
    SubscriptionPlan.BASIC: SubscriptionLimitations(
        max_vehicles=5,
        max_managers=1,
        max_technicians=5,
        max_locations=1,
        features=("Basic vehicle tracking", "Email support"),
        can_create_managers=False,
        can_access_reports=False,
        can_use_integrations=False,
    ),
    SubscriptionPlan.PRO: SubscriptionLimitations(
        max_vehicles=15,
        max_managers=4,
        max_technicians=15,
        max_locations=3,
        features=("Advanced reporting", "Multi-location", "Priority support"),
        can_create_managers=True,
        can_access_reports=True,
        can_use_integrations=False,
    ),
    SubscriptionPlan.ENTERPRISE: SubscriptionLimitations(
        max_vehicles=999,
        max_managers=999,
        max_technicians=999,
        max_locations=999,
        features=("Unlimited everything", "Custom integrations", "Dedicated support"),
        can_create_managers=True,
        can_access_reports=True,
        can_use_integrations=True,
    ),
}

_DISPLAY_NAMES: dict[SubscriptionPlan, str] = {
    SubscriptionPlan.TRIAL: "7-Day Free Trial",
    SubscriptionPlan.BASIC: "Basic",
    SubscriptionPlan.PRO: "Pro",
    SubscriptionPlan.ENTERPRISE: "Enterprise",
}

_MONTHLY_PRICES: dict[SubscriptionPlan, Decimal] = {
    SubscriptionPlan.TRIAL: Decimal("0.00"),
    SubscriptionPlan.BASIC: Decimal("125.00"),
    SubscriptionPlan.PRO: Decimal("385.00"),
    SubscriptionPlan.ENTERPRISE: Decimal("50.00"),
}

_FLEET_PLANS: dict[FleetSize, SubscriptionPlan] = {
    FleetSize.SMALL: SubscriptionPlan.BASIC,
    FleetSize.MEDIUM: SubscriptionPlan.PRO,
    FleetSize.LARGE: SubscriptionPlan.ENTERPRISE,
    FleetSize.ENTERPRISE: SubscriptionPlan.ENTERPRISE,
}

for _table in (_LIMITATIONS, _DISPLAY_NAMES, _MONTHLY_PRICES):
    if set(_table) != set(SubscriptionPlan):  # pragma: no cover
        raise RuntimeError("Plan tables must cover every subscription plan")
if set(_FLEET_PLANS) != set(FleetSize):  # pragma: no cover
    raise RuntimeError("Every fleet size needs a recommended plan")


def limitations(plan: SubscriptionPlan) -> SubscriptionLimitations:
    """Return the limits record for a plan."""
    return _LIMITATIONS[plan]


def seat_limit(limits: SubscriptionLimitations, account_type: AccountType) -> int:
    """Return how many members of ``account_type`` a plan allows."""
    if account_type is AccountType.OWNER:
        return AccountType.OWNER.max_users
    if account_type is AccountType.MANAGER:
        return limits.max_managers
    return limits.max_technicians


def can_add_seat(
    limits: SubscriptionLimitations, account_type: AccountType, current_count: int
) -> bool:
    """Return whether one more member of ``account_type`` fits within the plan."""
    if account_type is AccountType.MANAGER and not limits.can_create_managers:
        return False
    return current_count < seat_limit(limits, account_type)


def require_seat(
    plan: SubscriptionPlan, account_type: AccountType, current_count: int
) -> None:
    """Raise ``QuotaExceeded`` when a new member would not fit the plan."""
    limits = limitations(plan)
    if not can_add_seat(limits, account_type, current_count):
        limit = seat_limit(limits, account_type)
        if account_type is AccountType.MANAGER and not limits.can_create_managers:
            limit = 0
        raise QuotaExceeded(f"{account_type.value}s", current_count, limit, plan.value)


def require_vehicle_slot(max_vehicles: int, current_count: int, plan: SubscriptionPlan) -> None:
    """Raise ``QuotaExceeded`` before a vehicle is created beyond ``max_vehicles``."""
    if current_count >= max_vehicles:
        raise QuotaExceeded("vehicles", current_count, max_vehicles, plan.value)


def require_location_slot(plan: SubscriptionPlan, current_count: int) -> None:
    """Raise ``QuotaExceeded`` before a location is added beyond the plan limit."""
    limit = limitations(plan).max_locations
    if current_count >= limit:
        raise QuotaExceeded("locations", current_count, limit, plan.value)


def recommended_plan_for_fleet(fleet_size: FleetSize) -> SubscriptionPlan:
    return _FLEET_PLANS[fleet_size]


_PAID_PLANS_BY_SIZE = (
    SubscriptionPlan.BASIC,
    SubscriptionPlan.PRO,
    SubscriptionPlan.ENTERPRISE,
)


def plan_for_management_structure(
    structure: ManagementStructure,
    estimated_managers: int = 1,
    estimated_technicians: int = 0,
) -> SubscriptionPlan:
    """Pick the smallest plan that supports a management structure.

    The result is raised further when the estimated technician count would
    not fit its technician seats.
    """
    if structure is ManagementStructure.SINGLE_MANAGER:
        plan = SubscriptionPlan.BASIC
    elif structure is ManagementStructure.MULTIPLE_MANAGERS:
        if estimated_managers <= limitations(SubscriptionPlan.PRO).max_managers:
            plan = SubscriptionPlan.PRO
        else:
            plan = SubscriptionPlan.ENTERPRISE
    else:
        plan = SubscriptionPlan.ENTERPRISE

    for candidate in _PAID_PLANS_BY_SIZE[_PAID_PLANS_BY_SIZE.index(plan) :]:
        if estimated_technicians <= limitations(candidate).max_technicians:
            return candidate
    return SubscriptionPlan.ENTERPRISE


__all__ = [
    "BillingPeriod",
    "FleetSize",
    "ManagementStructure",
    "SubscriptionLimitations",
    "SubscriptionPlan",
    "can_add_seat",
    "limitations",
    "plan_for_management_structure",
    "recommended_plan_for_fleet",
    "require_location_slot",
    "require_seat",
    "require_vehicle_slot",
    "seat_limit",
]
