"""Permission catalog.

Every capability a member of a business account can hold is a ``Permission``.
The catalog is closed: overrides stored on a user account are validated
against it when the account is built or loaded, so an unknown value surfaces
as a ``ConfigurationError`` instead of silently never matching.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable

from vehix.core.errors import ConfigurationError


class PermissionCategory(str, enum.Enum):
    """Groups permissions for display and bulk assignment."""

    VEHICLE_MANAGEMENT = "vehicle_management"
    USER_MANAGEMENT = "user_management"
    INVENTORY_MANAGEMENT = "inventory_management"
    SCHEDULING = "scheduling"
    REPORTS_ANALYTICS = "reports_analytics"
    BUSINESS_SETTINGS = "business_settings"

    @property
    def display_name(self) -> str:
        return _CATEGORY_LABELS[self]


class Permission(str, enum.Enum):
    """A single capability grant."""

    # Vehicle management
    VIEW_VEHICLES = "view_vehicles"
    EDIT_VEHICLES = "edit_vehicles"
    ADD_VEHICLES = "add_vehicles"
    DELETE_VEHICLES = "delete_vehicles"
    VIEW_ASSIGNED_VEHICLES = "view_assigned_vehicles"
    UPDATE_VEHICLE_STATUS = "update_vehicle_status"

    # User management
    VIEW_TECHNICIANS = "view_technicians"
    EDIT_TECHNICIANS = "edit_technicians"
    ADD_TECHNICIANS = "add_technicians"
    DELETE_TECHNICIANS = "delete_technicians"
    MANAGE_USERS = "manage_users"
    VIEW_USER_ACTIVITY = "view_user_activity"

    # Inventory management
    VIEW_INVENTORY = "view_inventory"
    EDIT_INVENTORY = "edit_inventory"
    MANAGE_INVENTORY = "manage_inventory"
    ORDER_PARTS = "order_parts"

    # Scheduling and work orders
    VIEW_SCHEDULE = "view_schedule"
    EDIT_SCHEDULE = "edit_schedule"
    ASSIGN_TECHNICIANS = "assign_technicians"
    UPDATE_WORK_ORDERS = "update_work_orders"
    APPROVE_WORK_ORDERS = "approve_work_orders"

    # Reports and analytics
    VIEW_REPORTS = "view_reports"
    EXPORT_REPORTS = "export_reports"
    VIEW_ANALYTICS = "view_analytics"
    VIEW_FINANCIALS = "view_financials"

    # Business settings
    MANAGE_SETTINGS = "manage_settings"
    MANAGE_SUBSCRIPTION = "manage_subscription"
    MANAGE_INTEGRATIONS = "manage_integrations"
    VIEW_AUDIT_LOGS = "view_audit_logs"

    @property
    def display_name(self) -> str:
        """Human readable label, e.g. ``View Vehicles``."""
        return self.value.replace("_", " ").title()

    @property
    def category(self) -> PermissionCategory:
        return _PERMISSION_CATEGORIES[self]


_CATEGORY_LABELS: dict[PermissionCategory, str] = {
    PermissionCategory.VEHICLE_MANAGEMENT: "Vehicle Management",
    PermissionCategory.USER_MANAGEMENT: "User Management",
    PermissionCategory.INVENTORY_MANAGEMENT: "Inventory Management",
    PermissionCategory.SCHEDULING: "Scheduling",
    PermissionCategory.REPORTS_ANALYTICS: "Reports & Analytics",
    PermissionCategory.BUSINESS_SETTINGS: "Business Settings",
}

_CATEGORY_MEMBERS: dict[PermissionCategory, tuple[Permission, ...]] = {
    PermissionCategory.VEHICLE_MANAGEMENT: (
        Permission.VIEW_VEHICLES,
        Permission.EDIT_VEHICLES,
        Permission.ADD_VEHICLES,
        Permission.DELETE_VEHICLES,
        Permission.VIEW_ASSIGNED_VEHICLES,
        Permission.UPDATE_VEHICLE_STATUS,
    ),
    PermissionCategory.USER_MANAGEMENT: (
        Permission.VIEW_TECHNICIANS,
        Permission.EDIT_TECHNICIANS,
        Permission.ADD_TECHNICIANS,
        Permission.DELETE_TECHNICIANS,
        Permission.MANAGE_USERS,
        Permission.VIEW_USER_ACTIVITY,
    ),
    PermissionCategory.INVENTORY_MANAGEMENT: (
        Permission.VIEW_INVENTORY,
        Permission.EDIT_INVENTORY,
        Permission.MANAGE_INVENTORY,
        Permission.ORDER_PARTS,
    ),
    PermissionCategory.SCHEDULING: (
        Permission.VIEW_SCHEDULE,
        Permission.EDIT_SCHEDULE,
        Permission.ASSIGN_TECHNICIANS,
        Permission.UPDATE_WORK_ORDERS,
        Permission.APPROVE_WORK_ORDERS,
    ),
    PermissionCategory.REPORTS_ANALYTICS: (
        Permission.VIEW_REPORTS,
        Permission.EXPORT_REPORTS,
        Permission.VIEW_ANALYTICS,
        Permission.VIEW_FINANCIALS,
    ),
    PermissionCategory.BUSINESS_SETTINGS: (
        Permission.MANAGE_SETTINGS,
        Permission.MANAGE_SUBSCRIPTION,
        Permission.MANAGE_INTEGRATIONS,
        Permission.VIEW_AUDIT_LOGS,
    ),
}

_PERMISSION_CATEGORIES: dict[Permission, PermissionCategory] = {
    permission: category
    for category, members in _CATEGORY_MEMBERS.items()
    for permission in members
}

if set(_CATEGORY_LABELS) != set(PermissionCategory):  # pragma: no cover
    raise RuntimeError("Every permission category needs a display label")
if set(_PERMISSION_CATEGORIES) != set(Permission):  # pragma: no cover
    raise RuntimeError("Every permission must belong to exactly one category")

ALL_PERMISSIONS: frozenset[Permission] = frozenset(Permission)


def permissions_in_category(category: PermissionCategory) -> list[Permission]:
    """Return the permissions of a category in catalog order."""
    return list(_CATEGORY_MEMBERS[category])


def parse_permission(value: Permission | str) -> Permission:
    """Resolve a stored value to a ``Permission`` or raise ``ConfigurationError``."""
    if isinstance(value, Permission):
        return value
    try:
        return Permission(value)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown permission: {value!r}") from exc


def parse_permissions(values: Iterable[Permission | str] | None) -> set[Permission]:
    """Resolve a collection of stored values, rejecting anything unknown."""
    if not values:
        return set()
    return {parse_permission(value) for value in values}


__all__ = [
    "ALL_PERMISSIONS",
    "Permission",
    "PermissionCategory",
    "parse_permission",
    "parse_permissions",
    "permissions_in_category",
]
