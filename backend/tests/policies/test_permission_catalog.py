"""Permission catalog tests."""

from __future__ import annotations

import pytest

from vehix.core.errors import ConfigurationError
from vehix.security.permissions import (
    ALL_PERMISSIONS,
    Permission,
    PermissionCategory,
    parse_permission,
    parse_permissions,
    permissions_in_category,
)


def test_catalog_has_every_permission_once() -> None:
    assert len(Permission) == 29
    categorized = [
        permission
        for category in PermissionCategory
        for permission in permissions_in_category(category)
    ]
    assert len(categorized) == len(set(categorized))
    assert set(categorized) == ALL_PERMISSIONS


def test_display_names_are_title_cased() -> None:
    assert Permission.VIEW_VEHICLES.display_name == "View Vehicles"
    assert Permission.MANAGE_SUBSCRIPTION.display_name == "Manage Subscription"
    assert PermissionCategory.REPORTS_ANALYTICS.display_name == "Reports & Analytics"


def test_category_lookup() -> None:
    assert Permission.ORDER_PARTS.category is PermissionCategory.INVENTORY_MANAGEMENT
    assert Permission.APPROVE_WORK_ORDERS.category is PermissionCategory.SCHEDULING
    assert permissions_in_category(PermissionCategory.BUSINESS_SETTINGS) == [
        Permission.MANAGE_SETTINGS,
        Permission.MANAGE_SUBSCRIPTION,
        Permission.MANAGE_INTEGRATIONS,
        Permission.VIEW_AUDIT_LOGS,
    ]


def test_parse_accepts_stored_values() -> None:
    assert parse_permission("view_reports") is Permission.VIEW_REPORTS
    assert parse_permissions(["edit_vehicles", Permission.EDIT_VEHICLES]) == {
        Permission.EDIT_VEHICLES
    }
    assert parse_permissions(None) == set()


def test_unknown_permission_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        parse_permission("launch_rockets")
    with pytest.raises(ConfigurationError):
        parse_permissions(["view_vehicles", "teleport"])
