"""Account type defaults and invitation rules."""

from __future__ import annotations

import pytest

from vehix.core.errors import ConfigurationError
from vehix.security.account_types import (
    PLAN_BOUNDED_SEATS,
    AccountType,
    UserRole,
    can_invite,
    default_permissions,
    parse_account_type,
)
from vehix.security.permissions import ALL_PERMISSIONS, Permission


def test_owner_defaults_to_every_permission() -> None:
    assert default_permissions(AccountType.OWNER) == ALL_PERMISSIONS


def test_manager_defaults() -> None:
    defaults = AccountType.MANAGER.default_permissions
    assert len(defaults) == 10
    assert Permission.ADD_TECHNICIANS in defaults
    assert Permission.MANAGE_USERS not in defaults
    assert Permission.VIEW_FINANCIALS not in defaults


def test_technician_defaults() -> None:
    assert default_permissions(AccountType.TECHNICIAN) == {
        Permission.VIEW_VEHICLES,
        Permission.VIEW_ASSIGNED_VEHICLES,
        Permission.UPDATE_VEHICLE_STATUS,
        Permission.VIEW_INVENTORY,
        Permission.VIEW_SCHEDULE,
        Permission.UPDATE_WORK_ORDERS,
    }


def test_seat_caps() -> None:
    assert AccountType.OWNER.max_users == 1
    assert AccountType.MANAGER.max_users == PLAN_BOUNDED_SEATS
    assert AccountType.TECHNICIAN.max_users == PLAN_BOUNDED_SEATS


@pytest.mark.parametrize(
    ("inviter", "invitee", "allowed"),
    [
        (AccountType.OWNER, AccountType.MANAGER, True),
        (AccountType.OWNER, AccountType.TECHNICIAN, True),
        (AccountType.OWNER, AccountType.OWNER, False),
        (AccountType.MANAGER, AccountType.TECHNICIAN, True),
        (AccountType.MANAGER, AccountType.MANAGER, False),
        (AccountType.TECHNICIAN, AccountType.TECHNICIAN, False),
    ],
)
def test_invitation_matrix(
    inviter: AccountType, invitee: AccountType, allowed: bool
) -> None:
    assert can_invite(inviter, invitee) is allowed


def test_account_types_map_to_user_roles() -> None:
    assert AccountType.OWNER.user_role is UserRole.OWNER
    assert AccountType.MANAGER.user_role is UserRole.MANAGER
    assert AccountType.TECHNICIAN.user_role is UserRole.TECHNICIAN


def test_parse_account_type() -> None:
    assert parse_account_type("manager") is AccountType.MANAGER
    with pytest.raises(ConfigurationError):
        parse_account_type("janitor")
