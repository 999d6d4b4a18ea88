"""Account types (member roles) and their default grants."""

from __future__ import annotations

import enum

from vehix.core.errors import ConfigurationError
from vehix.security.permissions import ALL_PERMISSIONS, Permission

# Seats for these types are bounded by the subscription plan, not the role.
PLAN_BOUNDED_SEATS = 999


class UserRole(str, enum.Enum):
    """Login-level role used by the financial visibility rules."""

    STANDARD = "standard"
    PREMIUM = "premium"
    ADMIN = "admin"
    DEALER = "dealer"
    TECHNICIAN = "technician"
    OWNER = "owner"
    MANAGER = "manager"


class AccountType(str, enum.Enum):
    """Role of a member inside a business account."""

    OWNER = "owner"
    MANAGER = "manager"
    TECHNICIAN = "technician"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def default_permissions(self) -> frozenset[Permission]:
        return _DEFAULT_PERMISSIONS[self]

    @property
    def max_users(self) -> int:
        return _MAX_USERS[self]

    @property
    def invitable_types(self) -> tuple["AccountType", ...]:
        return _INVITABLE[self]

    @property
    def user_role(self) -> UserRole:
        return _USER_ROLES[self]


_DESCRIPTIONS: dict[AccountType, str] = {
    AccountType.OWNER: "Full access to all business functions",
    AccountType.MANAGER: "Manage assigned departments and technicians",
    AccountType.TECHNICIAN: "Access to assigned vehicles and tasks",
}

_DEFAULT_PERMISSIONS: dict[AccountType, frozenset[Permission]] = {
    AccountType.OWNER: ALL_PERMISSIONS,
    AccountType.MANAGER: frozenset(
        {
            Permission.VIEW_VEHICLES,
            Permission.EDIT_VEHICLES,
            Permission.ADD_VEHICLES,
            Permission.VIEW_TECHNICIANS,
            Permission.EDIT_TECHNICIANS,
            Permission.ADD_TECHNICIANS,
            Permission.VIEW_REPORTS,
            Permission.MANAGE_INVENTORY,
            Permission.VIEW_SCHEDULE,
            Permission.EDIT_SCHEDULE,
        }
    ),
    AccountType.TECHNICIAN: frozenset(
        {
            Permission.VIEW_VEHICLES,
            Permission.VIEW_ASSIGNED_VEHICLES,
            Permission.UPDATE_VEHICLE_STATUS,
            Permission.VIEW_INVENTORY,
            Permission.VIEW_SCHEDULE,
            Permission.UPDATE_WORK_ORDERS,
        }
    ),
}

_MAX_USERS: dict[AccountType, int] = {
    AccountType.OWNER: 1,
    AccountType.MANAGER: PLAN_BOUNDED_SEATS,
    AccountType.TECHNICIAN: PLAN_BOUNDED_SEATS,
}

_INVITABLE: dict[AccountType, tuple[AccountType, ...]] = {
    AccountType.OWNER: (AccountType.MANAGER, AccountType.TECHNICIAN),
    AccountType.MANAGER: (AccountType.TECHNICIAN,),
    AccountType.TECHNICIAN: (),
}

_USER_ROLES: dict[AccountType, UserRole] = {
    AccountType.OWNER: UserRole.OWNER,
    AccountType.MANAGER: UserRole.MANAGER,
    AccountType.TECHNICIAN: UserRole.TECHNICIAN,
}

for _table in (_DESCRIPTIONS, _DEFAULT_PERMISSIONS, _MAX_USERS, _INVITABLE, _USER_ROLES):
    if set(_table) != set(AccountType):  # pragma: no cover
        raise RuntimeError("Account type policy tables must cover every account type")


def default_permissions(account_type: AccountType) -> frozenset[Permission]:
    """Return the fixed default grants for an account type."""
    return _DEFAULT_PERMISSIONS[account_type]


def can_invite(inviter: AccountType, invitee_type: AccountType) -> bool:
    """Return whether members of ``inviter`` type may invite ``invitee_type``."""
    return invitee_type in _INVITABLE[inviter]


def parse_account_type(value: AccountType | str) -> AccountType:
    """Resolve a stored value to an ``AccountType`` or raise ``ConfigurationError``."""
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(value)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown account type: {value!r}") from exc


__all__ = [
    "AccountType",
    "PLAN_BOUNDED_SEATS",
    "UserRole",
    "can_invite",
    "default_permissions",
    "parse_account_type",
]
