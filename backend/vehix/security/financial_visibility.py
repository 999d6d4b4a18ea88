"""Three-tier rule deciding which roles see financial figures."""

from __future__ import annotations

from vehix.security.account_types import UserRole

ALWAYS_VISIBLE_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.OWNER, UserRole.ADMIN, UserRole.DEALER}
)
TOGGLED_ROLES: frozenset[UserRole] = frozenset({UserRole.MANAGER, UserRole.PREMIUM})
NEVER_VISIBLE_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.STANDARD, UserRole.TECHNICIAN}
)

if ALWAYS_VISIBLE_ROLES | TOGGLED_ROLES | NEVER_VISIBLE_ROLES != set(UserRole):  # pragma: no cover
    raise RuntimeError("Financial visibility must classify every user role")


def coerce_role(role: UserRole | str | None) -> UserRole | None:
    """Return the matching ``UserRole`` or ``None`` for unknown input."""
    if isinstance(role, UserRole):
        return role
    if not role:
        return None
    try:
        return UserRole(str(role).lower())
    except ValueError:
        return None


def role_can_see(role: UserRole | str | None, toggle: bool) -> bool:
    """Apply the visibility rule for one stored toggle.

    Owners, admins and dealers always see the data, managers and premium users
    follow the toggle, and everyone else (unknown roles included) does not.
    """
    resolved = coerce_role(role)
    if resolved is None:
        return False
    if resolved in ALWAYS_VISIBLE_ROLES:
        return True
    if resolved in TOGGLED_ROLES:
        return bool(toggle)
    return False


__all__ = [
    "ALWAYS_VISIBLE_ROLES",
    "NEVER_VISIBLE_ROLES",
    "TOGGLED_ROLES",
    "coerce_role",
    "role_can_see",
]
