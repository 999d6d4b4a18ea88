"""User account model for members of a business account."""
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, event
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from sqlalchemy.types import TypeDecorator

from vehix.db.base import Base
from vehix.models.mixins import (
    SyncMetadataMixin,
    TimestampMixin,
    new_record_id,
    utcnow,
)
from vehix.security.access_scope import AccessScope, scope_from_list
from vehix.security.account_types import (
    AccountType,
    UserRole,
    can_invite,
    default_permissions,
    parse_account_type,
)
from vehix.security.permissions import Permission, parse_permissions


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from vehix.models.business_account import BusinessAccount


def _serialize_permissions(values: Iterable[Permission | str] | None) -> list[str]:
    return sorted(permission.value for permission in parse_permissions(values))


class AccountTypeColumn(TypeDecorator):
    """Stores ``AccountType`` values; unknown stored values raise ``ConfigurationError``."""

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return parse_account_type(value).value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return parse_account_type(value)


class UserAccount(TimestampMixin, SyncMetadataMixin, Base):
    """A member of a business account.

    ``permissions`` holds explicit grants on top of the account type defaults.
    Grants only widen access; a default can never be revoked per user.
    Members are never deleted, only deactivated.
    """

    __tablename__ = "user_accounts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_record_id
    )
    business_account_id: Mapped[str | None] = mapped_column(
        ForeignKey("business_accounts.id", ondelete="RESTRICT")
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        AccountTypeColumn(), default=AccountType.TECHNICIAN, nullable=False
    )
    permissions: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    department_access: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    location_access: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    invited_by_user_id: Mapped[str | None] = mapped_column(
        ForeignKey("user_accounts.id", ondelete="SET NULL")
    )

    business_account: Mapped["BusinessAccount | None"] = relationship(
        "BusinessAccount", back_populates="user_accounts", lazy="selectin"
    )

    def __init__(self, **kwargs: object) -> None:
        now = utcnow()
        kwargs.setdefault("id", new_record_id())
        kwargs.setdefault("account_type", AccountType.TECHNICIAN)
        kwargs.setdefault("permissions", [])
        kwargs.setdefault("department_access", [])
        kwargs.setdefault("location_access", [])
        kwargs.setdefault("is_active", True)
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        super().__init__(**kwargs)

    @validates("account_type")
    def _validate_account_type(self, _key: str, value: AccountType | str) -> AccountType:
        return parse_account_type(value)

    @validates("permissions")
    def _validate_permissions(
        self, _key: str, value: Iterable[Permission | str] | None
    ) -> list[str]:
        return _serialize_permissions(value)

    @validates("department_access", "location_access")
    def _validate_access(self, _key: str, value: Iterable[str] | None) -> list[str]:
        return scope_from_list(value).to_list()

    # Authorization ---------------------------------------------------------

    @property
    def explicit_permissions(self) -> frozenset[Permission]:
        return frozenset(parse_permissions(self.permissions))

    @property
    def department_scope(self) -> AccessScope:
        return scope_from_list(self.department_access)

    @property
    def location_scope(self) -> AccessScope:
        return scope_from_list(self.location_access)

    @property
    def user_role(self) -> UserRole:
        return self.account_type.user_role

    def effective_permissions(self) -> frozenset[Permission]:
        """Role defaults unioned with explicit grants."""
        return default_permissions(self.account_type) | self.explicit_permissions

    def has_permission(self, permission: Permission) -> bool:
        return permission in self.explicit_permissions or permission in default_permissions(
            self.account_type
        )

    def can_access_department(self, department: str) -> bool:
        if self.account_type is AccountType.OWNER:
            return True
        return self.department_scope.allows(department)

    def can_access_location(self, location: str) -> bool:
        if self.account_type is AccountType.OWNER:
            return True
        return self.location_scope.allows(location)

    def can_invite_users(self) -> bool:
        return (
            self.has_permission(Permission.MANAGE_USERS)
            and self.account_type is not AccountType.TECHNICIAN
        )

    def can_manage_subscription(self) -> bool:
        return self.account_type is AccountType.OWNER or self.has_permission(
            Permission.MANAGE_SUBSCRIPTION
        )

    def can_invite(self, account_type: AccountType) -> bool:
        """Whether this member may invite a member of ``account_type``."""
        return can_invite(self.account_type, account_type)

    # Mutations -------------------------------------------------------------

    def grant_permissions(self, permissions: Iterable[Permission | str]) -> set[Permission]:
        """Add explicit grants and return the ones that were new."""
        requested = parse_permissions(permissions)
        added = requested - self.explicit_permissions
        if added:
            self.permissions = [*(self.permissions or []), *(p.value for p in added)]
        return added

    def set_access(
        self,
        *,
        departments: Iterable[str] | None = None,
        locations: Iterable[str] | None = None,
    ) -> None:
        """Replace department/location access lists; an empty list lifts the restriction."""
        if departments is not None:
            self.department_access = list(departments)
        if locations is not None:
            self.location_access = list(locations)

    def record_login(self, at: datetime | None = None) -> None:
        self.last_login_at = at or utcnow()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = utcnow()


@event.listens_for(UserAccount, "load")
def _validate_loaded_permissions(target: UserAccount, _context: object) -> None:
    """Reject stored overrides that are no longer in the permission catalog."""
    parse_permissions(target.permissions)
