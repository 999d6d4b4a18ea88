"""User account schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    field_validator,
)

from vehix.security.account_types import AccountType
from vehix.security.permissions import Permission


_ALLOWED_DEV_EMAIL_DOMAINS = {"vehix.local"}
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def normalize_email(value: str) -> str:
    """Allow placeholder domains (e.g. *.local) while keeping core validation."""

    email = value.strip()
    try:
        return _EMAIL_ADAPTER.validate_python(email).lower()
    except Exception:
        local_part, _, domain = email.partition("@")
        if local_part and domain:
            if domain.endswith(".local") or domain in _ALLOWED_DEV_EMAIL_DOMAINS:
                return email.lower()
        raise


class UserAccountRead(BaseModel):
    """Serialized user account."""

    id: str
    business_account_id: str | None
    full_name: str
    email: str
    account_type: AccountType
    permissions: list[Permission]
    department_access: list[str]
    location_access: list[str]
    is_active: bool
    last_login_at: datetime | None = None
    invited_by_user_id: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserInvitationCreate(BaseModel):
    """Payload to invite a member into the current business."""

    full_name: str = Field(min_length=1, max_length=255)
    email: str
    account_type: AccountType
    permissions: list[Permission] = Field(default_factory=list)
    department_access: list[str] = Field(default_factory=list)
    location_access: list[str] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return normalize_email(value)


class UserInvitationRead(BaseModel):
    """Invited member alongside the one-time temporary password."""

    user: UserAccountRead
    temporary_password: str


class PermissionGrant(BaseModel):
    permissions: list[Permission] = Field(min_length=1)


class AccessUpdate(BaseModel):
    """Replacement access lists; omit a field to leave it unchanged."""

    department_access: list[str] | None = None
    location_access: list[str] | None = None


class PermissionCheckRead(BaseModel):
    user_id: str
    permission: Permission
    granted: bool


class PermissionRead(BaseModel):
    value: Permission
    display_name: str


class PermissionCategoryRead(BaseModel):
    category: str
    display_name: str
    permissions: list[PermissionRead]
