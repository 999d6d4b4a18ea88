"""User account data access and mutation helpers."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from vehix.core.security import get_password_hash
from vehix.db.store import RecordStore
from vehix.models.user_account import UserAccount
from vehix.security.account_types import AccountType
from vehix.security.permissions import Permission
from vehix.services import audit_service

logger = logging.getLogger(__name__)


async def get_user_account(session: AsyncSession, user_id: str) -> UserAccount | None:
    """Return a user account by ID."""
    return await RecordStore(session).get(UserAccount, user_id)


async def get_user_by_email(session: AsyncSession, email: str) -> UserAccount | None:
    """Return a user account by email address."""
    return await RecordStore(session).fetch_one(
        UserAccount, UserAccount.email == email.strip().lower()
    )


async def list_user_accounts(
    session: AsyncSession,
    *,
    business_account_id: str,
    include_inactive: bool = False,
) -> list[UserAccount]:
    """Return members of a business account ordered by creation time."""
    criteria = [UserAccount.business_account_id == business_account_id]
    if not include_inactive:
        criteria.append(UserAccount.is_active.is_(True))
    return await RecordStore(session).fetch_all(
        UserAccount, *criteria, order_by=UserAccount.created_at
    )


def build_user_account(
    *,
    full_name: str,
    email: str,
    password: str,
    account_type: AccountType,
    permissions: Iterable[Permission | str] = (),
    department_access: Iterable[str] = (),
    location_access: Iterable[str] = (),
    invited_by_user_id: str | None = None,
) -> UserAccount:
    """Construct an unsaved user account with a hashed password."""
    return UserAccount(
        full_name=full_name,
        email=email.strip().lower(),
        password_hash=get_password_hash(password),
        account_type=account_type,
        permissions=list(permissions),
        department_access=list(department_access),
        location_access=list(location_access),
        invited_by_user_id=invited_by_user_id,
    )


async def get_inviter(session: AsyncSession, user: UserAccount) -> UserAccount | None:
    """Look up the member who invited ``user``, if still on record."""
    if user.invited_by_user_id is None:
        return None
    return await get_user_account(session, user.invited_by_user_id)


async def grant_permissions(
    session: AsyncSession,
    user: UserAccount,
    permissions: Iterable[Permission | str],
    *,
    actor_id: str | None = None,
) -> UserAccount:
    """Add explicit grants to ``user``; existing defaults are untouched."""
    added = user.grant_permissions(permissions)
    if added:
        user.mark_pending_sync()
        audit_service.record_event(
            session,
            event_type="user.permissions_granted",
            business_account_id=user.business_account_id,
            user_id=actor_id,
            payload={
                "user_id": user.id,
                "permissions": sorted(permission.value for permission in added),
            },
        )
        logger.info(
            "Granted %s to user %s", ", ".join(sorted(p.value for p in added)), user.id
        )
    await RecordStore(session).save()
    return user


async def update_access(
    session: AsyncSession,
    user: UserAccount,
    *,
    departments: Iterable[str] | None = None,
    locations: Iterable[str] | None = None,
) -> UserAccount:
    """Replace department and/or location access for ``user``."""
    user.set_access(departments=departments, locations=locations)
    user.mark_pending_sync()
    await RecordStore(session).save()
    return user


async def record_login(session: AsyncSession, user: UserAccount) -> UserAccount:
    """Stamp the last login time."""
    user.record_login()
    await RecordStore(session).save()
    return user


async def deactivate_user_account(
    session: AsyncSession,
    user: UserAccount,
    *,
    actor_id: str | None = None,
) -> UserAccount:
    """Deactivate a member. The owner can only leave with the whole business."""
    if user.account_type is AccountType.OWNER:
        raise ValueError("The business owner cannot be deactivated individually")
    if not user.is_active:
        return user
    user.deactivate()
    user.mark_pending_sync()
    audit_service.record_event(
        session,
        event_type="user.deactivated",
        business_account_id=user.business_account_id,
        user_id=actor_id,
        payload={"user_id": user.id},
    )
    await RecordStore(session).save()
    logger.info("Deactivated user %s", user.id)
    return user
