"""Invitation workflow for adding members to a business account."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from vehix.core.errors import InvitationError, QuotaExceeded
from vehix.core.plans import require_seat
from vehix.core.security import generate_temporary_password
from vehix.db.store import RecordStore
from vehix.models.business_account import BusinessAccount
from vehix.models.user_account import UserAccount
from vehix.schemas.user_account import UserInvitationCreate
from vehix.security.account_types import AccountType
from vehix.security.permissions import Permission
from vehix.services import audit_service, user_account_service

logger = logging.getLogger(__name__)


def ensure_can_invite(
    business: BusinessAccount,
    inviter: UserAccount,
    account_type: AccountType,
    permissions: Iterable[Permission] = (),
) -> None:
    """Raise ``InvitationError`` unless ``inviter`` may add ``account_type``.

    Explicit grants on the new member must be a subset of what the inviter
    holds.
    """
    if not business.is_active:
        raise InvitationError("Business account is inactive")
    if not inviter.is_active or inviter.business_account_id != business.id:
        raise InvitationError("Inviter is not an active member of this business")
    if not inviter.can_invite_users():
        raise InvitationError("Inviter is not allowed to invite users")
    if not inviter.can_invite(account_type):
        raise InvitationError(
            f"{inviter.account_type.value} accounts cannot invite {account_type.value} accounts"
        )
    if account_type is AccountType.OWNER and business.active_owner() is not None:
        raise InvitationError("Business already has an active owner")
    withheld = set(permissions) - inviter.effective_permissions()
    if withheld:
        raise InvitationError(
            "Cannot grant permissions you do not hold: "
            + ", ".join(sorted(permission.value for permission in withheld))
        )


async def invite_user(
    session: AsyncSession,
    *,
    business: BusinessAccount,
    inviter: UserAccount,
    payload: UserInvitationCreate,
) -> tuple[UserAccount, str]:
    """Create a member account and return it alongside its temporary password.

    Authority and plan quota are checked before anything is written; the
    business entity itself never enforces quota.
    """
    ensure_can_invite(
        business, inviter, payload.account_type, payload.permissions
    )

    existing_user = await user_account_service.get_user_by_email(
        session, email=payload.email
    )
    if existing_user is not None:
        raise ValueError("User with this email already exists")

    current = business.member_count(payload.account_type)
    try:
        require_seat(business.subscription_plan, payload.account_type, current)
    except QuotaExceeded:
        logger.warning(
            "Seat limit reached for %s on business %s (%s plan)",
            payload.account_type.value,
            business.id,
            business.subscription_plan.value,
        )
        raise

    temporary_password = generate_temporary_password()
    user = user_account_service.build_user_account(
        full_name=payload.full_name,
        email=payload.email,
        password=temporary_password,
        account_type=payload.account_type,
        permissions=payload.permissions,
        department_access=payload.department_access,
        location_access=payload.location_access,
        invited_by_user_id=inviter.id,
    )
    business.add_user_account(user)
    audit_service.record_event(
        session,
        event_type="user.invited",
        business_account_id=business.id,
        user_id=inviter.id,
        payload={"user_id": user.id, "account_type": payload.account_type.value},
    )
    await RecordStore(session).save()
    logger.info(
        "User %s invited %s as %s", inviter.id, user.id, payload.account_type.value
    )
    return user, temporary_password
