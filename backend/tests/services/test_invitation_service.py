"""Invitation workflow tests."""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import select

from vehix.core.errors import InvitationError, QuotaExceeded
from vehix.core.plans import SubscriptionPlan
from vehix.core.security import verify_password
from vehix.db.session import get_sessionmaker
from vehix.models import AuditEvent, UserAccount
from vehix.schemas.user_account import UserInvitationCreate
from vehix.security.account_types import AccountType
from vehix.security.permissions import Permission
from vehix.services import business_account_service, invitation_service

pytestmark = pytest.mark.asyncio


def _payload(email: str, account_type: AccountType, **extra: Any) -> UserInvitationCreate:
    return UserInvitationCreate(
        full_name="New Member",
        email=email,
        account_type=account_type,
        **extra,
    )


async def test_owner_invites_manager(
    seeded_business: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        business = await business_account_service.get_business_account(
            session, seeded_business["business_id"]
        )
        assert business is not None
        owner = next(m for m in business.user_accounts if m.account_type is AccountType.OWNER)

        user, temporary_password = await invitation_service.invite_user(
            session,
            business=business,
            inviter=owner,
            payload=_payload(
                "Second.Manager@Example.com",
                AccountType.MANAGER,
                permissions=[Permission.MANAGE_USERS],
                location_access=["Depot North"],
            ),
        )

        assert user.email == "second.manager@example.com"
        assert user.invited_by_user_id == owner.id
        assert verify_password(temporary_password, user.password_hash)
        assert user.can_invite_users()
        assert not user.can_access_location("Depot South")
        assert business.member_count(AccountType.MANAGER) == 2

        events = (
            await session.execute(
                select(AuditEvent).where(AuditEvent.event_type == "user.invited")
            )
        ).scalars().all()
        assert [event.payload["user_id"] for event in events] == [user.id]


async def test_manager_cannot_invite_manager(
    seeded_business: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        business = await business_account_service.get_business_account(
            session, seeded_business["business_id"]
        )
        manager = await session.get(UserAccount, seeded_business["manager_id"])
        manager.grant_permissions([Permission.MANAGE_USERS])

        with pytest.raises(InvitationError):
            await invitation_service.invite_user(
                session,
                business=business,
                inviter=manager,
                payload=_payload("peer@example.com", AccountType.MANAGER),
            )

        user, _ = await invitation_service.invite_user(
            session,
            business=business,
            inviter=manager,
            payload=_payload("junior@example.com", AccountType.TECHNICIAN),
        )
        assert user.account_type is AccountType.TECHNICIAN


async def test_manager_without_manage_users_is_rejected(
    seeded_business: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        business = await business_account_service.get_business_account(
            session, seeded_business["business_id"]
        )
        manager = await session.get(UserAccount, seeded_business["manager_id"])
        with pytest.raises(InvitationError):
            await invitation_service.invite_user(
                session,
                business=business,
                inviter=manager,
                payload=_payload("blocked@example.com", AccountType.TECHNICIAN),
            )


async def test_quota_is_checked_before_writing(
    seeded_business: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        business = await business_account_service.get_business_account(
            session, seeded_business["business_id"]
        )
        await business_account_service.change_plan(
            session, business, plan=SubscriptionPlan.BASIC
        )
        owner = business.active_owner()

        with pytest.raises(QuotaExceeded) as excinfo:
            await invitation_service.invite_user(
                session,
                business=business,
                inviter=owner,
                payload=_payload("extra.manager@example.com", AccountType.MANAGER),
            )
        assert excinfo.value.limit == 0
        assert excinfo.value.plan == "basic"

        for index in range(4):
            await invitation_service.invite_user(
                session,
                business=business,
                inviter=owner,
                payload=_payload(f"tech{index}@example.com", AccountType.TECHNICIAN),
            )
        with pytest.raises(QuotaExceeded) as excinfo:
            await invitation_service.invite_user(
                session,
                business=business,
                inviter=owner,
                payload=_payload("tech-overflow@example.com", AccountType.TECHNICIAN),
            )
        assert excinfo.value.current == 5

        stored = (
            await session.execute(
                select(UserAccount.email).where(
                    UserAccount.business_account_id == business.id
                )
            )
        ).scalars().all()
        assert "extra.manager@example.com" not in stored
        assert "tech-overflow@example.com" not in stored


async def test_duplicate_email_is_rejected(
    seeded_business: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        business = await business_account_service.get_business_account(
            session, seeded_business["business_id"]
        )
        with pytest.raises(ValueError):
            await invitation_service.invite_user(
                session,
                business=business,
                inviter=business.active_owner(),
                payload=_payload("TECH@example.com", AccountType.TECHNICIAN),
            )


async def test_inviter_cannot_hand_out_permissions_they_lack(
    seeded_business: dict[str, Any], db_url: str
) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        business = await business_account_service.get_business_account(
            session, seeded_business["business_id"]
        )
        manager = await session.get(UserAccount, seeded_business["manager_id"])
        manager.grant_permissions([Permission.MANAGE_USERS])

        with pytest.raises(InvitationError) as excinfo:
            await invitation_service.invite_user(
                session,
                business=business,
                inviter=manager,
                payload=_payload(
                    "escalated@example.com",
                    AccountType.TECHNICIAN,
                    permissions=[
                        Permission.MANAGE_SUBSCRIPTION,
                        Permission.MANAGE_SETTINGS,
                    ],
                ),
            )
        assert "manage_subscription" in str(excinfo.value)
        assert business.member_count(AccountType.TECHNICIAN) == 1

        user, _ = await invitation_service.invite_user(
            session,
            business=business,
            inviter=manager,
            payload=_payload(
                "reporter@example.com",
                AccountType.TECHNICIAN,
                permissions=[Permission.VIEW_REPORTS],
            ),
        )
        assert user.has_permission(Permission.VIEW_REPORTS)
        assert not user.can_manage_subscription()

        stored = (
            await session.execute(
                select(UserAccount.email).where(
                    UserAccount.email == "escalated@example.com"
                )
            )
        ).scalars().all()
        assert stored == []
