"""Business account management services."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vehix.core.plans import BillingPeriod, SubscriptionPlan, limitations
from vehix.db.store import RecordStore
from vehix.models.business_account import BusinessAccount
from vehix.security.account_types import AccountType
from vehix.services import audit_service

logger = logging.getLogger(__name__)


async def get_business_account(
    session: AsyncSession, business_account_id: str
) -> BusinessAccount | None:
    """Fetch a single business account by identifier."""
    return await RecordStore(session).get(BusinessAccount, business_account_id)


async def list_business_accounts(
    session: AsyncSession, *, active_only: bool = False
) -> list[BusinessAccount]:
    """Return business accounts ordered by creation date."""
    criteria = [BusinessAccount.is_active.is_(True)] if active_only else []
    return await RecordStore(session).fetch_all(
        BusinessAccount, *criteria, order_by=BusinessAccount.created_at.desc()
    )


async def change_plan(
    session: AsyncSession,
    business: BusinessAccount,
    *,
    plan: SubscriptionPlan,
    billing_period: BillingPeriod | None = None,
    actor_id: str | None = None,
) -> BusinessAccount:
    """Move a business to ``plan`` and re-derive its seat limits.

    Existing members are kept even when a downgrade leaves the business over
    its new limits; quotas only apply to the next invitation.
    """
    previous = business.subscription_plan
    business.apply_plan(plan)
    if billing_period is not None:
        business.billing_period = billing_period
    business.mark_pending_sync()

    usage = seat_usage(business)
    if (
        usage["managers"] > business.max_managers
        or usage["technicians"] > business.max_technicians
    ):
        logger.warning(
            "Business %s is over its %s seat limits after plan change", business.id, plan.value
        )

    audit_service.record_event(
        session,
        event_type="business.plan_changed",
        business_account_id=business.id,
        user_id=actor_id,
        payload={"from": previous.value, "to": plan.value},
    )
    await RecordStore(session).save()
    logger.info("Business %s moved from %s to %s", business.id, previous.value, plan.value)
    return business


async def deactivate_business_account(
    session: AsyncSession,
    business: BusinessAccount,
    *,
    actor_id: str | None = None,
) -> BusinessAccount:
    """Deactivate a business and every one of its members."""
    changed = business.deactivate()
    business.mark_pending_sync()
    for user in changed:
        user.mark_pending_sync()
    audit_service.record_event(
        session,
        event_type="business.deactivated",
        business_account_id=business.id,
        user_id=actor_id,
        payload={"deactivated_users": [user.id for user in changed]},
    )
    await RecordStore(session).save()
    logger.info(
        "Deactivated business %s and %d member(s)", business.id, len(changed)
    )
    return business


def seat_usage(business: BusinessAccount) -> dict[str, object]:
    """Summarise active seats against the current plan."""
    limits = limitations(business.subscription_plan)
    return {
        "plan": business.subscription_plan,
        "max_vehicles": business.max_vehicles,
        "max_managers": business.max_managers,
        "max_technicians": business.max_technicians,
        "max_locations": limits.max_locations,
        "managers": business.member_count(AccountType.MANAGER),
        "technicians": business.member_count(AccountType.TECHNICIAN),
        "can_create_managers": limits.can_create_managers,
        "can_access_reports": limits.can_access_reports,
        "can_use_integrations": limits.can_use_integrations,
        "features": list(limits.features),
    }
