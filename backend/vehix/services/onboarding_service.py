"""Business signup: tenant, owner account and setup state in one save."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vehix.core.errors import InvitationError
from vehix.core.plans import plan_for_management_structure
from vehix.db.store import RecordStore
from vehix.models.business_account import BusinessAccount
from vehix.models.setup_state import FirstTimeSetupState
from vehix.models.user_account import UserAccount
from vehix.schemas.business_account import BusinessSetupCreate
from vehix.security.account_types import AccountType
from vehix.services import audit_service, user_account_service

logger = logging.getLogger(__name__)


async def create_business_account(
    session: AsyncSession, setup: BusinessSetupCreate
) -> tuple[BusinessAccount, UserAccount]:
    """Create a business with its owner and mark first-time setup complete."""
    existing_user = await user_account_service.get_user_by_email(
        session, email=setup.owner_email
    )
    if existing_user is not None:
        raise ValueError("User with this email already exists")

    plan = setup.selected_plan or plan_for_management_structure(
        setup.management_structure,
        setup.estimated_manager_count,
        setup.estimated_technician_count,
    )
    business = BusinessAccount.create(
        name=setup.business_name,
        business_type=setup.business_type,
        industry_type=setup.industry_type,
        fleet_size=setup.fleet_size.value,
        plan=plan,
        billing_period=setup.billing_period,
        management_structure=setup.management_structure,
    )
    owner = user_account_service.build_user_account(
        full_name=setup.owner_full_name,
        email=setup.owner_email,
        password=setup.owner_password,
        account_type=AccountType.OWNER,
    )
    add_owner(business, owner)

    store = RecordStore(session)
    store.insert_all(
        [
            business,
            FirstTimeSetupState(business_account_id=business.id, is_completed=True),
        ]
    )
    audit_service.record_event(
        session,
        event_type="business.created",
        business_account_id=business.id,
        user_id=owner.id,
        payload={"plan": plan.value, "name": business.name},
    )
    await store.save()
    logger.info("Created business %s on the %s plan", business.id, plan.value)
    return business, owner


def add_owner(business: BusinessAccount, owner: UserAccount) -> None:
    """Attach the owner, keeping at most one active owner per business."""
    if owner.account_type is not AccountType.OWNER:
        raise InvitationError("Only owner accounts can be added as the business owner")
    if business.active_owner() is not None:
        raise InvitationError("Business already has an active owner")
    business.add_user_account(owner)


async def is_setup_complete(session: AsyncSession, business_account_id: str) -> bool:
    state = await RecordStore(session).fetch_one(
        FirstTimeSetupState,
        FirstTimeSetupState.business_account_id == business_account_id,
    )
    return bool(state and state.is_completed)
