"""Business account endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from vehix.api import deps
from vehix.models.business_account import BusinessAccount
from vehix.models.user_account import UserAccount
from vehix.schemas.business_account import (
    BusinessAccountRead,
    BusinessSetupCreate,
    BusinessSignupRead,
    PlanChange,
    SeatUsageRead,
)
from vehix.schemas.user_account import UserAccountRead
from vehix.security.account_types import AccountType
from vehix.services import business_account_service, onboarding_service
from vehix.services.auth_service import create_access_token_for_user

router = APIRouter()


@router.post(
    "",
    response_model=BusinessSignupRead,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up a business and its owner",
)
async def create_business_account(
    payload: BusinessSetupCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> BusinessSignupRead:
    try:
        business, owner = await onboarding_service.create_business_account(
            session, payload
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return BusinessSignupRead(
        business=BusinessAccountRead.model_validate(business),
        owner=UserAccountRead.model_validate(owner),
        access_token=create_access_token_for_user(owner),
    )


@router.get("/me", response_model=BusinessAccountRead, summary="Current business")
async def read_current_business(
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> BusinessAccountRead:
    return BusinessAccountRead.model_validate(business)


@router.get("/me/limits", response_model=SeatUsageRead, summary="Plan limits and usage")
async def read_seat_usage(
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> SeatUsageRead:
    return SeatUsageRead.model_validate(business_account_service.seat_usage(business))


@router.patch("/me/plan", response_model=BusinessAccountRead, summary="Change plan")
async def change_plan(
    payload: PlanChange,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
) -> BusinessAccountRead:
    if not current_user.can_manage_subscription():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
        )
    updated = await business_account_service.change_plan(
        session,
        business,
        plan=payload.plan,
        billing_period=payload.billing_period,
        actor_id=current_user.id,
    )
    return BusinessAccountRead.model_validate(updated)


@router.post(
    "/me/deactivate",
    response_model=BusinessAccountRead,
    summary="Deactivate the business and all members",
)
async def deactivate_business(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
) -> BusinessAccountRead:
    if current_user.account_type is not AccountType.OWNER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner can deactivate the business",
        )
    updated = await business_account_service.deactivate_business_account(
        session, business, actor_id=current_user.id
    )
    return BusinessAccountRead.model_validate(updated)
