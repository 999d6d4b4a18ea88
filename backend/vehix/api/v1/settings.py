"""Financial visibility settings endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from vehix.api import deps
from vehix.models.business_account import BusinessAccount
from vehix.models.user_account import UserAccount
from vehix.schemas.financial_settings import (
    FinancialSettingsRead,
    FinancialSettingsUpdate,
    FinancialVisibilityRead,
)
from vehix.security.permissions import Permission
from vehix.services.financial_settings_service import FinancialSettingsContext

router = APIRouter()


@router.get(
    "/financial", response_model=FinancialSettingsRead, summary="Financial settings"
)
async def read_financial_settings(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> FinancialSettingsRead:
    deps.require_permission(current_user, Permission.MANAGE_SETTINGS)
    context = await FinancialSettingsContext.load(session, business.id)
    return FinancialSettingsRead.model_validate(context.record)


@router.patch(
    "/financial",
    response_model=FinancialSettingsRead,
    summary="Update financial settings",
)
async def update_financial_settings(
    payload: FinancialSettingsUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> FinancialSettingsRead:
    deps.require_permission(current_user, Permission.MANAGE_SETTINGS)
    context = await FinancialSettingsContext.load(session, business.id)
    record = await context.save(session, payload, updated_by=current_user.id)
    return FinancialSettingsRead.model_validate(record)


@router.get(
    "/financial/visibility",
    response_model=FinancialVisibilityRead,
    summary="Financial visibility for the current member",
)
async def read_financial_visibility(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> FinancialVisibilityRead:
    if not business.is_active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Business account not found"
        )
    context = await FinancialSettingsContext.load(session, business.id)
    role = current_user.user_role
    return FinancialVisibilityRead(
        role=role.value,
        financial_data=context.can_user_see_financial_data(role),
        detailed_reports=context.can_user_see_detailed_reports(role),
        data_analytics=context.can_user_see_data_analytics(role),
    )
