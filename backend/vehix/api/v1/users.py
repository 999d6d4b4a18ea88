"""Member management endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from vehix.api import deps
from vehix.core.errors import InvitationError, QuotaExceeded
from vehix.models.business_account import BusinessAccount
from vehix.models.user_account import UserAccount
from vehix.schemas.user_account import (
    AccessUpdate,
    PermissionCheckRead,
    PermissionGrant,
    UserAccountRead,
    UserInvitationCreate,
    UserInvitationRead,
)
from vehix.security.permissions import Permission
from vehix.services import invitation_service, user_account_service

router = APIRouter()


def _assert_can_manage(actor: UserAccount, target: UserAccount) -> None:
    """Managers may only change members they would be allowed to invite."""
    if not actor.can_invite_users() or not actor.can_invite(target.account_type):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
        )


@router.get("/me", response_model=UserAccountRead, summary="Current member profile")
async def read_current_user(
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
) -> UserAccountRead:
    """Return the authenticated member's profile."""
    return UserAccountRead.model_validate(current_user)


@router.get("", response_model=list[UserAccountRead], summary="List members")
async def list_users(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
    include_inactive: bool = False,
) -> list[UserAccountRead]:
    """Return members of the current business."""
    deps.require_permission(current_user, Permission.VIEW_TECHNICIANS)
    users = await user_account_service.list_user_accounts(
        session,
        business_account_id=business.id,
        include_inactive=include_inactive,
    )
    return [UserAccountRead.model_validate(obj) for obj in users]


@router.post(
    "/invitations",
    response_model=UserInvitationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Invite a member",
)
async def invite_user(
    payload: UserInvitationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> UserInvitationRead:
    try:
        user, temporary_password = await invitation_service.invite_user(
            session, business=business, inviter=current_user, payload=payload
        )
    except InvitationError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)
        ) from exc
    except QuotaExceeded as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return UserInvitationRead(
        user=UserAccountRead.model_validate(user),
        temporary_password=temporary_password,
    )


@router.get(
    "/{user_id}/permissions/{permission}",
    response_model=PermissionCheckRead,
    summary="Check a member permission",
)
async def check_permission(
    user_id: str,
    permission: Permission,
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> PermissionCheckRead:
    if user_id != current_user.id:
        deps.require_permission(current_user, Permission.VIEW_TECHNICIANS)
    target = deps.get_member_or_404(business, user_id)
    return PermissionCheckRead(
        user_id=target.id,
        permission=permission,
        granted=target.has_permission(permission),
    )


@router.post(
    "/{user_id}/permissions",
    response_model=UserAccountRead,
    summary="Grant additional permissions",
)
async def grant_permissions(
    user_id: str,
    payload: PermissionGrant,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> UserAccountRead:
    target = deps.get_member_or_404(business, user_id)
    _assert_can_manage(current_user, target)
    if not set(payload.permissions) <= current_user.effective_permissions():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot grant permissions you do not hold",
        )
    updated = await user_account_service.grant_permissions(
        session, target, payload.permissions, actor_id=current_user.id
    )
    return UserAccountRead.model_validate(updated)


@router.put(
    "/{user_id}/access",
    response_model=UserAccountRead,
    summary="Replace department and location access",
)
async def update_access(
    user_id: str,
    payload: AccessUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> UserAccountRead:
    target = deps.get_member_or_404(business, user_id)
    _assert_can_manage(current_user, target)
    updated = await user_account_service.update_access(
        session,
        target,
        departments=payload.department_access,
        locations=payload.location_access,
    )
    return UserAccountRead.model_validate(updated)


@router.post(
    "/{user_id}/deactivate",
    response_model=UserAccountRead,
    summary="Deactivate a member",
)
async def deactivate_user(
    user_id: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
    business: Annotated[BusinessAccount, Depends(deps.get_current_business)],
) -> UserAccountRead:
    target = deps.get_member_or_404(business, user_id)
    _assert_can_manage(current_user, target)
    try:
        updated = await user_account_service.deactivate_user_account(
            session, target, actor_id=current_user.id
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return UserAccountRead.model_validate(updated)
