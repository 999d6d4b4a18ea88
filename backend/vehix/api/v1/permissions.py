"""Permission catalog endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from vehix.api import deps
from vehix.models.user_account import UserAccount
from vehix.schemas.user_account import PermissionCategoryRead, PermissionRead
from vehix.security.permissions import PermissionCategory, permissions_in_category

router = APIRouter()


@router.get("", response_model=list[PermissionCategoryRead], summary="Permission catalog")
async def list_permissions(
    _current_user: Annotated[UserAccount, Depends(deps.get_current_user)],
) -> list[PermissionCategoryRead]:
    """Return every permission grouped by category."""
    return [
        PermissionCategoryRead(
            category=category.value,
            display_name=category.display_name,
            permissions=[
                PermissionRead(value=permission, display_name=permission.display_name)
                for permission in permissions_in_category(category)
            ],
        )
        for category in PermissionCategory
    ]
