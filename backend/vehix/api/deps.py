"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from vehix.core.config import get_settings
from vehix.core.security import decode_access_token
from vehix.db.session import get_session
from vehix.models.business_account import BusinessAccount
from vehix.models.user_account import UserAccount
from vehix.security.permissions import Permission
from vehix.services import business_account_service, user_account_service

settings = get_settings()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_v1_prefix}/auth/token")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserAccount:
    """Authenticate request via bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(token)
    except JWTError as exc:
        raise credentials_exception from exc

    subject = payload.get("sub")
    if not subject:
        raise credentials_exception

    user = await user_account_service.get_user_account(session, str(subject))
    if user is None or not user.is_active:
        raise credentials_exception
    return user


async def get_current_business(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    current_user: Annotated[UserAccount, Depends(get_current_user)],
) -> BusinessAccount:
    """Return the business account the current member belongs to."""
    business = None
    if current_user.business_account_id is not None:
        business = await business_account_service.get_business_account(
            session, current_user.business_account_id
        )
    if business is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Business account not found"
        )
    return business


def require_permission(user: UserAccount, permission: Permission) -> None:
    """Raise HTTP 403 unless ``user`` holds ``permission``."""
    if not user.has_permission(permission):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )


def get_member_or_404(business: BusinessAccount, user_id: str) -> UserAccount:
    """Return a member of ``business`` by id, hiding other tenants' users."""
    for member in business.user_accounts:
        if member.id == user_id:
            return member
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
