"""Authentication service helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from vehix.core.security import create_access_token, verify_password
from vehix.models.user_account import UserAccount
from vehix.services import user_account_service


async def authenticate_user(
    session: AsyncSession, email: str, password: str
) -> UserAccount | None:
    """Validate credentials and return the member if correct."""
    user = await user_account_service.get_user_by_email(session, email=email)
    if user is None:
        return None
    if not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def create_access_token_for_user(user: UserAccount) -> str:
    """Generate a JWT for a member."""
    return create_access_token(user.id, account_type=user.account_type.value)
