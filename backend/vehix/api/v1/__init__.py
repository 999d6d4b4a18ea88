"""Versioned API router."""

from fastapi import APIRouter

from . import auth, business_accounts, health, permissions, settings, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(
    business_accounts.router, prefix="/business-accounts", tags=["business-accounts"]
)
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])

__all__ = ["router"]
