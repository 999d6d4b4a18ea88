"""Security utilities for hashing and JWT handling."""

import secrets
import string
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import jwt

from vehix.core.config import get_settings

_TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its hash using bcrypt."""
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
    except (ValueError, TypeError):  # guard against malformed hashes
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage using bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def generate_temporary_password(length: int | None = None) -> str:
    """Return a random password handed to newly invited members."""
    size = length or get_settings().temporary_password_length
    return "".join(secrets.choice(_TEMP_PASSWORD_ALPHABET) for _ in range(size))


def create_access_token(
    subject: str, expires_delta: timedelta | None = None, **extra: Any
) -> str:
    """Create a JWT access token."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(UTC) + expires_delta
    claims: dict[str, Any] = {"sub": subject, "exp": expire}
    claims.update(extra)
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode a JWT token, raising JWTError on failure."""
    settings = get_settings()
    return jwt.decode(
        token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
    )
