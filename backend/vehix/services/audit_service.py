"""Helper utilities for recording audit events."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from vehix.models.audit_event import AuditEvent


def record_event(
    session: AsyncSession,
    *,
    event_type: str,
    business_account_id: str | None = None,
    user_id: str | None = None,
    description: str | None = None,
    payload: dict[str, Any] | None = None,
) -> AuditEvent:
    """Stage an audit event; it is written with the caller's next commit."""
    event = AuditEvent(
        business_account_id=business_account_id,
        user_id=user_id,
        event_type=event_type,
        description=description,
        payload=payload,
    )
    session.add(event)
    return event
