"""Audit event model for tracking key account actions."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from vehix.db.base import Base
from vehix.models.mixins import new_record_id, utcnow


class AuditEvent(Base):
    """Stores immutable audit events for authentication and admin actions."""

    __tablename__ = "audit_events"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_record_id
    )
    business_account_id: Mapped[str | None] = mapped_column(
        ForeignKey("business_accounts.id", ondelete="SET NULL")
    )
    user_id: Mapped[str | None] = mapped_column(
        ForeignKey("user_accounts.id", ondelete="SET NULL")
    )
    event_type: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1024))
    payload: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
