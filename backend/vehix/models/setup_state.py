"""First-time setup tracking for a tenant."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from vehix.db.base import Base
from vehix.models.mixins import TimestampMixin, new_record_id


class FirstTimeSetupState(TimestampMixin, Base):
    """Records whether onboarding finished for a business account."""

    __tablename__ = "first_time_setup_states"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_record_id
    )
    business_account_id: Mapped[str | None] = mapped_column(
        ForeignKey("business_accounts.id", ondelete="CASCADE"), unique=True
    )
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    has_shown_walkthrough: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
