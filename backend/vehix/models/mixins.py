"""Common ORM mixins."""
from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(UTC)


def new_record_id() -> str:
    """Return a caller-generated identifier usable before the record is synced."""
    return str(uuid.uuid4())


class SyncStatus(int, enum.Enum):
    """Cloud sync state of a record, owned by the sync collaborator."""

    UNSYNCED = 0
    PENDING = 1
    SYNCED = 2
    FAILED = 3


class TimestampMixin:
    """Mixin that adds created/updated timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )


class SyncMetadataMixin:
    """Bookkeeping fields for cloud sync; account policies never read them."""

    cloud_record_id: Mapped[str | None] = mapped_column(String(255))
    sync_status: Mapped[SyncStatus] = mapped_column(
        Enum(SyncStatus), default=SyncStatus.UNSYNCED, nullable=False
    )
    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def mark_pending_sync(self) -> None:
        self.sync_status = SyncStatus.PENDING
