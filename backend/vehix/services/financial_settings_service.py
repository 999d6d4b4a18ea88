"""Loading and updating per-tenant financial visibility settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from vehix.core.config import get_settings
from vehix.db.store import RecordStore
from vehix.models.financial_settings import FinancialVisibilitySetting
from vehix.schemas.financial_settings import FinancialSettingsUpdate
from vehix.security.account_types import UserRole
from vehix.services import audit_service

logger = logging.getLogger(__name__)


async def get_settings_record(
    session: AsyncSession, business_account_id: str
) -> FinancialVisibilitySetting | None:
    return await RecordStore(session).fetch_one(
        FinancialVisibilitySetting,
        FinancialVisibilitySetting.business_account_id == business_account_id,
    )


async def get_or_create_settings(
    session: AsyncSession, business_account_id: str
) -> FinancialVisibilitySetting:
    """Return the tenant's settings, creating them with defaults on first access."""
    existing = await get_settings_record(session, business_account_id)
    if existing is not None:
        return existing

    store = RecordStore(session)
    created = FinancialVisibilitySetting(
        business_account_id=business_account_id,
        financial_alert_threshold=get_settings().default_financial_alert_threshold,
    )
    store.insert(created)
    await store.save()
    logger.info("Created default financial settings for business %s", business_account_id)
    return created


async def update_settings(
    session: AsyncSession,
    record: FinancialVisibilitySetting,
    payload: FinancialSettingsUpdate,
    *,
    updated_by: str,
) -> FinancialVisibilitySetting:
    """Apply changed fields and stamp the updater.

    Whether ``updated_by`` may change settings is decided by the caller.
    """
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(record, field, value)
    record.update_settings(by=updated_by)
    audit_service.record_event(
        session,
        event_type="settings.financial_updated",
        business_account_id=record.business_account_id,
        user_id=updated_by,
        payload={"fields": sorted(changes)},
    )
    await RecordStore(session).save()
    return record


@dataclass
class FinancialSettingsContext:
    """Financial settings passed explicitly to whatever needs visibility checks.

    Until ``load`` finds or creates a record every check fails closed.
    """

    business_account_id: str
    record: FinancialVisibilitySetting | None = None

    @classmethod
    async def load(
        cls, session: AsyncSession, business_account_id: str
    ) -> "FinancialSettingsContext":
        record = await get_or_create_settings(session, business_account_id)
        return cls(business_account_id=business_account_id, record=record)

    @property
    def is_loaded(self) -> bool:
        return self.record is not None

    async def save(
        self,
        session: AsyncSession,
        payload: FinancialSettingsUpdate,
        *,
        updated_by: str,
    ) -> FinancialVisibilitySetting:
        if self.record is None:
            self.record = await get_or_create_settings(session, self.business_account_id)
        return await update_settings(session, self.record, payload, updated_by=updated_by)

    def can_user_see_financial_data(self, role: UserRole | str | None) -> bool:
        return self.record is not None and self.record.can_user_see_financial_data(role)

    def can_user_see_detailed_reports(self, role: UserRole | str | None) -> bool:
        return self.record is not None and self.record.can_user_see_detailed_reports(role)

    def can_user_see_data_analytics(self, role: UserRole | str | None) -> bool:
        return self.record is not None and self.record.can_user_see_data_analytics(role)
