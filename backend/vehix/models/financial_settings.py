"""Per-tenant financial visibility settings."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import JSON, Boolean, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from vehix.db.base import Base
from vehix.models.mixins import TimestampMixin, new_record_id, utcnow
from vehix.security.account_types import UserRole
from vehix.security.financial_visibility import role_can_see


DEFAULT_ALERT_THRESHOLD = Decimal("10000.00")

# Toggle defaults applied when a tenant's settings are first created.
FINANCIAL_SETTING_DEFAULTS: dict[str, object] = {
    "show_financial_data_to_managers": True,
    "show_vehicle_inventory_values": True,
    "show_purchase_order_spending": True,
    "show_detailed_financial_reports": False,
    "show_data_analytics_to_managers": True,
    "enable_executive_financial_section": True,
    "show_monthly_spending_alerts": True,
    "show_inventory_values_in_vehicle_list": True,
    "enable_inventory_value_tracking": True,
    "enable_automatic_financial_reports": False,
}


class FinancialVisibilitySetting(TimestampMixin, Base):
    """Controls whether manager-tier roles see financial figures.

    Owners, admins and dealers bypass every toggle. Who may update the record
    is decided by the caller; ``update_settings`` only stamps the change.
    """

    __tablename__ = "financial_visibility_settings"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_record_id
    )
    business_account_id: Mapped[str] = mapped_column(
        ForeignKey("business_accounts.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    show_financial_data_to_managers: Mapped[bool] = mapped_column(Boolean, default=True)
    show_vehicle_inventory_values: Mapped[bool] = mapped_column(Boolean, default=True)
    show_purchase_order_spending: Mapped[bool] = mapped_column(Boolean, default=True)
    show_detailed_financial_reports: Mapped[bool] = mapped_column(Boolean, default=False)
    show_data_analytics_to_managers: Mapped[bool] = mapped_column(Boolean, default=True)

    enable_executive_financial_section: Mapped[bool] = mapped_column(Boolean, default=True)
    show_monthly_spending_alerts: Mapped[bool] = mapped_column(Boolean, default=True)
    financial_alert_threshold: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=DEFAULT_ALERT_THRESHOLD
    )

    show_inventory_values_in_vehicle_list: Mapped[bool] = mapped_column(
        Boolean, default=True
    )
    enable_inventory_value_tracking: Mapped[bool] = mapped_column(Boolean, default=True)

    enable_automatic_financial_reports: Mapped[bool] = mapped_column(
        Boolean, default=False
    )
    monthly_report_recipients: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )

    updated_by_user_id: Mapped[str] = mapped_column(String(36), default="")

    def __init__(self, **kwargs: object) -> None:
        now = utcnow()
        for field, value in FINANCIAL_SETTING_DEFAULTS.items():
            kwargs.setdefault(field, value)
        kwargs.setdefault("id", new_record_id())
        kwargs.setdefault("financial_alert_threshold", DEFAULT_ALERT_THRESHOLD)
        kwargs.setdefault("monthly_report_recipients", [])
        kwargs.setdefault("updated_by_user_id", "")
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        super().__init__(**kwargs)

    def update_settings(self, by: str) -> None:
        """Stamp who changed the settings and when."""
        self.updated_at = utcnow()
        self.updated_by_user_id = by

    def can_user_see_financial_data(self, role: UserRole | str | None) -> bool:
        return role_can_see(role, self.show_financial_data_to_managers)

    def can_user_see_detailed_reports(self, role: UserRole | str | None) -> bool:
        return role_can_see(role, self.show_detailed_financial_reports)

    def can_user_see_data_analytics(self, role: UserRole | str | None) -> bool:
        return role_can_see(role, self.show_data_analytics_to_managers)
