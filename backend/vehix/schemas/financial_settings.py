"""Financial visibility settings schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class FinancialSettingsRead(BaseModel):
    """Serialized financial visibility settings."""

    business_account_id: str
    show_financial_data_to_managers: bool
    show_vehicle_inventory_values: bool
    show_purchase_order_spending: bool
    show_detailed_financial_reports: bool
    show_data_analytics_to_managers: bool
    enable_executive_financial_section: bool
    show_monthly_spending_alerts: bool
    financial_alert_threshold: Decimal
    show_inventory_values_in_vehicle_list: bool
    enable_inventory_value_tracking: bool
    enable_automatic_financial_reports: bool
    monthly_report_recipients: list[str]
    updated_by_user_id: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FinancialSettingsUpdate(BaseModel):
    """Mutable financial visibility fields."""

    show_financial_data_to_managers: bool | None = None
    show_vehicle_inventory_values: bool | None = None
    show_purchase_order_spending: bool | None = None
    show_detailed_financial_reports: bool | None = None
    show_data_analytics_to_managers: bool | None = None
    enable_executive_financial_section: bool | None = None
    show_monthly_spending_alerts: bool | None = None
    financial_alert_threshold: Decimal | None = Field(default=None, ge=0)
    show_inventory_values_in_vehicle_list: bool | None = None
    enable_inventory_value_tracking: bool | None = None
    enable_automatic_financial_reports: bool | None = None
    monthly_report_recipients: list[str] | None = None


class FinancialVisibilityRead(BaseModel):
    """What the current member may see."""

    role: str
    financial_data: bool
    detailed_reports: bool
    data_analytics: bool
