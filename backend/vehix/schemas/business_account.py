"""Business account schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vehix.core.plans import (
    BillingPeriod,
    FleetSize,
    ManagementStructure,
    SubscriptionPlan,
)
from vehix.schemas.user_account import UserAccountRead, normalize_email


class BusinessSetupCreate(BaseModel):
    """Signup payload: the business and its first owner."""

    business_name: str = Field(min_length=1, max_length=255)
    business_type: str = "Service Company"
    industry_type: str = "Automotive"
    fleet_size: FleetSize = FleetSize.SMALL
    management_structure: ManagementStructure = ManagementStructure.SINGLE_MANAGER
    estimated_manager_count: int = Field(default=1, ge=1)
    estimated_technician_count: int = Field(default=1, ge=0)
    selected_plan: SubscriptionPlan | None = None
    billing_period: BillingPeriod = BillingPeriod.MONTHLY

    owner_full_name: str = Field(min_length=1, max_length=255)
    owner_email: str
    owner_password: str = Field(min_length=8)

    @field_validator("owner_email")
    @classmethod
    def _validate_owner_email(cls, value: str) -> str:
        return normalize_email(value)


class BusinessAccountRead(BaseModel):
    """Serialized business account."""

    id: str
    name: str
    business_type: str
    industry_type: str
    fleet_size: str
    subscription_plan: SubscriptionPlan
    billing_period: BillingPeriod
    management_structure: ManagementStructure
    max_vehicles: int
    max_managers: int
    max_technicians: int
    features: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BusinessSignupRead(BaseModel):
    """Response after onboarding a new business."""

    business: BusinessAccountRead
    owner: UserAccountRead
    access_token: str
    token_type: str = "bearer"


class PlanChange(BaseModel):
    plan: SubscriptionPlan
    billing_period: BillingPeriod | None = None


class SeatUsageRead(BaseModel):
    """Current seat usage against the plan."""

    plan: SubscriptionPlan
    max_vehicles: int
    max_managers: int
    max_technicians: int
    max_locations: int
    managers: int
    technicians: int
    can_create_managers: bool
    can_access_reports: bool
    can_use_integrations: bool
    features: list[str]
