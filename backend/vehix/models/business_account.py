"""Business account model representing a tenant."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vehix.core.plans import (
    BillingPeriod,
    ManagementStructure,
    SubscriptionLimitations,
    SubscriptionPlan,
    limitations,
)
from vehix.db.base import Base
from vehix.models.mixins import (
    SyncMetadataMixin,
    TimestampMixin,
    new_record_id,
    utcnow,
)
from vehix.security.account_types import AccountType


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from vehix.models.user_account import UserAccount


class BusinessAccount(TimestampMixin, SyncMetadataMixin, Base):
    """A tenant: one business and the member accounts it owns.

    Seat limits are copied from the plan when the account is created or the
    plan changes, so later edits to the plan table do not move existing
    tenants. Quota is not enforced here; the invitation workflow checks it
    before calling ``add_user_account``. Members are never deleted with the
    tenant; ``deactivate`` is the only way to remove them.
    """

    __tablename__ = "business_accounts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=new_record_id
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    business_type: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    industry_type: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    fleet_size: Mapped[str] = mapped_column(String(32), default="", nullable=False)
    subscription_plan: Mapped[SubscriptionPlan] = mapped_column(
        Enum(SubscriptionPlan), default=SubscriptionPlan.TRIAL, nullable=False
    )
    billing_period: Mapped[BillingPeriod] = mapped_column(
        Enum(BillingPeriod), default=BillingPeriod.MONTHLY, nullable=False
    )
    management_structure: Mapped[ManagementStructure] = mapped_column(
        Enum(ManagementStructure),
        default=ManagementStructure.SINGLE_MANAGER,
        nullable=False,
    )
    max_vehicles: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    max_managers: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    max_technicians: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    user_accounts: Mapped[list["UserAccount"]] = relationship(
        "UserAccount",
        back_populates="business_account",
        cascade="save-update, merge",
        lazy="selectin",
        order_by="UserAccount.created_at",
    )

    def __init__(self, **kwargs: object) -> None:
        now = utcnow()
        kwargs.setdefault("id", new_record_id())
        kwargs.setdefault("subscription_plan", SubscriptionPlan.TRIAL)
        kwargs.setdefault("billing_period", BillingPeriod.MONTHLY)
        kwargs.setdefault(
            "management_structure", ManagementStructure.SINGLE_MANAGER
        )
        kwargs.setdefault("features", [])
        kwargs.setdefault("is_active", True)
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        super().__init__(**kwargs)

    @classmethod
    def create(
        cls,
        *,
        name: str,
        business_type: str,
        industry_type: str,
        fleet_size: str,
        plan: SubscriptionPlan,
        billing_period: BillingPeriod,
        management_structure: ManagementStructure,
    ) -> "BusinessAccount":
        """Build a new tenant with limits derived from ``plan``."""
        now = utcnow()
        account = cls(
            id=new_record_id(),
            name=name,
            business_type=business_type,
            industry_type=industry_type,
            fleet_size=fleet_size,
            billing_period=billing_period,
            management_structure=management_structure,
            is_active=True,
            created_at=now,
            updated_at=now,
            user_accounts=[],
        )
        account.apply_plan(plan)
        return account

    @property
    def plan_limitations(self) -> SubscriptionLimitations:
        """Plan limits for the current subscription."""
        return limitations(self.subscription_plan)

    def apply_plan(self, plan: SubscriptionPlan) -> None:
        """Switch to ``plan`` and copy its seat limits onto the account."""
        limits = limitations(plan)
        self.subscription_plan = plan
        self.max_vehicles = limits.max_vehicles
        self.max_managers = limits.max_managers
        self.max_technicians = limits.max_technicians
        self.features = list(limits.features)
        self.updated_at = utcnow()

    def add_user_account(self, user: "UserAccount") -> None:
        """Attach ``user`` to this tenant. Quota must already be checked."""
        self.user_accounts.append(user)
        self.updated_at = utcnow()

    def members(
        self, account_type: AccountType | None = None, *, active_only: bool = True
    ) -> list["UserAccount"]:
        return [
            user
            for user in self.user_accounts
            if (account_type is None or user.account_type == account_type)
            and (user.is_active or not active_only)
        ]

    def member_count(
        self, account_type: AccountType, *, active_only: bool = True
    ) -> int:
        return len(self.members(account_type, active_only=active_only))

    def active_owner(self) -> "UserAccount | None":
        owners = self.members(AccountType.OWNER)
        return owners[0] if owners else None

    def deactivate(self) -> list["UserAccount"]:
        """Deactivate the tenant and every member; returns members that changed."""
        self.is_active = False
        self.updated_at = utcnow()
        changed = []
        for user in self.user_accounts:
            if user.is_active:
                user.deactivate()
                changed.append(user)
        return changed
