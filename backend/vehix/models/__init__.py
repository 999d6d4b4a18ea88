"""ORM models package export."""

from vehix.models.audit_event import AuditEvent
from vehix.models.business_account import BusinessAccount
from vehix.models.financial_settings import FinancialVisibilitySetting
from vehix.models.mixins import SyncStatus
from vehix.models.setup_state import FirstTimeSetupState
from vehix.models.user_account import UserAccount

__all__ = [
    "AuditEvent",
    "BusinessAccount",
    "FinancialVisibilitySetting",
    "FirstTimeSetupState",
    "SyncStatus",
    "UserAccount",
]
