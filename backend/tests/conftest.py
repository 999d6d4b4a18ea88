"""Test fixtures for the Vehix accounts backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from vehix.core.config import get_settings
from vehix.core.plans import (
    BillingPeriod,
    FleetSize,
    ManagementStructure,
    SubscriptionPlan,
)
from vehix.db.base import Base
from vehix.db.session import dispose_engine, get_engine, get_sessionmaker
from vehix.main import app
from vehix.models import BusinessAccount
from vehix.security.account_types import AccountType
from vehix.services.user_account_service import build_user_account


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    async with get_engine(db_url).begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def seeded_business(
    reset_database: None, db_url: str
) -> dict[str, object]:
    """Seed a Pro business with an owner, a manager and a technician."""
    sessionmaker = get_sessionmaker(db_url)
    passwords = {
        "owner": "Own3rPass!",
        "manager": "Manag3rPass!",
        "technician": "T3chPass!",
    }

    async with sessionmaker() as session:
        business = BusinessAccount.create(
            name="Riverside Fleet Services",
            business_type="Fleet Maintenance",
            industry_type="Transportation",
            fleet_size=FleetSize.MEDIUM.value,
            plan=SubscriptionPlan.PRO,
            billing_period=BillingPeriod.MONTHLY,
            management_structure=ManagementStructure.MULTIPLE_MANAGERS,
        )
        owner = build_user_account(
            full_name="Olive Owner",
            email="owner@example.com",
            password=passwords["owner"],
            account_type=AccountType.OWNER,
        )
        business.add_user_account(owner)
        manager = build_user_account(
            full_name="Morgan Manager",
            email="manager@example.com",
            password=passwords["manager"],
            account_type=AccountType.MANAGER,
            department_access=["Service"],
            invited_by_user_id=owner.id,
        )
        business.add_user_account(manager)
        technician = build_user_account(
            full_name="Taylor Tech",
            email="tech@example.com",
            password=passwords["technician"],
            account_type=AccountType.TECHNICIAN,
            invited_by_user_id=manager.id,
        )
        business.add_user_account(technician)
        session.add(business)
        await session.commit()

        return {
            "business_id": business.id,
            "owner_id": owner.id,
            "owner_email": owner.email,
            "owner_password": passwords["owner"],
            "manager_id": manager.id,
            "manager_email": manager.email,
            "manager_password": passwords["manager"],
            "technician_id": technician.id,
            "technician_email": technician.email,
            "technician_password": passwords["technician"],
        }


@pytest_asyncio.fixture()
async def app_context(
    seeded_business: dict[str, object],
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client alongside the seeded business data."""
    context = dict(seeded_business)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
