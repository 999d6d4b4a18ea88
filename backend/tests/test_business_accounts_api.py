"""Signup, login and plan management API tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


async def test_signup_then_login(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    payload = {
        "business_name": "Summit Towing",
        "fleet_size": "1-5",
        "management_structure": "single_manager",
        "owner_full_name": "Sam Summit",
        "owner_email": "sam@summit.local",
        "owner_password": "TowTruck99!",
    }
    response = await client.post("/api/v1/business-accounts", json=payload)
    assert response.status_code == 201
    body = response.json()
    assert body["business"]["subscription_plan"] == "basic"
    assert body["business"]["max_vehicles"] == 5
    assert body["owner"]["account_type"] == "owner"
    assert body["access_token"]

    duplicate = await client.post("/api/v1/business-accounts", json=payload)
    assert duplicate.status_code == 400

    token = await _authenticate(client, "sam@summit.local", "TowTruck99!")
    me = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert me.status_code == 200
    assert me.json()["last_login_at"] is not None


async def test_wrong_password_is_rejected(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": app_context["owner_email"], "password": "nope"},
    )
    assert response.status_code == 401


async def test_limits_and_plan_change(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner_token = await _authenticate(
        client, app_context["owner_email"], app_context["owner_password"]
    )
    manager_token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )

    limits = await client.get(
        "/api/v1/business-accounts/me/limits",
        headers={"Authorization": f"Bearer {owner_token}"},
    )
    assert limits.status_code == 200
    assert limits.json()["max_vehicles"] == 15
    assert limits.json()["technicians"] == 1

    forbidden = await client.patch(
        "/api/v1/business-accounts/me/plan",
        json={"plan": "enterprise"},
        headers={"Authorization": f"Bearer {manager_token}"},
    )
    assert forbidden.status_code == 403

    upgraded = await client.patch(
        "/api/v1/business-accounts/me/plan",
        json={"plan": "enterprise", "billing_period": "yearly"},
        headers={"Authorization": f"Bearer {owner_token}"},
    )
    assert upgraded.status_code == 200
    assert upgraded.json()["max_managers"] == 999
    assert upgraded.json()["billing_period"] == "yearly"


async def test_owner_deactivates_business(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner_token = await _authenticate(
        client, app_context["owner_email"], app_context["owner_password"]
    )
    manager_token = await _authenticate(
        client, app_context["manager_email"], app_context["manager_password"]
    )

    denied = await client.post(
        "/api/v1/business-accounts/me/deactivate",
        headers={"Authorization": f"Bearer {manager_token}"},
    )
    assert denied.status_code == 403

    response = await client.post(
        "/api/v1/business-accounts/me/deactivate",
        headers={"Authorization": f"Bearer {owner_token}"},
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    after = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {manager_token}"}
    )
    assert after.status_code == 401


async def test_signup_sizes_plan_for_technicians(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/v1/business-accounts",
        json={
            "business_name": "Busy Bay Garage",
            "management_structure": "single_manager",
            "estimated_technician_count": 12,
            "owner_full_name": "Bea Bay",
            "owner_email": "bea@busybay.local",
            "owner_password": "Wr3nchTime!",
        },
    )
    assert response.status_code == 201
    assert response.json()["business"]["subscription_plan"] == "pro"
