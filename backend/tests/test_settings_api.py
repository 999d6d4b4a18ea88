"""Financial settings API tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _headers(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": email, "password": password},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def test_manager_visibility_follows_toggle(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner = await _headers(client, app_context["owner_email"], app_context["owner_password"])
    manager = await _headers(
        client, app_context["manager_email"], app_context["manager_password"]
    )
    technician = await _headers(
        client, app_context["technician_email"], app_context["technician_password"]
    )

    visibility = await client.get("/api/v1/settings/financial/visibility", headers=manager)
    assert visibility.status_code == 200
    assert visibility.json() == {
        "role": "manager",
        "financial_data": True,
        "detailed_reports": False,
        "data_analytics": True,
    }

    denied = await client.patch(
        "/api/v1/settings/financial",
        json={"show_financial_data_to_managers": False},
        headers=manager,
    )
    assert denied.status_code == 403

    updated = await client.patch(
        "/api/v1/settings/financial",
        json={"show_financial_data_to_managers": False, "financial_alert_threshold": "750.50"},
        headers=owner,
    )
    assert updated.status_code == 200
    body = updated.json()
    assert body["show_financial_data_to_managers"] is False
    assert body["updated_by_user_id"] == app_context["owner_id"]

    manager_view = await client.get(
        "/api/v1/settings/financial/visibility", headers=manager
    )
    assert manager_view.json()["financial_data"] is False

    owner_view = await client.get("/api/v1/settings/financial/visibility", headers=owner)
    assert owner_view.json()["financial_data"] is True

    technician_view = await client.get(
        "/api/v1/settings/financial/visibility", headers=technician
    )
    assert technician_view.json()["financial_data"] is False


async def test_negative_threshold_is_rejected(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner = await _headers(client, app_context["owner_email"], app_context["owner_password"])
    response = await client.patch(
        "/api/v1/settings/financial",
        json={"financial_alert_threshold": "-1"},
        headers=owner,
    )
    assert response.status_code == 422
