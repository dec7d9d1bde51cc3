"""Integration tests: Auth endpoints."""

import pytest
from tests.conftest import requires_db

pytestmark = requires_db
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_login_invalid_credentials(async_client: AsyncClient, api_base: str):
    resp = await async_client.post(
        f"{api_base}/auth/login",
        json={"email": "nobody@carepoint.test", "password": "WrongPass123!"},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_admin_registers_billing_clerk_who_can_log_in(
    async_client: AsyncClient, api_base: str, admin_headers: dict, unique_suffix: str
):
    email = f"billing_{unique_suffix}@test.example.com"
    resp = await async_client.post(
        f"{api_base}/auth/register",
        headers=admin_headers,
        json={
            "email": email,
            "password": "BillingPass123!",
            "first_name": "Bill",
            "last_name": "Clerk",
            "role": "billing",
        },
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["role"] == "billing"

    resp = await async_client.post(
        f"{api_base}/auth/login",
        json={"email": email, "password": "BillingPass123!"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["role"] == "billing"
    assert data["refresh_token"]

    resp = await async_client.post(f"{api_base}/auth/refresh", json={"refresh_token": data["refresh_token"]})
    assert resp.status_code == 200
    assert resp.json()["data"]["user_id"] == data["user_id"]


@pytest.mark.asyncio
async def test_duplicate_registration_conflicts(
    async_client: AsyncClient, api_base: str, admin_headers: dict, unique_suffix: str
):
    payload = {
        "email": f"dup_{unique_suffix}@test.example.com",
        "password": "DupPass1234!",
        "first_name": "D",
        "last_name": "Up",
        "role": "nurse",
    }
    first = await async_client.post(f"{api_base}/auth/register", headers=admin_headers, json=payload)
    assert first.status_code == 200
    second = await async_client.post(f"{api_base}/auth/register", headers=admin_headers, json=payload)
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_access_token_cannot_refresh(async_client: AsyncClient, api_base: str, admin_headers: dict):
    access = admin_headers["Authorization"].split(" ", 1)[1]
    resp = await async_client.post(f"{api_base}/auth/refresh", json={"refresh_token": access})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_me(async_client: AsyncClient, api_base: str, admin_headers: dict):
    resp = await async_client.get(f"{api_base}/auth/me", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["role"] == "admin"
