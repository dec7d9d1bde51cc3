"""Integration tests: Billing endpoints."""

from decimal import Decimal

import pytest
from tests.conftest import requires_db

pytestmark = requires_db
from httpx import AsyncClient


async def _generate(async_client: AsyncClient, api_base: str, ward: dict, unit_price: str = "3000") -> dict:
    resp = await async_client.post(
        f"{api_base}/billing/generate",
        headers=ward["headers"],
        json={
            "patient_id": ward["patient_id"],
            "bill_type": "outpatient",
            "items": [
                {"item_type": "surgery", "description": "Minor procedure", "quantity": 1, "unit_price": unit_price},
            ],
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.mark.asyncio
async def test_discount_and_payments_settle_bill(async_client: AsyncClient, api_base: str, ward: dict):
    bill = await _generate(async_client, api_base, ward)
    assert bill["payment_status"] == "pending"
    bill_id = bill["id"]

    resp = await async_client.patch(
        f"{api_base}/billing/{bill_id}/discount",
        headers=ward["headers"],
        json={"percentage": "10", "reason": "Senior citizen"},
    )
    assert resp.status_code == 200, resp.text
    assert Decimal(resp.json()["data"]["total_amount"]) == Decimal("2700")

    resp = await async_client.post(
        f"{api_base}/billing/{bill_id}/payment",
        headers=ward["headers"],
        json={"method": "cash", "amount": "1000"},
    )
    data = resp.json()["data"]
    assert data["payment_status"] == "partial"
    assert Decimal(data["balance_amount"]) == Decimal("1700")

    resp = await async_client.post(
        f"{api_base}/billing/{bill_id}/payment",
        headers=ward["headers"],
        json={"method": "card", "amount": "1700.01"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

    resp = await async_client.post(
        f"{api_base}/billing/{bill_id}/payment",
        headers=ward["headers"],
        json={"method": "card", "amount": "1700"},
    )
    data = resp.json()["data"]
    assert data["payment_status"] == "paid"
    assert len(data["payments"]) == 2

    resp = await async_client.patch(
        f"{api_base}/billing/{bill_id}/discount",
        headers=ward["headers"],
        json={"amount": "50"},
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "INVALID_STATE"


@pytest.mark.asyncio
async def test_empty_bill_rejected(async_client: AsyncClient, api_base: str, ward: dict):
    resp = await async_client.post(
        f"{api_base}/billing/generate",
        headers=ward["headers"],
        json={"patient_id": ward["patient_id"], "bill_type": "lab", "items": []},
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_search_and_analytics(async_client: AsyncClient, api_base: str, ward: dict):
    bill = await _generate(async_client, api_base, ward, unit_price="450")

    resp = await async_client.get(
        f"{api_base}/billing/search",
        headers=ward["headers"],
        params={"patient_code": ward["patient_code"]},
    )
    assert resp.status_code == 200
    codes = [b["bill_code"] for b in resp.json()["data"]]
    assert bill["bill_code"] in codes

    resp = await async_client.get(f"{api_base}/billing/analytics", headers=ward["headers"], params={"period": "today"})
    assert resp.status_code == 200
    report = resp.json()["data"]
    assert report["period"] == "today"
    assert report["totals"]["total_bills"] >= 1
    assert "outpatient" in report["revenue_by_type"]


@pytest.mark.asyncio
async def test_refund_after_payment(async_client: AsyncClient, api_base: str, ward: dict):
    bill = await _generate(async_client, api_base, ward, unit_price="800")
    await async_client.post(
        f"{api_base}/billing/{bill['id']}/payment",
        headers=ward["headers"],
        json={"method": "cash", "amount": "800"},
    )
    resp = await async_client.post(
        f"{api_base}/billing/{bill['id']}/refund",
        headers=ward["headers"],
        json={"reason": "Procedure cancelled"},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["payment_status"] == "refunded"

    resp = await async_client.post(
        f"{api_base}/billing/{bill['id']}/payment",
        headers=ward["headers"],
        json={"method": "cash", "amount": "1"},
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_unknown_bill_is_404(async_client: AsyncClient, api_base: str, admin_headers: dict):
    resp = await async_client.get(
        f"{api_base}/billing/00000000-0000-0000-0000-000000000000",
        headers=admin_headers,
    )
    assert resp.status_code == 404
