"""Endpoint tests with overridden dependencies (no database)."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.api import deps
from app.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.main import app
from app.models.enums import BillItemType, BillType, UserRole
from app.models.user import User
from app.services.billing_math import LineInput
from app.services.ledger_service import LedgerEngine
from app.services.occupancy_service import OccupancyTracker
from app.utils.time import get_utc_now

API = settings.API_V1_PREFIX


def _user(role: UserRole) -> User:
    return User(id=uuid4(), email=f"{role.value}@carepoint.test", first_name="Test", last_name="User",
                role=role, is_active=True)


@pytest.fixture
def overrides():
    """Install dependency overrides for one test and clear them afterwards."""
    def _install(role: UserRole, ledger=None, tracker=None):
        app.dependency_overrides[deps.get_current_user] = lambda: _user(role)
        if ledger is not None:
            app.dependency_overrides[deps.get_ledger] = lambda: ledger
        if tracker is not None:
            app.dependency_overrides[deps.get_occupancy] = lambda: tracker
    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


def _priced_bill():
    bill = LedgerEngine(MagicMock()).compose(
        patient_id=uuid4(),
        bill_type=BillType.OUTPATIENT,
        lines=[LineInput("Consultation", 1, Decimal("3000"), BillItemType.CONSULTATION)],
    )
    bill.id = uuid4()
    bill.created_at = get_utc_now()
    return bill


@pytest.mark.asyncio
async def test_overpayment_maps_to_400_envelope(overrides, client):
    ledger = AsyncMock(spec=LedgerEngine)
    ledger.apply_payment.side_effect = ValidationError("Payment amount exceeds balance")
    overrides(UserRole.BILLING, ledger=ledger)

    resp = await client.post(
        f"{API}/billing/{uuid4()}/payment",
        json={"method": "cash", "amount": "5000"},
    )

    assert resp.status_code == 400
    assert resp.json() == {
        "success": False,
        "error": {"code": "VALIDATION_ERROR", "message": "Payment amount exceeds balance"},
    }


@pytest.mark.asyncio
async def test_payment_success_returns_bill(overrides, client):
    bill = _priced_bill()
    ledger = AsyncMock(spec=LedgerEngine)
    ledger.apply_payment.return_value = bill
    overrides(UserRole.ADMIN, ledger=ledger)

    resp = await client.post(
        f"{API}/billing/{bill.id}/payment",
        json={"method": "upi", "amount": "1000", "transaction_id": "T-1"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["bill_code"] == bill.bill_code
    assert Decimal(body["data"]["total_amount"]) == Decimal("3000")
    assert ledger.apply_payment.await_args.args[0] == bill.id


@pytest.mark.asyncio
async def test_nurse_cannot_take_payments(overrides, client):
    ledger = AsyncMock(spec=LedgerEngine)
    overrides(UserRole.NURSE, ledger=ledger)

    resp = await client.post(f"{API}/billing/{uuid4()}/payment", json={"method": "cash", "amount": "10"})

    assert resp.status_code == 403
    assert not ledger.apply_payment.called


@pytest.mark.asyncio
async def test_admit_into_occupied_bed_maps_to_409(overrides, client):
    tracker = AsyncMock(spec=OccupancyTracker)
    tracker.admit.side_effect = ConflictError("Bed B-101 is not available. Current status: occupied")
    overrides(UserRole.DOCTOR, tracker=tracker)

    resp = await client.post(
        f"{API}/admissions",
        json={
            "patient_id": str(uuid4()),
            "doctor_id": str(uuid4()),
            "bed_id": str(uuid4()),
            "reason_for_admission": "Fracture",
        },
    )

    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"
    assert "B-101" in resp.json()["error"]["message"]


@pytest.mark.asyncio
async def test_unknown_admission_maps_to_404(overrides, client):
    tracker = AsyncMock(spec=OccupancyTracker)
    tracker.discharge.side_effect = NotFoundError("Admission not found")
    overrides(UserRole.ADMIN, tracker=tracker)

    resp = await client.post(f"{API}/admissions/{uuid4()}/discharge", json={})

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_malformed_body_is_422(overrides, client):
    overrides(UserRole.BILLING, ledger=AsyncMock(spec=LedgerEngine))

    resp = await client.post(f"{API}/billing/{uuid4()}/payment", json={"method": "barter", "amount": "10"})

    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_missing_token_rejected(client):
    resp = await client.get(f"{API}/billing/search")
    assert resp.status_code in (401, 403)


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    resp = await client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert resp.headers["X-Request-ID"] == "trace-123"
    assert "X-Process-Time" in resp.headers
