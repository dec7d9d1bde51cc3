"""Unit tests for request/response schemas."""

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ConflictError, InvalidStateError
from app.models.enums import BedStatus, PaymentStatus, WardType
from app.schemas.billing import BillCreate, PaymentCreate
from app.schemas.occupancy import BedCreate, OccupancyStats
from app.schemas.registry import DoctorCreate
from app.schemas.responses import ErrorResponse, ListResponse


def test_error_response_from_domain_error():
    body = ErrorResponse.from_error(InvalidStateError("Cannot apply discount to a paid bill")).model_dump()
    assert body == {
        "success": False,
        "error": {"code": "INVALID_STATE", "message": "Cannot apply discount to a paid bill"},
    }


def test_domain_error_status_codes():
    assert ConflictError("x").status_code == 409
    assert InvalidStateError("x").status_code == 409


def test_list_response_counts_items():
    resp = ListResponse.of([OccupancyStats(total=1, vacant=1)], message="ok")
    assert resp.meta.count == 1
    assert resp.message == "ok"


def test_payment_amount_parsed_as_decimal():
    payment = PaymentCreate(method="net-banking", amount="1700.50")
    assert payment.amount == Decimal("1700.50")


def test_bill_create_accepts_kebab_case_enums():
    bill = BillCreate(
        patient_id=uuid4(),
        bill_type="inpatient",
        items=[{"item_type": "room-charge", "description": "Room", "quantity": 2, "unit_price": "1000"}],
    )
    assert bill.items[0].item_type.value == "room-charge"
    assert bill.discount is None


def test_bed_create_rejects_negative_charge():
    with pytest.raises(PydanticValidationError):
        BedCreate(bed_number="B-1", ward_number="GW-1", ward_type=WardType.GENERAL, daily_charge="-1")


def test_doctor_create_requires_strong_enough_password():
    with pytest.raises(PydanticValidationError):
        DoctorCreate(
            email="doc@carepoint.test",
            password="short",
            first_name="A",
            last_name="B",
            department_id=uuid4(),
        )


def test_enum_values():
    assert WardType("semi-private") == WardType.SEMI_PRIVATE
    assert BedStatus.OCCUPIED.value == "occupied"
    assert PaymentStatus("refunded") == PaymentStatus.REFUNDED
