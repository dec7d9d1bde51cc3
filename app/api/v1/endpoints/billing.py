"""Billing endpoints - invoices, discounts, payments, revenue"""

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.models.enums import AnalyticsPeriod, BillType, PaymentStatus
from app.models.user import User
from app.schemas.billing import (
    AdmissionBillCreate, BillCreate, BillResponse, DiscountInput, PaymentCreate, RefundRequest,
)
from app.schemas.responses import ListResponse, SuccessResponse
from app.services.ledger_service import LedgerEngine

router = APIRouter()


@router.post("/generate", response_model=SuccessResponse[BillResponse], status_code=status.HTTP_201_CREATED)
async def generate_bill(
    bill_in: BillCreate,
    current_user: User = Depends(deps.require_billing_staff),
    ledger: LedgerEngine = Depends(deps.get_ledger),
) -> Any:
    """Compose a bill from line items, optional discount and tax."""
    bill = await ledger.generate_bill(bill_in, generated_by_id=current_user.id)
    return SuccessResponse(data=BillResponse.model_validate(bill), message="Bill generated successfully")


@router.post(
    "/admissions/{admission_id}",
    response_model=SuccessResponse[BillResponse],
    status_code=status.HTTP_201_CREATED,
)
async def bill_admission(
    admission_id: UUID,
    body: AdmissionBillCreate,
    current_user: User = Depends(deps.require_billing_staff),
    ledger: LedgerEngine = Depends(deps.get_ledger),
) -> Any:
    """IPD bill: room charge for the stay plus any extra lines."""
    bill = await ledger.bill_admission(admission_id, body, generated_by_id=current_user.id)
    return SuccessResponse(data=BillResponse.model_validate(bill), message="Admission billed successfully")


@router.get("/search", response_model=ListResponse[BillResponse])
async def search_bills(
    bill_code: Optional[str] = None,
    patient_code: Optional[str] = None,
    payment_status: Optional[PaymentStatus] = None,
    bill_type: Optional[BillType] = None,
    current_user: User = Depends(deps.require_billing_staff),
    ledger: LedgerEngine = Depends(deps.get_ledger),
) -> Any:
    """Newest bills first, filtered by code, patient, status or type."""
    bills = await ledger.search_bills(
        bill_code=bill_code,
        patient_code=patient_code,
        payment_status=payment_status,
        bill_type=bill_type,
    )
    return ListResponse.of([BillResponse.model_validate(b) for b in bills])


@router.get("/analytics", response_model=SuccessResponse)
async def revenue_analytics(
    period: AnalyticsPeriod = AnalyticsPeriod.WEEK,
    current_user: User = Depends(deps.require_billing_staff),
    ledger: LedgerEngine = Depends(deps.get_ledger),
) -> Any:
    """Revenue by bill type, payment status and day for the period."""
    report = await ledger.revenue_analytics(period)
    return SuccessResponse(data=report)


@router.get("/{bill_id}", response_model=SuccessResponse[BillResponse])
async def get_bill(
    bill_id: UUID,
    current_user: User = Depends(deps.get_current_user),
    ledger: LedgerEngine = Depends(deps.get_ledger),
) -> Any:
    bill = await ledger.get_bill(bill_id)
    return SuccessResponse(data=BillResponse.model_validate(bill))


@router.post("/{bill_id}/payment", response_model=SuccessResponse[BillResponse])
async def add_payment(
    bill_id: UUID,
    payment_in: PaymentCreate,
    current_user: User = Depends(deps.require_billing_staff),
    ledger: LedgerEngine = Depends(deps.get_ledger),
) -> Any:
    bill = await ledger.apply_payment(bill_id, payment_in)
    return SuccessResponse(data=BillResponse.model_validate(bill), message="Payment added successfully")


@router.patch("/{bill_id}/discount", response_model=SuccessResponse[BillResponse])
async def apply_discount(
    bill_id: UUID,
    discount_in: DiscountInput,
    current_user: User = Depends(deps.require_billing_staff),
    ledger: LedgerEngine = Depends(deps.get_ledger),
) -> Any:
    bill = await ledger.apply_discount(bill_id, discount_in)
    return SuccessResponse(data=BillResponse.model_validate(bill), message="Discount applied successfully")


@router.post("/{bill_id}/refund", response_model=SuccessResponse[BillResponse])
async def refund_bill(
    bill_id: UUID,
    body: RefundRequest,
    current_user: User = Depends(deps.require_billing_staff),
    ledger: LedgerEngine = Depends(deps.get_ledger),
) -> Any:
    bill = await ledger.refund(bill_id, body.reason)
    return SuccessResponse(data=BillResponse.model_validate(bill), message="Bill refunded")
