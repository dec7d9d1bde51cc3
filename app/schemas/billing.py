"""Billing Pydantic Schemas"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import BillType, BillItemType, PaymentMethod, PaymentStatus


# Quantity, price, amount and percentage ranges are enforced by the ledger
# (400 VALIDATION_ERROR), so the request models only check types here.

class BillItemCreate(BaseModel):
    item_type: BillItemType = BillItemType.OTHER
    description: str
    quantity: int = 1
    unit_price: Decimal


class TaxInput(BaseModel):
    cgst: Decimal = Decimal("0")
    sgst: Decimal = Decimal("0")
    igst: Decimal = Decimal("0")


class DiscountInput(BaseModel):
    """
    Percentage takes precedence when it is non-zero. A percentage of 0 (or
    none) counts as not given, so ``{percentage: 0, amount: 100}`` applies
    the fixed 100.
    """
    percentage: Optional[Decimal] = None
    amount: Optional[Decimal] = None
    reason: Optional[str] = Field(None, max_length=255)


class BillCreate(BaseModel):
    patient_id: UUID
    bill_type: BillType
    items: List[BillItemCreate]
    discount: Optional[DiscountInput] = None
    tax: Optional[TaxInput] = None
    notes: Optional[str] = None


class AdmissionBillCreate(BaseModel):
    """Charges added on top of the room-charge line of an IPD bill."""
    extra_items: List[BillItemCreate] = []
    tax: Optional[TaxInput] = None
    notes: Optional[str] = None


class PaymentCreate(BaseModel):
    method: PaymentMethod
    amount: Decimal
    transaction_id: Optional[str] = Field(None, max_length=100)


class RefundRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class BillItemResponse(BaseModel):
    item_type: BillItemType
    description: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class PaymentResponse(BaseModel):
    method: PaymentMethod
    amount: Decimal
    transaction_id: Optional[str] = None
    transaction_date: datetime

    model_config = ConfigDict(from_attributes=True)


class BillResponse(BaseModel):
    id: UUID
    bill_code: str
    patient_id: UUID
    admission_id: Optional[UUID] = None
    bill_type: BillType
    bill_date: datetime
    items: List[BillItemResponse]
    subtotal: Decimal
    discount_amount: Decimal
    discount_percentage: Decimal
    discount_reason: Optional[str] = None
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    total_amount: Decimal
    amount_paid: Decimal
    balance_amount: Decimal
    payment_status: PaymentStatus
    payments: List[PaymentResponse]
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
