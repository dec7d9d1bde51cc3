"""Ledger Engine - invoices, discounts, payments and revenue analytics.

The engine is bound to one ``AsyncSession``. Each mutating call validates
everything before touching the bill, changes it through
``billing_math.recalculate`` and commits once, so a rejected call leaves
the stored bill exactly as it was. Rows are read ``FOR UPDATE`` so that
two payments against the same bill serialize.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.admission import Admission
from app.models.billing import Bill, BillPayment
from app.models.enums import (
    AdmissionStatus, AnalyticsPeriod, BillItemType, BillType, PaymentStatus,
)
from app.models.patient import Patient
from app.models.ward import Bed
from app.schemas.billing import (
    AdmissionBillCreate, BillCreate, BillItemCreate, DiscountInput, PaymentCreate, TaxInput,
)
from app.services import billing_math, id_gen
from app.services.billing_math import LineInput, money
from app.services.registry_service import RegistryService
from app.utils.time import get_utc_now, stay_days

logger = get_logger(__name__)


def _lines(items: List[BillItemCreate]) -> List[LineInput]:
    return [
        LineInput(
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            item_type=item.item_type,
        )
        for item in items
    ]


def period_start(period: AnalyticsPeriod, now: datetime) -> Optional[datetime]:
    """Lower bound of an analytics window; None means unbounded."""
    if period == AnalyticsPeriod.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == AnalyticsPeriod.WEEK:
        return now - timedelta(days=7)
    if period == AnalyticsPeriod.MONTH:
        return now - timedelta(days=30)
    return None


class LedgerEngine:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_bill(self, bill_id: UUID, for_update: bool = False) -> Bill:
        query = select(Bill).where(Bill.id == bill_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        bill = result.scalar_one_or_none()
        if not bill:
            raise NotFoundError("Bill not found")
        return bill

    async def search_bills(
        self,
        bill_code: Optional[str] = None,
        patient_code: Optional[str] = None,
        payment_status: Optional[PaymentStatus] = None,
        bill_type: Optional[BillType] = None,
        limit: Optional[int] = None,
    ) -> List[Bill]:
        query = select(Bill)
        if bill_code:
            query = query.where(Bill.bill_code.ilike(f"%{bill_code}%"))
        if payment_status:
            query = query.where(Bill.payment_status == payment_status)
        if bill_type:
            query = query.where(Bill.bill_type == bill_type)
        if patient_code:
            query = query.join(Patient, Patient.id == Bill.patient_id).where(
                Patient.patient_code.ilike(f"%{patient_code}%")
            )
        query = query.order_by(Bill.created_at.desc()).limit(limit or settings.BILL_SEARCH_LIMIT)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Compose
    # ------------------------------------------------------------------

    def compose(
        self,
        patient_id: UUID,
        bill_type: BillType,
        lines: List[LineInput],
        discount: Optional[DiscountInput] = None,
        tax: Optional[TaxInput] = None,
        notes: Optional[str] = None,
        generated_by_id: Optional[UUID] = None,
    ) -> Bill:
        """Build a priced, unsaved bill. Raises ValidationError on bad input."""
        items = billing_math.build_items(lines)
        subtotal = billing_math.subtotal_of(items)
        tax_parts = billing_math.validate_tax(**(tax.model_dump() if tax else {}))

        discount_amount = Decimal("0")
        discount_percentage = Decimal("0")
        discount_reason = None
        if discount:
            discount_amount = billing_math.resolve_discount(subtotal, discount.percentage, discount.amount)
            discount_percentage = billing_math.D(discount.percentage)
            discount_reason = discount.reason

        bill = Bill(
            bill_code=id_gen.generate_bill_code(),
            patient_id=patient_id,
            generated_by_id=generated_by_id,
            bill_type=bill_type,
            bill_date=get_utc_now(),
            subtotal=subtotal,
            discount_amount=discount_amount,
            discount_percentage=discount_percentage,
            discount_reason=discount_reason,
            amount_paid=Decimal("0"),
            payment_status=PaymentStatus.PENDING,
            notes=notes,
            **tax_parts,
        )
        bill.items = items
        bill.payments = []
        return billing_math.recalculate(bill)

    async def generate_bill(self, data: BillCreate, generated_by_id: Optional[UUID] = None) -> Bill:
        await RegistryService.get_patient(self.db, data.patient_id)
        bill = self.compose(
            patient_id=data.patient_id,
            bill_type=data.bill_type,
            lines=_lines(data.items),
            discount=data.discount,
            tax=data.tax,
            notes=data.notes,
            generated_by_id=generated_by_id,
        )
        self.db.add(bill)
        await self.db.commit()
        logger.info(
            "Bill generated",
            extra={"bill_code": bill.bill_code, "bill_type": bill.bill_type.value, "total": str(bill.total_amount)},
        )
        return bill

    async def bill_admission(
        self,
        admission_id: UUID,
        data: AdmissionBillCreate,
        generated_by_id: Optional[UUID] = None,
    ) -> Bill:
        """
        IPD bill for an admission: one room-charge line for the bed's daily
        charge times the days stayed (at least one), plus any extra lines.
        """
        admission = await self.db.get(Admission, admission_id)
        if not admission:
            raise NotFoundError("Admission not found")

        existing = await self.db.execute(select(Bill.id).where(Bill.admission_id == admission_id))
        if existing.first():
            raise ConflictError(f"Admission {admission.admission_code} is already billed")

        bed = await self.db.get(Bed, admission.bed_id)
        if not bed:
            raise NotFoundError("Bed not found")

        if admission.status == AdmissionStatus.ADMITTED:
            days = stay_days(admission.admission_date, get_utc_now())
        else:
            days = admission.total_stay_days or 0
        days = max(days, 1)

        room_line = LineInput(
            description=f"Room charge - bed {bed.bed_number} ({bed.bed_type.value})",
            quantity=days,
            unit_price=bed.daily_charge,
            item_type=BillItemType.ROOM_CHARGE,
        )
        bill = self.compose(
            patient_id=admission.patient_id,
            bill_type=BillType.INPATIENT,
            lines=[room_line] + _lines(data.extra_items),
            tax=data.tax,
            notes=data.notes,
            generated_by_id=generated_by_id,
        )
        bill.admission_id = admission.id
        self.db.add(bill)
        await self.db.commit()
        logger.info(
            "Admission billed",
            extra={"bill_code": bill.bill_code, "admission_code": admission.admission_code, "days": days},
        )
        return bill

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def apply_discount(self, bill_id: UUID, data: DiscountInput) -> Bill:
        """
        Replace the bill's discount. A percentage call stores the percentage
        and its derived amount; a fixed call stores the amount and clears
        the percentage.

        Raises:
            InvalidStateError: bill is paid or refunded
            ValidationError: out-of-range discount, or a total that would
                drop below what has already been paid
        """
        bill = await self.get_bill(bill_id, for_update=True)
        if bill.payment_status in (PaymentStatus.PAID, PaymentStatus.REFUNDED):
            logger.warning("Discount rejected", extra={"bill_code": bill.bill_code, "status": bill.payment_status.value})
            raise InvalidStateError(f"Cannot apply discount to a {bill.payment_status.value} bill")

        value = billing_math.resolve_discount(bill.subtotal, data.percentage, data.amount)
        new_total = money(billing_math.D(bill.subtotal) - value + bill.tax_total)
        if new_total < billing_math.D(bill.amount_paid):
            raise ValidationError("Discount would reduce the total below the amount already paid")

        bill.discount_amount = value
        bill.discount_percentage = billing_math.D(data.percentage) if data.percentage else Decimal("0")
        bill.discount_reason = data.reason
        billing_math.recalculate(bill)

        await self.db.commit()
        logger.info(
            "Discount applied",
            extra={"bill_code": bill.bill_code, "discount": str(value), "total": str(bill.total_amount)},
        )
        return bill

    async def apply_payment(self, bill_id: UUID, data: PaymentCreate) -> Bill:
        """
        Append a payment and recompute paid/balance/status. An amount equal
        to the balance settles the bill. Transaction ids are not
        de-duplicated.

        Raises:
            InvalidStateError: bill is refunded
            ValidationError: amount <= 0, greater than the balance, or
                beyond what a money column holds
        """
        bill = await self.get_bill(bill_id, for_update=True)
        if bill.payment_status == PaymentStatus.REFUNDED:
            raise InvalidStateError("Cannot add a payment to a refunded bill")

        amount = billing_math.bounded(data.amount, "Payment amount")
        if amount <= 0:
            raise ValidationError("Payment amount must be greater than zero")
        if amount > billing_math.D(bill.balance_amount):
            logger.warning(
                "Overpayment rejected",
                extra={"bill_code": bill.bill_code, "amount": str(amount), "balance": str(bill.balance_amount)},
            )
            raise ValidationError("Payment amount exceeds balance")

        bill.payments.append(BillPayment(
            sequence=len(bill.payments),
            method=data.method,
            amount=amount,
            transaction_id=data.transaction_id,
            transaction_date=get_utc_now(),
        ))
        bill.amount_paid = money(billing_math.D(bill.amount_paid) + amount)
        billing_math.recalculate(bill)

        await self.db.commit()
        logger.info(
            "Payment applied",
            extra={
                "bill_code": bill.bill_code,
                "amount": str(amount),
                "balance": str(bill.balance_amount),
                "status": bill.payment_status.value,
            },
        )
        return bill

    async def refund(self, bill_id: UUID, reason: str) -> Bill:
        """Mark a bill with payments on it as refunded (terminal)."""
        bill = await self.get_bill(bill_id, for_update=True)
        if bill.payment_status == PaymentStatus.REFUNDED:
            raise InvalidStateError("Bill is already refunded")
        if billing_math.D(bill.amount_paid) <= 0:
            raise InvalidStateError("Nothing has been paid on this bill")

        bill.payment_status = PaymentStatus.REFUNDED
        note = f"Refunded {bill.amount_paid} on {get_utc_now():%Y-%m-%d}: {reason}"
        bill.notes = f"{bill.notes}\n{note}" if bill.notes else note

        await self.db.commit()
        logger.info("Bill refunded", extra={"bill_code": bill.bill_code, "amount": str(bill.amount_paid)})
        return bill

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    async def revenue_analytics(
        self,
        period: AnalyticsPeriod = AnalyticsPeriod.WEEK,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        start = period_start(period, now or get_utc_now())
        query = select(Bill)
        if start is not None:
            query = query.where(Bill.created_at >= start)
        result = await self.db.execute(query)
        report = billing_math.aggregate_revenue(result.scalars().all())
        report["period"] = period.value
        return report
