"""Ledger arithmetic.

Pure functions over ``Bill`` objects: no session, no I/O. The ledger
service loads and locks rows, calls into here, then commits. Every
derived amount is a ``Decimal`` quantized to ``settings.CURRENCY_QUANTUM``.
"""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.config import settings
from app.core.exceptions import ValidationError
from app.models.billing import Bill, BillItem
from app.models.enums import BillItemType, BillType, PaymentStatus

ZERO = Decimal("0")
HUNDRED = Decimal("100")
# largest value a Numeric(12, 2) column holds
MAX_MONEY = Decimal("9999999999.99")


def D(x) -> Decimal:
    """Coerce to a finite Decimal through ``str`` so floats do not leak binary noise."""
    if x is None:
        return ZERO
    try:
        value = x if isinstance(x, Decimal) else Decimal(str(x))
    except InvalidOperation:
        raise ValidationError(f"Not a number: {x!r}")
    if not value.is_finite():
        raise ValidationError(f"Not a number: {x!r}")
    return value


def money(x) -> Decimal:
    try:
        return D(x).quantize(Decimal(settings.CURRENCY_QUANTUM), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"Amount out of range: {x!r}")


def bounded(x, label: str) -> Decimal:
    """``money(x)``, rejecting anything a money column cannot store."""
    value = money(x)
    if abs(value) > MAX_MONEY:
        raise ValidationError(f"{label} exceeds the maximum of {MAX_MONEY}")
    return value


@dataclass
class LineInput:
    description: str
    quantity: int
    unit_price: Decimal
    item_type: BillItemType = BillItemType.OTHER


def build_items(lines: Sequence[LineInput]) -> List[BillItem]:
    """
    Validate line inputs and price them (total = quantity * unit price).

    Raises:
        ValidationError: empty invoice, blank description, quantity < 1,
            negative unit price, or a price or line total above MAX_MONEY
    """
    if not lines:
        raise ValidationError("A bill needs at least one line item")

    items = []
    for position, line in enumerate(lines):
        if not line.description or not line.description.strip():
            raise ValidationError(f"Line {position + 1}: description is required")
        if line.quantity is None or int(line.quantity) != line.quantity or line.quantity < 1:
            raise ValidationError(f"Line {position + 1}: quantity must be a whole number >= 1")
        unit_price = bounded(line.unit_price, f"Line {position + 1}: unit price")
        if unit_price < 0:
            raise ValidationError(f"Line {position + 1}: unit price must be >= 0")
        total_price = bounded(unit_price * int(line.quantity), f"Line {position + 1}: line total")

        items.append(BillItem(
            position=position,
            item_type=line.item_type,
            description=line.description.strip(),
            quantity=int(line.quantity),
            unit_price=unit_price,
            total_price=total_price,
        ))
    return items


def subtotal_of(items: Iterable[BillItem]) -> Decimal:
    return bounded(sum((D(item.total_price) for item in items), ZERO), "Subtotal")


def resolve_discount(
    subtotal: Decimal,
    percentage: Optional[Decimal] = None,
    amount: Optional[Decimal] = None,
) -> Decimal:
    """
    Discount value for one call. A non-zero percentage wins over a fixed
    amount; an explicit percentage of 0 falls through to the amount. With
    neither, the discount is zero.

    Raises:
        ValidationError: percentage outside [0, 100], negative amount,
            or a discount larger than the subtotal
    """
    percentage = D(percentage)
    amount = bounded(amount, "Discount amount")
    if percentage < 0 or percentage > HUNDRED:
        raise ValidationError("Discount percentage must be between 0 and 100")
    if amount < 0:
        raise ValidationError("Discount amount must be >= 0")

    if percentage:
        value = money(D(subtotal) * percentage / HUNDRED)
    else:
        value = money(amount)

    if value > D(subtotal):
        raise ValidationError("Discount cannot exceed the bill subtotal")
    return value


def derive_payment_status(amount_paid, total_amount) -> PaymentStatus:
    """pending when nothing is paid, paid once the total is covered, else partial."""
    amount_paid = D(amount_paid)
    if amount_paid == 0:
        return PaymentStatus.PENDING
    if amount_paid >= D(total_amount):
        return PaymentStatus.PAID
    return PaymentStatus.PARTIAL


def recalculate(bill: Bill) -> Bill:
    """Rewrite every derived column of ``bill`` from its inputs."""
    tax_total = D(bill.cgst) + D(bill.sgst) + D(bill.igst)
    bill.total_amount = bounded(D(bill.subtotal) - D(bill.discount_amount) + tax_total, "Bill total")
    bill.amount_paid = money(bill.amount_paid)
    bill.balance_amount = money(bill.total_amount - bill.amount_paid)
    if bill.payment_status != PaymentStatus.REFUNDED:
        bill.payment_status = derive_payment_status(bill.amount_paid, bill.total_amount)
    return bill


def validate_tax(cgst=None, sgst=None, igst=None) -> Dict[str, Decimal]:
    components = {
        "cgst": bounded(cgst, "Tax component cgst"),
        "sgst": bounded(sgst, "Tax component sgst"),
        "igst": bounded(igst, "Tax component igst"),
    }
    for name, value in components.items():
        if value < 0:
            raise ValidationError(f"Tax component {name} must be >= 0")
    return components


# ---------------------------------------------------------------------------
# Read-side aggregation
# ---------------------------------------------------------------------------

def aggregate_revenue(bills: Iterable[Bill]) -> Dict[str, Any]:
    """
    Group bills by type, payment status and calendar day.

    Every bill type and payment status appears in the result, zero-filled
    when no bill matches, so an empty input is a valid (all-zero) report.
    """
    by_type = {
        t.value: {"total_revenue": ZERO, "total_paid": ZERO, "count": 0}
        for t in BillType
    }
    by_status = {
        s.value: {"count": 0, "amount": ZERO}
        for s in PaymentStatus
    }
    daily: Dict[str, Dict[str, Any]] = defaultdict(lambda: {"revenue": ZERO, "bills": 0})
    totals = {"total_revenue": ZERO, "total_pending": ZERO, "total_billed": ZERO, "total_bills": 0}

    for bill in bills:
        total, paid, balance = D(bill.total_amount), D(bill.amount_paid), D(bill.balance_amount)

        bucket = by_type[BillType(bill.bill_type).value]
        bucket["total_revenue"] += total
        bucket["total_paid"] += paid
        bucket["count"] += 1

        status_bucket = by_status[PaymentStatus(bill.payment_status).value]
        status_bucket["count"] += 1
        status_bucket["amount"] += total

        day = daily[bill.created_at.strftime("%Y-%m-%d")]
        day["revenue"] += paid
        day["bills"] += 1

        totals["total_revenue"] += paid
        totals["total_pending"] += balance
        totals["total_billed"] += total
        totals["total_bills"] += 1

    return {
        "revenue_by_type": by_type,
        "payment_status": by_status,
        "daily_revenue": [
            {"date": date, **values} for date, values in sorted(daily.items())
        ],
        "totals": totals,
    }
