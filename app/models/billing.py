"""Domain 3: Billing Models"""

from sqlalchemy import Column, String, Integer, Numeric, DateTime, Text, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, enum_column_type
from app.models.enums import BillType, BillItemType, PaymentStatus, PaymentMethod
from app.utils.time import get_utc_now

MONEY = Numeric(12, 2)


class Bill(BaseModel):
    """
    Invoice for one patient event.

    Derived columns (subtotal, totals, balance, payment status) are written
    only by ``app.services.billing_math``; they satisfy
    ``total = subtotal - discount_amount + cgst + sgst + igst`` and
    ``balance = total - amount_paid`` after every mutation.
    Bills are never deleted; refunds are a status.
    """
    __tablename__ = "bills"

    bill_code = Column(String(32), unique=True, nullable=False, index=True)
    patient_id = Column(UUID(as_uuid=True), ForeignKey("patients.id", ondelete="RESTRICT"), nullable=False, index=True)
    admission_id = Column(UUID(as_uuid=True), ForeignKey("admissions.id", ondelete="SET NULL"), unique=True, nullable=True)
    generated_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    bill_type = Column(enum_column_type(BillType, "bill_type"), nullable=False, index=True)
    bill_date = Column(DateTime, nullable=False, default=get_utc_now)

    subtotal = Column(MONEY, nullable=False, default=0)

    # Discount: amount always holds the applied value; percentage is 0 for fixed discounts
    discount_amount = Column(MONEY, nullable=False, default=0)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    discount_reason = Column(String(255), nullable=True)

    # Tax components
    cgst = Column(MONEY, nullable=False, default=0)
    sgst = Column(MONEY, nullable=False, default=0)
    igst = Column(MONEY, nullable=False, default=0)

    total_amount = Column(MONEY, nullable=False, default=0)
    amount_paid = Column(MONEY, nullable=False, default=0)
    balance_amount = Column(MONEY, nullable=False, default=0)
    payment_status = Column(
        enum_column_type(PaymentStatus, "payment_status"),
        default=PaymentStatus.PENDING,
        nullable=False,
        index=True,
    )
    notes = Column(Text, nullable=True)

    items = relationship(
        "BillItem",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="BillItem.position",
        lazy="selectin",
    )
    payments = relationship(
        "BillPayment",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="BillPayment.sequence",
        lazy="selectin",
    )

    @property
    def tax_total(self):
        return self.cgst + self.sgst + self.igst

    def __repr__(self) -> str:
        return f"<Bill {self.bill_code} {self.total_amount} - {self.payment_status}>"


class BillItem(BaseModel):
    __tablename__ = "bill_items"

    bill_id = Column(UUID(as_uuid=True), ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    item_type = Column(enum_column_type(BillItemType, "bill_item_type"), default=BillItemType.OTHER, nullable=False)
    description = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(MONEY, nullable=False)
    total_price = Column(MONEY, nullable=False)

    bill = relationship("Bill", back_populates="items")


class BillPayment(BaseModel):
    """One settlement against a bill; rows are append-only."""
    __tablename__ = "bill_payments"

    bill_id = Column(UUID(as_uuid=True), ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)
    method = Column(enum_column_type(PaymentMethod, "payment_method"), nullable=False)
    amount = Column(MONEY, nullable=False)
    transaction_id = Column(String(100), nullable=True, index=True)
    transaction_date = Column(DateTime, nullable=False, default=get_utc_now)

    bill = relationship("Bill", back_populates="payments")
