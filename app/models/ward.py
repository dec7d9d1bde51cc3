"""Domain 2: Ward Beds"""

from sqlalchemy import Column, String, Integer, Numeric, DateTime, Text, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID

from app.models.base import BaseModel, StatusMixin, enum_column_type
from app.models.enums import WardType, BedStatus


_WARD_TYPE = enum_column_type(WardType, "ward_type")


class Bed(BaseModel, StatusMixin):
    """
    Physical bed. ``status == occupied`` exactly when ``current_patient_id``
    is set; only admission and discharge move a bed through occupied.
    """
    __tablename__ = "beds"
    __table_args__ = (
        Index("ix_beds_status_ward", "status", "ward_type", "ward_number"),
    )

    bed_number = Column(String(30), unique=True, nullable=False)
    ward_number = Column(String(30), nullable=False, index=True)
    floor = Column(Integer, nullable=False, default=0)
    department_id = Column(UUID(as_uuid=True), ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True)
    ward_type = Column(_WARD_TYPE, nullable=False)
    bed_type = Column(_WARD_TYPE, nullable=False)
    status = Column(enum_column_type(BedStatus, "bed_status"), default=BedStatus.VACANT, nullable=False)
    daily_charge = Column(Numeric(12, 2), nullable=False)

    current_patient_id = Column(UUID(as_uuid=True), ForeignKey("patients.id", ondelete="SET NULL"), nullable=True)
    assigned_doctor_id = Column(UUID(as_uuid=True), ForeignKey("doctors.id", ondelete="SET NULL"), nullable=True)
    assigned_nurse_id = Column(UUID(as_uuid=True), ForeignKey("nurses.id", ondelete="SET NULL"), nullable=True)
    admitted_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    @property
    def is_occupied(self) -> bool:
        return self.status == BedStatus.OCCUPIED

    def __repr__(self) -> str:
        return f"<Bed {self.bed_number} ({self.status})>"
