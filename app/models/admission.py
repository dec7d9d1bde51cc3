"""Domain 2: Inpatient Admissions"""

from sqlalchemy import Column, String, Integer, Numeric, DateTime, Text, ForeignKey, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, enum_column_type
from app.models.enums import AdmissionType, AdmissionStatus
from app.utils.time import get_utc_now


class Admission(BaseModel):
    """
    One inpatient stay from admit to a terminal status.
    While ``status == admitted`` the referenced bed is occupied by this patient.
    """
    __tablename__ = "admissions"
    __table_args__ = (
        Index(
            "uq_admissions_patient_admitted",
            "patient_id",
            unique=True,
            postgresql_where=text("status = 'admitted'"),
        ),
    )

    admission_code = Column(String(32), unique=True, nullable=False, index=True)
    patient_id = Column(UUID(as_uuid=True), ForeignKey("patients.id", ondelete="RESTRICT"), nullable=False, index=True)
    doctor_id = Column(UUID(as_uuid=True), ForeignKey("doctors.id", ondelete="RESTRICT"), nullable=False, index=True)
    department_id = Column(UUID(as_uuid=True), ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False)
    bed_id = Column(UUID(as_uuid=True), ForeignKey("beds.id", ondelete="RESTRICT"), nullable=False, index=True)

    admission_type = Column(enum_column_type(AdmissionType, "admission_type"), nullable=False)
    admission_date = Column(DateTime, nullable=False, default=get_utc_now)
    discharge_date = Column(DateTime, nullable=True)
    status = Column(
        enum_column_type(AdmissionStatus, "admission_status"),
        default=AdmissionStatus.ADMITTED,
        nullable=False,
        index=True,
    )

    reason_for_admission = Column(Text, nullable=False)
    provisional_diagnosis = Column(Text, nullable=True)
    final_diagnosis = Column(Text, nullable=True)
    treatment_plan = Column(Text, nullable=True)
    discharge_summary = Column(Text, nullable=True)
    total_stay_days = Column(Integer, nullable=True)

    vitals = relationship(
        "VitalSign",
        back_populates="admission",
        cascade="all, delete-orphan",
        order_by="VitalSign.recorded_at",
        lazy="selectin",
    )

    @property
    def is_active(self) -> bool:
        return self.status == AdmissionStatus.ADMITTED

    def __repr__(self) -> str:
        return f"<Admission {self.admission_code} ({self.status})>"


class VitalSign(BaseModel):
    """Append-only vitals entry taken during an admission."""
    __tablename__ = "vital_signs"

    admission_id = Column(UUID(as_uuid=True), ForeignKey("admissions.id", ondelete="CASCADE"), nullable=False, index=True)
    recorded_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    recorded_at = Column(DateTime, nullable=False, default=get_utc_now)

    blood_pressure = Column(String(20), nullable=True)
    temperature = Column(Numeric(4, 1), nullable=True)
    pulse = Column(Integer, nullable=True)
    respiratory_rate = Column(Integer, nullable=True)
    oxygen_saturation = Column(Integer, nullable=True)

    admission = relationship("Admission", back_populates="vitals")
