"""Domain 2: Clinical Staff Models (doctors, nurses, nurse assignments)"""

from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Index, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, enum_column_type
from app.models.enums import NurseShift, AssignmentStatus
from app.utils.time import get_utc_now


class Doctor(BaseModel):
    __tablename__ = "doctors"

    doctor_code = Column(String(32), unique=True, nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    department_id = Column(UUID(as_uuid=True), ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False, index=True)
    specialization = Column(String(255), nullable=True)
    consultation_fee = Column(Numeric(12, 2), nullable=False, default=0)

    user = relationship("User", lazy="joined")

    def __repr__(self) -> str:
        return f"<Doctor {self.doctor_code}>"


class Nurse(BaseModel):
    __tablename__ = "nurses"

    nurse_code = Column(String(32), unique=True, nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    department_id = Column(UUID(as_uuid=True), ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False, index=True)
    assigned_ward = Column(String(50), nullable=True)
    shift = Column(enum_column_type(NurseShift, "nurse_shift"), default=NurseShift.MORNING, nullable=False)

    user = relationship("User", lazy="joined")
    assignments = relationship(
        "NurseAssignment",
        back_populates="nurse",
        cascade="all, delete-orphan",
        order_by="NurseAssignment.assigned_date",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Nurse {self.nurse_code}>"


class NurseAssignment(BaseModel):
    """
    Membership of a patient in a nurse's care list for one ward stay.
    Rows are never deleted; discharge or unassignment flips status.
    """
    __tablename__ = "nurse_assignments"
    __table_args__ = (
        # one active record per (nurse, patient); discharged rows are history
        Index(
            "uq_nurse_assignments_active",
            "nurse_id",
            "patient_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
        ),
    )

    nurse_id = Column(UUID(as_uuid=True), ForeignKey("nurses.id", ondelete="CASCADE"), nullable=False, index=True)
    patient_id = Column(UUID(as_uuid=True), ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    bed_number = Column(String(30), nullable=False, default="N/A")
    assigned_date = Column(DateTime, nullable=False, default=get_utc_now)
    status = Column(
        enum_column_type(AssignmentStatus, "assignment_status"),
        default=AssignmentStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    nurse = relationship("Nurse", back_populates="assignments")

    def __repr__(self) -> str:
        return f"<NurseAssignment nurse={self.nurse_id} patient={self.patient_id} ({self.status})>"
