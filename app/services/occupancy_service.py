"""Occupancy Tracker - beds, admissions and nurse assignments.

Keeps three records consistent across admit -> treat -> close:

* a bed is ``occupied`` exactly while an ``admitted`` admission holds it,
  and its ``current_patient_id`` is that admission's patient;
* closing an admission frees the bed and retires every active nurse
  assignment for the patient.

Each operation locks the rows it changes (``FOR UPDATE``) and commits once,
so a failure part-way leaves no half-applied transition. Admit also locks
the patient and assign locks the nurse; partial unique indexes on
``admissions`` and ``nurse_assignments`` back the one-active-record rules.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.admission import Admission, VitalSign
from app.models.enums import (
    ADMINISTRATIVE_BED_STATUSES, AdmissionStatus, AssignmentStatus, BedStatus,
)
from app.models.staff import NurseAssignment
from app.models.ward import Bed
from app.schemas.occupancy import (
    AdmissionCreate, BedStatusUpdate, DischargeRequest, OccupancyStats, VitalsCreate,
)
from app.services import id_gen
from app.services.registry_service import RegistryService
from app.utils.time import get_utc_now, stay_days, to_naive_utc

logger = get_logger(__name__)

TERMINAL_CLOSURES = frozenset({
    AdmissionStatus.DISCHARGED,
    AdmissionStatus.TRANSFERRED,
    AdmissionStatus.ABSCONDED,
    AdmissionStatus.DECEASED,
})


def release_bed(bed: Bed) -> Bed:
    bed.status = BedStatus.VACANT
    bed.current_patient_id = None
    bed.assigned_doctor_id = None
    bed.assigned_nurse_id = None
    bed.admitted_at = None
    return bed


def occupancy_stats(beds: List[Bed]) -> OccupancyStats:
    counts = {status.value: 0 for status in BedStatus}
    for bed in beds:
        counts[BedStatus(bed.status).value] += 1
    return OccupancyStats(total=len(beds), **counts)


class OccupancyTracker:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_bed(self, bed_id: UUID, for_update: bool = False) -> Bed:
        query = select(Bed).where(Bed.id == bed_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        bed = result.scalar_one_or_none()
        if not bed:
            raise NotFoundError("Bed not found")
        return bed

    async def get_admission(self, admission_id: UUID, for_update: bool = False) -> Admission:
        query = select(Admission).where(Admission.id == admission_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        admission = result.scalar_one_or_none()
        if not admission:
            raise NotFoundError("Admission not found")
        return admission

    async def get_active_admission(self, admission_id: UUID) -> Admission:
        """Locked admission that is still ``admitted``; NotFoundError otherwise."""
        admission = await self.get_admission(admission_id, for_update=True)
        if admission.status != AdmissionStatus.ADMITTED:
            raise NotFoundError(f"No active admission {admission.admission_code}")
        return admission

    async def current_admission(self, patient_id: UUID) -> Optional[Admission]:
        result = await self.db.execute(
            select(Admission).where(
                Admission.patient_id == patient_id,
                Admission.status == AdmissionStatus.ADMITTED,
            )
        )
        return result.scalars().first()

    async def available_beds(self, ward_type=None, floor: Optional[int] = None) -> List[Bed]:
        return await RegistryService.list_beds(
            self.db, status=BedStatus.VACANT, ward_type=ward_type, floor=floor
        )

    async def bed_occupancy(self, ward_number: Optional[str] = None):
        beds = await RegistryService.list_beds(self.db, ward_number=ward_number)
        return occupancy_stats(beds), beds

    async def _commit_or_conflict(self, message: str) -> None:
        """Commit; a partial unique index violation (double admit, double assign) is a conflict."""
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("Concurrent write rejected", extra={"reason": message})
            raise ConflictError(message)

    # ------------------------------------------------------------------
    # Admission lifecycle
    # ------------------------------------------------------------------

    async def admit(self, data: AdmissionCreate) -> Admission:
        """
        Admit a patient into a vacant bed.

        Raises:
            NotFoundError: patient, doctor, department or bed missing
            ConflictError: bed not vacant, or the patient is already admitted
        """
        patient = await RegistryService.get_patient(self.db, data.patient_id, for_update=True)
        doctor = await RegistryService.get_doctor(self.db, data.doctor_id)
        department_id = data.department_id or doctor.department_id
        await RegistryService.get_department(self.db, department_id)

        bed = await self.get_bed(data.bed_id, for_update=True)
        if bed.status != BedStatus.VACANT:
            logger.warning(
                "Admission rejected: bed unavailable",
                extra={"bed_number": bed.bed_number, "bed_status": bed.status.value},
            )
            raise ConflictError(f"Bed {bed.bed_number} is not available. Current status: {bed.status.value}")

        if await self.current_admission(patient.id):
            raise ConflictError(f"Patient {patient.patient_code} is already admitted")

        now = get_utc_now()
        admission = Admission(
            admission_code=id_gen.generate_admission_code(),
            patient_id=patient.id,
            doctor_id=doctor.id,
            department_id=department_id,
            bed_id=bed.id,
            admission_type=data.admission_type,
            admission_date=to_naive_utc(data.admission_date) or now,
            status=AdmissionStatus.ADMITTED,
            reason_for_admission=data.reason_for_admission,
            provisional_diagnosis=data.provisional_diagnosis,
            treatment_plan=data.treatment_plan,
        )
        admission.vitals = []
        self.db.add(admission)

        bed.status = BedStatus.OCCUPIED
        bed.current_patient_id = patient.id
        bed.assigned_doctor_id = doctor.id
        bed.admitted_at = now

        await self._commit_or_conflict(f"Patient {patient.patient_code} is already admitted")
        logger.info(
            "Patient admitted",
            extra={
                "admission_code": admission.admission_code,
                "patient_code": patient.patient_code,
                "bed_number": bed.bed_number,
            },
        )
        return admission

    async def discharge(self, admission_id: UUID, data: Optional[DischargeRequest] = None) -> Admission:
        """
        Discharge an admitted patient: stamp the discharge date and stay
        length, free the bed and retire the patient's nurse assignments.

        Raises:
            NotFoundError: no such admission, or it is no longer admitted
        """
        data = data or DischargeRequest()
        admission = await self.get_active_admission(admission_id)
        if data.final_diagnosis is not None:
            admission.final_diagnosis = data.final_diagnosis
        if data.discharge_summary is not None:
            admission.discharge_summary = data.discharge_summary
        return await self._close(admission, AdmissionStatus.DISCHARGED, data.discharge_date)

    async def close_admission(self, admission_id: UUID, status: AdmissionStatus, notes: Optional[str] = None) -> Admission:
        """End an admission as transferred, absconded or deceased."""
        if status not in TERMINAL_CLOSURES or status == AdmissionStatus.DISCHARGED:
            raise ValidationError("Closure status must be transferred, absconded or deceased")
        admission = await self.get_active_admission(admission_id)
        if notes:
            admission.discharge_summary = notes
        return await self._close(admission, status)

    async def _close(self, admission: Admission, status: AdmissionStatus, when=None) -> Admission:
        closed_at = to_naive_utc(when) or get_utc_now()
        if closed_at < admission.admission_date:
            raise ValidationError("Discharge date cannot precede the admission date")

        bed = await self.get_bed(admission.bed_id, for_update=True)

        admission.discharge_date = closed_at
        admission.status = status
        admission.total_stay_days = stay_days(admission.admission_date, closed_at)

        if bed.current_patient_id == admission.patient_id:
            release_bed(bed)
        else:
            logger.warning(
                "Bed no longer held by admission patient",
                extra={"bed_number": bed.bed_number, "admission_code": admission.admission_code},
            )

        await self.db.execute(
            update(NurseAssignment)
            .where(
                NurseAssignment.patient_id == admission.patient_id,
                NurseAssignment.status == AssignmentStatus.ACTIVE,
            )
            .values(status=AssignmentStatus.DISCHARGED)
            .execution_options(synchronize_session="fetch")
        )

        await self.db.commit()
        logger.info(
            "Admission closed",
            extra={
                "admission_code": admission.admission_code,
                "status": status.value,
                "stay_days": admission.total_stay_days,
            },
        )
        return admission

    async def record_vitals(
        self,
        admission_id: UUID,
        data: VitalsCreate,
        recorded_by_id: Optional[UUID] = None,
    ) -> VitalSign:
        """Append a vitals entry to an admitted patient's history."""
        admission = await self.get_active_admission(admission_id)
        entry = VitalSign(
            admission_id=admission.id,
            recorded_by_id=recorded_by_id,
            recorded_at=get_utc_now(),
            **data.model_dump(),
        )
        admission.vitals.append(entry)
        await self.db.commit()
        return entry

    # ------------------------------------------------------------------
    # Beds
    # ------------------------------------------------------------------

    async def set_bed_status(self, bed_id: UUID, data: BedStatusUpdate) -> Bed:
        """
        Administrative status change (vacant <-> reserved/maintenance/cleaning).
        Occupied is reachable only through admit and left only through
        discharge.
        """
        bed = await self.get_bed(bed_id, for_update=True)
        if bed.status == BedStatus.OCCUPIED or data.status not in ADMINISTRATIVE_BED_STATUSES:
            raise ConflictError(
                f"Bed {bed.bed_number} cannot move from {bed.status.value} to {data.status.value}"
            )
        if bed.status != BedStatus.VACANT and data.status != BedStatus.VACANT:
            raise ConflictError(f"Bed {bed.bed_number} must be vacant before it is {data.status.value}")

        bed.status = data.status
        if data.notes is not None:
            bed.notes = data.notes
        if data.status == BedStatus.VACANT:
            bed.admitted_at = None
        await self.db.commit()
        return bed

    # ------------------------------------------------------------------
    # Nurse assignments
    # ------------------------------------------------------------------

    async def assign_nurse(self, nurse_id: UUID, patient_id: UUID, bed_number: Optional[str] = None) -> NurseAssignment:
        """
        Put a patient on a nurse's active list. At most one active record
        exists per (nurse, patient); earlier discharged records are kept.

        Raises:
            NotFoundError: nurse or patient missing
            ConflictError: patient already actively assigned to this nurse
        """
        nurse = await RegistryService.get_nurse(self.db, nurse_id, for_update=True)
        patient = await RegistryService.get_patient(self.db, patient_id)

        if any(
            a.patient_id == patient.id and a.status == AssignmentStatus.ACTIVE
            for a in nurse.assignments
        ):
            raise ConflictError("Patient is already assigned to this nurse")

        if not bed_number:
            admission = await self.current_admission(patient.id)
            if admission:
                bed = await self.get_bed(admission.bed_id)
                bed_number = bed.bed_number
        assignment = NurseAssignment(
            nurse_id=nurse.id,
            patient_id=patient.id,
            bed_number=bed_number or "N/A",
            assigned_date=get_utc_now(),
            status=AssignmentStatus.ACTIVE,
        )
        nurse.assignments.append(assignment)
        await self._commit_or_conflict("Patient is already assigned to this nurse")
        logger.info(
            "Nurse assigned",
            extra={"nurse_code": nurse.nurse_code, "patient_code": patient.patient_code, "bed_number": assignment.bed_number},
        )
        return assignment

    async def unassign_nurse(self, nurse_id: UUID, patient_id: UUID) -> NurseAssignment:
        nurse = await RegistryService.get_nurse(self.db, nurse_id)
        assignment = next(
            (
                a for a in nurse.assignments
                if a.patient_id == patient_id and a.status == AssignmentStatus.ACTIVE
            ),
            None,
        )
        if not assignment:
            raise NotFoundError("Patient assignment not found")
        assignment.status = AssignmentStatus.DISCHARGED
        await self.db.commit()
        return assignment

    async def list_assignments(self, nurse_id: UUID, active_only: bool = True) -> List[NurseAssignment]:
        nurse = await RegistryService.get_nurse(self.db, nurse_id)
        if not active_only:
            return list(nurse.assignments)
        return [a for a in nurse.assignments if a.status == AssignmentStatus.ACTIVE]
