"""Registry Service - departments, patients, clinical staff and beds.

Plain record keeping. The ``get_*`` lookups raise ``NotFoundError`` so
that a dangling reference fails at the boundary instead of producing an
empty relationship further down.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.department import Department
from app.models.enums import BedStatus, UserRole, WardType
from app.models.patient import Patient
from app.models.staff import Doctor, Nurse
from app.models.ward import Bed
from app.schemas.occupancy import BedCreate
from app.schemas.registry import DepartmentCreate, DoctorCreate, NurseCreate, PatientCreate
from app.services import id_gen
from app.services.user_service import UserService

logger = get_logger(__name__)


class RegistryService:

    # Departments
    @staticmethod
    async def create_department(db: AsyncSession, data: DepartmentCreate) -> Department:
        existing = await db.execute(select(Department).where(Department.name == data.name))
        if existing.scalar_one_or_none():
            raise ConflictError(f"Department {data.name} already exists")
        department = Department(name=data.name, description=data.description, is_active=True)
        db.add(department)
        await db.commit()
        return department

    @staticmethod
    async def list_departments(db: AsyncSession) -> List[Department]:
        result = await db.execute(select(Department).order_by(Department.name))
        return list(result.scalars().all())

    @staticmethod
    async def get_department(db: AsyncSession, department_id: UUID) -> Department:
        department = await db.get(Department, department_id)
        if not department:
            raise NotFoundError("Department not found")
        return department

    # Patients
    @staticmethod
    async def create_patient(db: AsyncSession, data: PatientCreate) -> Patient:
        if data.user_id is not None:
            user = await UserService.get_user_by_id(db, data.user_id)
            if not user:
                raise NotFoundError("User not found")
        patient = Patient(
            patient_code=id_gen.generate_patient_code(),
            user_id=data.user_id,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            date_of_birth=data.date_of_birth,
            gender=data.gender,
        )
        db.add(patient)
        await db.commit()
        logger.info("Patient registered", extra={"patient_code": patient.patient_code})
        return patient

    @staticmethod
    async def list_patients(db: AsyncSession, search: Optional[str] = None, limit: int = 50) -> List[Patient]:
        query = select(Patient).order_by(Patient.created_at.desc()).limit(limit)
        if search:
            pattern = f"%{search}%"
            query = query.where(
                Patient.patient_code.ilike(pattern)
                | Patient.phone.ilike(pattern)
                | Patient.last_name.ilike(pattern)
            )
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def get_patient(db: AsyncSession, patient_id: UUID, for_update: bool = False) -> Patient:
        query = select(Patient).where(Patient.id == patient_id)
        if for_update:
            query = query.with_for_update()
        result = await db.execute(query)
        patient = result.scalar_one_or_none()
        if not patient:
            raise NotFoundError("Patient not found")
        return patient

    # Doctors & nurses
    @staticmethod
    async def create_doctor(db: AsyncSession, data: DoctorCreate) -> Doctor:
        await RegistryService.get_department(db, data.department_id)
        user = await UserService.create_user(
            db,
            email=data.email,
            password=data.password,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            role=UserRole.DOCTOR,
            auto_commit=False,
        )
        doctor = Doctor(
            doctor_code=id_gen.generate_doctor_code(),
            user_id=user.id,
            department_id=data.department_id,
            specialization=data.specialization,
            consultation_fee=data.consultation_fee,
        )
        db.add(doctor)
        await db.commit()
        return doctor

    @staticmethod
    async def get_doctor(db: AsyncSession, doctor_id: UUID) -> Doctor:
        doctor = await db.get(Doctor, doctor_id)
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    @staticmethod
    async def list_doctors(db: AsyncSession, department_id: Optional[UUID] = None) -> List[Doctor]:
        query = select(Doctor).order_by(Doctor.doctor_code)
        if department_id:
            query = query.where(Doctor.department_id == department_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def create_nurse(db: AsyncSession, data: NurseCreate) -> Nurse:
        await RegistryService.get_department(db, data.department_id)
        user = await UserService.create_user(
            db,
            email=data.email,
            password=data.password,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            role=UserRole.NURSE,
            auto_commit=False,
        )
        nurse = Nurse(
            nurse_code=id_gen.generate_nurse_code(),
            user_id=user.id,
            department_id=data.department_id,
            assigned_ward=data.assigned_ward,
            shift=data.shift,
        )
        db.add(nurse)
        await db.commit()
        return nurse

    @staticmethod
    async def get_nurse(db: AsyncSession, nurse_id: UUID, for_update: bool = False) -> Nurse:
        query = select(Nurse).where(Nurse.id == nurse_id)
        if for_update:
            # the joined user is on the nullable side of an outer join
            query = query.with_for_update(of=Nurse)
        result = await db.execute(query)
        nurse = result.scalar_one_or_none()
        if not nurse:
            raise NotFoundError("Nurse not found")
        return nurse

    @staticmethod
    async def get_nurse_by_user(db: AsyncSession, user_id: UUID) -> Nurse:
        result = await db.execute(select(Nurse).where(Nurse.user_id == user_id))
        nurse = result.scalar_one_or_none()
        if not nurse:
            raise NotFoundError("Nurse profile not found")
        return nurse

    @staticmethod
    async def list_nurses(db: AsyncSession) -> List[Nurse]:
        result = await db.execute(select(Nurse).order_by(Nurse.nurse_code))
        return list(result.scalars().all())

    # Beds
    @staticmethod
    async def create_bed(db: AsyncSession, data: BedCreate) -> Bed:
        existing = await db.execute(select(Bed).where(Bed.bed_number == data.bed_number))
        if existing.scalar_one_or_none():
            raise ConflictError(f"Bed {data.bed_number} already exists")
        if data.department_id:
            await RegistryService.get_department(db, data.department_id)
        bed = Bed(
            bed_number=data.bed_number,
            ward_number=data.ward_number,
            floor=data.floor,
            department_id=data.department_id,
            ward_type=data.ward_type,
            bed_type=data.bed_type or data.ward_type,
            status=BedStatus.VACANT,
            daily_charge=data.daily_charge,
            notes=data.notes,
            is_active=True,
        )
        db.add(bed)
        await db.commit()
        logger.info("Bed provisioned", extra={"bed_number": bed.bed_number, "ward": bed.ward_number})
        return bed

    @staticmethod
    async def list_beds(
        db: AsyncSession,
        status: Optional[BedStatus] = None,
        ward_number: Optional[str] = None,
        ward_type: Optional[WardType] = None,
        floor: Optional[int] = None,
    ) -> List[Bed]:
        query = select(Bed).where(Bed.is_active.is_(True))
        if status:
            query = query.where(Bed.status == status)
        if ward_number:
            query = query.where(Bed.ward_number == ward_number)
        if ward_type:
            query = query.where(Bed.ward_type == ward_type)
        if floor is not None:
            query = query.where(Bed.floor == floor)
        result = await db.execute(query.order_by(Bed.floor, Bed.bed_number))
        return list(result.scalars().all())
