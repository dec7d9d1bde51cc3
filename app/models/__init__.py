"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, StatusMixin
from app.models.enums import *
from app.models.user import User
from app.models.department import Department
from app.models.patient import Patient
from app.models.staff import Doctor, Nurse, NurseAssignment
from app.models.ward import Bed
from app.models.admission import Admission, VitalSign
from app.models.billing import Bill, BillItem, BillPayment


__all__ = [
    # Base classes
    "BaseModel",
    "StatusMixin",

    # Users
    "User",

    # Registry
    "Department",
    "Patient",
    "Doctor",
    "Nurse",
    "NurseAssignment",

    # Occupancy
    "Bed",
    "Admission",
    "VitalSign",

    # Billing
    "Bill",
    "BillItem",
    "BillPayment",
]
