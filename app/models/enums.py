"""Centralized Enum Definitions"""

import enum


# Domain 1: Users & Access
class UserRole(str, enum.Enum):
    """Roles asserted by access tokens"""
    ADMIN = "admin"
    DOCTOR = "doctor"
    NURSE = "nurse"
    PATIENT = "patient"
    BILLING = "billing"
    PHARMACY = "pharmacy"
    LAB = "lab"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class NurseShift(str, enum.Enum):
    MORNING = "morning"
    EVENING = "evening"
    NIGHT = "night"
    ROTATING = "rotating"


# Domain 2: Wards & Occupancy
class WardType(str, enum.Enum):
    """Ward and bed classes; each carries its own daily charge"""
    GENERAL = "general"
    SEMI_PRIVATE = "semi-private"
    PRIVATE = "private"
    ICU = "icu"


class BedStatus(str, enum.Enum):
    VACANT = "vacant"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"
    CLEANING = "cleaning"


# Statuses an administrator may set directly; occupied is owned by admit/discharge
ADMINISTRATIVE_BED_STATUSES = frozenset({
    BedStatus.VACANT,
    BedStatus.RESERVED,
    BedStatus.MAINTENANCE,
    BedStatus.CLEANING,
})


class AdmissionType(str, enum.Enum):
    EMERGENCY = "emergency"
    SCHEDULED = "scheduled"
    TRANSFER = "transfer"


class AdmissionStatus(str, enum.Enum):
    """Admission lifecycle; everything except ADMITTED is terminal"""
    ADMITTED = "admitted"
    DISCHARGED = "discharged"
    TRANSFERRED = "transferred"
    ABSCONDED = "absconded"
    DECEASED = "deceased"


class AssignmentStatus(str, enum.Enum):
    ACTIVE = "active"
    DISCHARGED = "discharged"


# Domain 3: Billing
class BillType(str, enum.Enum):
    OUTPATIENT = "outpatient"
    INPATIENT = "inpatient"
    EMERGENCY = "emergency"
    PHARMACY = "pharmacy"
    LAB = "lab"


class BillItemType(str, enum.Enum):
    CONSULTATION = "consultation"
    MEDICINE = "medicine"
    LAB_TEST = "lab-test"
    ROOM_CHARGE = "room-charge"
    SURGERY = "surgery"
    NURSING = "nursing"
    PROCEDURE = "procedure"
    EQUIPMENT = "equipment"
    OTHER = "other"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    NET_BANKING = "net-banking"
    INSURANCE = "insurance"


class AnalyticsPeriod(str, enum.Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"
