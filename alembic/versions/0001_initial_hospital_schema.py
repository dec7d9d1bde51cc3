"""initial hospital schema: registry, beds, admissions, billing

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


ENUMS = {
    "user_role": ("admin", "doctor", "nurse", "patient", "billing", "pharmacy", "lab"),
    "gender": ("male", "female", "other"),
    "nurse_shift": ("morning", "evening", "night", "rotating"),
    "ward_type": ("general", "semi-private", "private", "icu"),
    "bed_status": ("vacant", "occupied", "reserved", "maintenance", "cleaning"),
    "admission_type": ("emergency", "scheduled", "transfer"),
    "admission_status": ("admitted", "discharged", "transferred", "absconded", "deceased"),
    "assignment_status": ("active", "discharged"),
    "bill_type": ("outpatient", "inpatient", "emergency", "pharmacy", "lab"),
    "bill_item_type": (
        "consultation", "medicine", "lab-test", "room-charge", "surgery",
        "nursing", "procedure", "equipment", "other",
    ),
    "payment_status": ("pending", "partial", "paid", "refunded"),
    "payment_method": ("cash", "card", "upi", "net-banking", "insurance"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _money(name: str, **kwargs) -> sa.Column:
    return sa.Column(name, sa.Numeric(12, 2), nullable=False, **kwargs)


def _base(table: str):
    """Columns every BaseModel table shares."""
    return (
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def upgrade() -> None:
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        "users",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("role", _enum("user_role"), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_base("users"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)
    op.create_index(op.f("ix_users_is_active"), "users", ["is_active"], unique=False)

    op.create_table(
        "departments",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_base("departments"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_departments_id"), "departments", ["id"], unique=False)
    op.create_index(op.f("ix_departments_is_active"), "departments", ["is_active"], unique=False)

    op.create_table(
        "patients",
        sa.Column("patient_code", sa.String(32), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("gender", _enum("gender"), nullable=True),
        *_base("patients"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(op.f("ix_patients_id"), "patients", ["id"], unique=False)
    op.create_index(op.f("ix_patients_patient_code"), "patients", ["patient_code"], unique=True)
    op.create_index(op.f("ix_patients_user_id"), "patients", ["user_id"], unique=False)
    op.create_index(op.f("ix_patients_phone"), "patients", ["phone"], unique=False)

    op.create_table(
        "doctors",
        sa.Column("doctor_code", sa.String(32), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("department_id", sa.UUID(), nullable=False),
        sa.Column("specialization", sa.String(255), nullable=True),
        _money("consultation_fee"),
        *_base("doctors"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="RESTRICT"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(op.f("ix_doctors_id"), "doctors", ["id"], unique=False)
    op.create_index(op.f("ix_doctors_doctor_code"), "doctors", ["doctor_code"], unique=True)
    op.create_index(op.f("ix_doctors_department_id"), "doctors", ["department_id"], unique=False)

    op.create_table(
        "nurses",
        sa.Column("nurse_code", sa.String(32), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("department_id", sa.UUID(), nullable=False),
        sa.Column("assigned_ward", sa.String(50), nullable=True),
        sa.Column("shift", _enum("nurse_shift"), nullable=False),
        *_base("nurses"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="RESTRICT"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(op.f("ix_nurses_id"), "nurses", ["id"], unique=False)
    op.create_index(op.f("ix_nurses_nurse_code"), "nurses", ["nurse_code"], unique=True)
    op.create_index(op.f("ix_nurses_department_id"), "nurses", ["department_id"], unique=False)

    op.create_table(
        "nurse_assignments",
        sa.Column("nurse_id", sa.UUID(), nullable=False),
        sa.Column("patient_id", sa.UUID(), nullable=False),
        sa.Column("bed_number", sa.String(30), nullable=False),
        sa.Column("assigned_date", sa.DateTime(), nullable=False),
        sa.Column("status", _enum("assignment_status"), nullable=False),
        *_base("nurse_assignments"),
        sa.ForeignKeyConstraint(["nurse_id"], ["nurses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["patient_id"], ["patients.id"], ondelete="CASCADE"),
    )
    op.create_index(op.f("ix_nurse_assignments_id"), "nurse_assignments", ["id"], unique=False)
    op.create_index(op.f("ix_nurse_assignments_nurse_id"), "nurse_assignments", ["nurse_id"], unique=False)
    op.create_index(op.f("ix_nurse_assignments_patient_id"), "nurse_assignments", ["patient_id"], unique=False)
    op.create_index(op.f("ix_nurse_assignments_status"), "nurse_assignments", ["status"], unique=False)
    op.create_index(
        "uq_nurse_assignments_active",
        "nurse_assignments",
        ["nurse_id", "patient_id"],
        unique=True,
        postgresql_where=sa.text("status = 'active'"),
    )

    op.create_table(
        "beds",
        sa.Column("bed_number", sa.String(30), nullable=False),
        sa.Column("ward_number", sa.String(30), nullable=False),
        sa.Column("floor", sa.Integer(), nullable=False),
        sa.Column("department_id", sa.UUID(), nullable=True),
        sa.Column("ward_type", _enum("ward_type"), nullable=False),
        sa.Column("bed_type", _enum("ward_type"), nullable=False),
        sa.Column("status", _enum("bed_status"), nullable=False),
        _money("daily_charge"),
        sa.Column("current_patient_id", sa.UUID(), nullable=True),
        sa.Column("assigned_doctor_id", sa.UUID(), nullable=True),
        sa.Column("assigned_nurse_id", sa.UUID(), nullable=True),
        sa.Column("admitted_at", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_base("beds"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["current_patient_id"], ["patients.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["assigned_doctor_id"], ["doctors.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["assigned_nurse_id"], ["nurses.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("bed_number"),
    )
    op.create_index(op.f("ix_beds_id"), "beds", ["id"], unique=False)
    op.create_index(op.f("ix_beds_ward_number"), "beds", ["ward_number"], unique=False)
    op.create_index(op.f("ix_beds_department_id"), "beds", ["department_id"], unique=False)
    op.create_index(op.f("ix_beds_is_active"), "beds", ["is_active"], unique=False)
    op.create_index("ix_beds_status_ward", "beds", ["status", "ward_type", "ward_number"], unique=False)

    op.create_table(
        "admissions",
        sa.Column("admission_code", sa.String(32), nullable=False),
        sa.Column("patient_id", sa.UUID(), nullable=False),
        sa.Column("doctor_id", sa.UUID(), nullable=False),
        sa.Column("department_id", sa.UUID(), nullable=False),
        sa.Column("bed_id", sa.UUID(), nullable=False),
        sa.Column("admission_type", _enum("admission_type"), nullable=False),
        sa.Column("admission_date", sa.DateTime(), nullable=False),
        sa.Column("discharge_date", sa.DateTime(), nullable=True),
        sa.Column("status", _enum("admission_status"), nullable=False),
        sa.Column("reason_for_admission", sa.Text(), nullable=False),
        sa.Column("provisional_diagnosis", sa.Text(), nullable=True),
        sa.Column("final_diagnosis", sa.Text(), nullable=True),
        sa.Column("treatment_plan", sa.Text(), nullable=True),
        sa.Column("discharge_summary", sa.Text(), nullable=True),
        sa.Column("total_stay_days", sa.Integer(), nullable=True),
        *_base("admissions"),
        sa.ForeignKeyConstraint(["patient_id"], ["patients.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["doctor_id"], ["doctors.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["bed_id"], ["beds.id"], ondelete="RESTRICT"),
    )
    op.create_index(op.f("ix_admissions_id"), "admissions", ["id"], unique=False)
    op.create_index(op.f("ix_admissions_admission_code"), "admissions", ["admission_code"], unique=True)
    op.create_index(op.f("ix_admissions_patient_id"), "admissions", ["patient_id"], unique=False)
    op.create_index(op.f("ix_admissions_doctor_id"), "admissions", ["doctor_id"], unique=False)
    op.create_index(op.f("ix_admissions_bed_id"), "admissions", ["bed_id"], unique=False)
    op.create_index(op.f("ix_admissions_status"), "admissions", ["status"], unique=False)
    op.create_index(
        "uq_admissions_patient_admitted",
        "admissions",
        ["patient_id"],
        unique=True,
        postgresql_where=sa.text("status = 'admitted'"),
    )

    op.create_table(
        "vital_signs",
        sa.Column("admission_id", sa.UUID(), nullable=False),
        sa.Column("recorded_by_id", sa.UUID(), nullable=True),
        sa.Column("recorded_at", sa.DateTime(), nullable=False),
        sa.Column("blood_pressure", sa.String(20), nullable=True),
        sa.Column("temperature", sa.Numeric(4, 1), nullable=True),
        sa.Column("pulse", sa.Integer(), nullable=True),
        sa.Column("respiratory_rate", sa.Integer(), nullable=True),
        sa.Column("oxygen_saturation", sa.Integer(), nullable=True),
        *_base("vital_signs"),
        sa.ForeignKeyConstraint(["admission_id"], ["admissions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recorded_by_id"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(op.f("ix_vital_signs_id"), "vital_signs", ["id"], unique=False)
    op.create_index(op.f("ix_vital_signs_admission_id"), "vital_signs", ["admission_id"], unique=False)

    op.create_table(
        "bills",
        sa.Column("bill_code", sa.String(32), nullable=False),
        sa.Column("patient_id", sa.UUID(), nullable=False),
        sa.Column("admission_id", sa.UUID(), nullable=True),
        sa.Column("generated_by_id", sa.UUID(), nullable=True),
        sa.Column("bill_type", _enum("bill_type"), nullable=False),
        sa.Column("bill_date", sa.DateTime(), nullable=False),
        _money("subtotal"),
        _money("discount_amount"),
        sa.Column("discount_percentage", sa.Numeric(5, 2), nullable=False),
        sa.Column("discount_reason", sa.String(255), nullable=True),
        _money("cgst"),
        _money("sgst"),
        _money("igst"),
        _money("total_amount"),
        _money("amount_paid"),
        _money("balance_amount"),
        sa.Column("payment_status", _enum("payment_status"), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_base("bills"),
        sa.ForeignKeyConstraint(["patient_id"], ["patients.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["admission_id"], ["admissions.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["generated_by_id"], ["users.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("admission_id"),
    )
    op.create_index(op.f("ix_bills_id"), "bills", ["id"], unique=False)
    op.create_index(op.f("ix_bills_bill_code"), "bills", ["bill_code"], unique=True)
    op.create_index(op.f("ix_bills_patient_id"), "bills", ["patient_id"], unique=False)
    op.create_index(op.f("ix_bills_bill_type"), "bills", ["bill_type"], unique=False)
    op.create_index(op.f("ix_bills_payment_status"), "bills", ["payment_status"], unique=False)

    op.create_table(
        "bill_items",
        sa.Column("bill_id", sa.UUID(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("item_type", _enum("bill_item_type"), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        _money("unit_price"),
        _money("total_price"),
        *_base("bill_items"),
        sa.ForeignKeyConstraint(["bill_id"], ["bills.id"], ondelete="CASCADE"),
    )
    op.create_index(op.f("ix_bill_items_id"), "bill_items", ["id"], unique=False)
    op.create_index(op.f("ix_bill_items_bill_id"), "bill_items", ["bill_id"], unique=False)

    op.create_table(
        "bill_payments",
        sa.Column("bill_id", sa.UUID(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("method", _enum("payment_method"), nullable=False),
        _money("amount"),
        sa.Column("transaction_id", sa.String(100), nullable=True),
        sa.Column("transaction_date", sa.DateTime(), nullable=False),
        *_base("bill_payments"),
        sa.ForeignKeyConstraint(["bill_id"], ["bills.id"], ondelete="CASCADE"),
    )
    op.create_index(op.f("ix_bill_payments_id"), "bill_payments", ["id"], unique=False)
    op.create_index(op.f("ix_bill_payments_bill_id"), "bill_payments", ["bill_id"], unique=False)
    op.create_index(op.f("ix_bill_payments_transaction_id"), "bill_payments", ["transaction_id"], unique=False)


def downgrade() -> None:
    for table in (
        "bill_payments", "bill_items", "bills", "vital_signs", "admissions", "beds",
        "nurse_assignments", "nurses", "doctors", "patients", "departments", "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        postgresql.ENUM(name=name).drop(bind, checkfirst=True)
