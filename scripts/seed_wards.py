#!/usr/bin/env python3
"""
Provision a department and the standard ward layout.

Usage:
  python scripts/seed_wards.py
  # Requires DATABASE_URL in .env (or export)

Layout (all beds start vacant):
  4 general wards x 10 beds   (GW-1..4,  beds G1-1..G4-10,  1000/day)
  5 semi-private x 2 beds     (SPW-1..5, beds SP1-1..SP5-2, 2000/day)
  5 private x 1 bed           (PW-1..5,  beds P1..P5,       3000/day)
  2 ICU wards x 5 beds        (ICU-1..2, beds ICU1-1..,     5000/day)

Re-running is safe: existing departments and bed numbers are skipped.
"""
import asyncio
import os
import sys
from decimal import Decimal

from dotenv import load_dotenv

_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(_root, ".env"))

# Add project root to path
sys.path.insert(0, _root)

from sqlalchemy import select  # noqa: E402

from app.core.logging import setup_logging, get_logger  # noqa: E402
from app.database import close_db, session_scope  # noqa: E402
from app.models.department import Department  # noqa: E402
from app.models.enums import WardType  # noqa: E402
from app.models.ward import Bed  # noqa: E402
from app.schemas.occupancy import BedCreate  # noqa: E402
from app.schemas.registry import DepartmentCreate  # noqa: E402
from app.services.registry_service import RegistryService  # noqa: E402

DEPARTMENT_NAME = "General Medicine"

# (ward type, ward prefix, bed prefix, wards, beds per ward, floor, daily charge)
LAYOUT = [
    (WardType.GENERAL, "GW", "G", 4, 10, 2, Decimal("1000")),
    (WardType.SEMI_PRIVATE, "SPW", "SP", 5, 2, 3, Decimal("2000")),
    (WardType.PRIVATE, "PW", "P", 5, 1, 4, Decimal("3000")),
    (WardType.ICU, "ICU", "ICU", 2, 5, 1, Decimal("5000")),
]


def planned_beds(department_id):
    for ward_type, ward_prefix, bed_prefix, wards, per_ward, floor, charge in LAYOUT:
        for ward in range(1, wards + 1):
            for bed in range(1, per_ward + 1):
                bed_number = f"{bed_prefix}{ward}" if per_ward == 1 else f"{bed_prefix}{ward}-{bed}"
                yield BedCreate(
                    bed_number=bed_number,
                    ward_number=f"{ward_prefix}-{ward}",
                    floor=floor,
                    department_id=department_id,
                    ward_type=ward_type,
                    daily_charge=charge,
                )


async def seed() -> int:
    logger = get_logger("seed_wards")
    created = 0
    async with session_scope() as db:
        result = await db.execute(select(Department).where(Department.name == DEPARTMENT_NAME))
        department = result.scalar_one_or_none()
        if not department:
            department = await RegistryService.create_department(
                db, DepartmentCreate(name=DEPARTMENT_NAME, description="Default inpatient department")
            )

        existing = set((await db.execute(select(Bed.bed_number))).scalars().all())
        for bed_in in planned_beds(department.id):
            if bed_in.bed_number in existing:
                continue
            await RegistryService.create_bed(db, bed_in)
            created += 1

    logger.info("Ward seed complete", extra={"beds_created": created, "beds_skipped": len(existing)})
    return created


def main():
    setup_logging()
    if not os.getenv("DATABASE_URL"):
        print("ERROR: DATABASE_URL must be set. Add to .env or export.")
        sys.exit(1)

    async def run():
        try:
            return await seed()
        finally:
            await close_db()

    created = asyncio.run(run())
    print(f"Created {created} beds")


if __name__ == "__main__":
    main()
