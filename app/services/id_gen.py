"""Human-readable entity codes (BIL..., ADM..., PAT...).

Format: prefix + base36(epoch milliseconds) + random base36 suffix, upper
case. Uniqueness rests on the timestamp/random composition; the unique
column constraint is the backstop.
"""

import secrets
import string
import time
from typing import Optional

from app.config import settings

_BASE36 = string.digits + string.ascii_uppercase

PATIENT_PREFIX = "PAT"
DOCTOR_PREFIX = "DOC"
NURSE_PREFIX = "NUR"
BILL_PREFIX = "BIL"
ADMISSION_PREFIX = "ADM"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_code(prefix: str, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(settings.CODE_RANDOM_LENGTH))
    return f"{prefix}{to_base36(now_ms)}{suffix}"


def generate_patient_code() -> str:
    return generate_code(PATIENT_PREFIX)


def generate_doctor_code() -> str:
    return generate_code(DOCTOR_PREFIX)


def generate_nurse_code() -> str:
    return generate_code(NURSE_PREFIX)


def generate_bill_code() -> str:
    return generate_code(BILL_PREFIX)


def generate_admission_code() -> str:
    return generate_code(ADMISSION_PREFIX)
