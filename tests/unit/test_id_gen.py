"""Unit tests for entity code generation."""

import re

import pytest

from app.config import settings
from app.services import id_gen


def test_to_base36():
    assert id_gen.to_base36(0) == "0"
    assert id_gen.to_base36(35) == "Z"
    assert id_gen.to_base36(36) == "10"
    assert id_gen.to_base36(1704067200000) == "LQU5M2O0"


def test_to_base36_rejects_negative():
    with pytest.raises(ValueError):
        id_gen.to_base36(-1)


def test_generate_code_layout():
    code = id_gen.generate_code("BIL", now_ms=1704067200000)
    assert code.startswith("BILLQU5M2O0")
    assert len(code) == len("BILLQU5M2O0") + settings.CODE_RANDOM_LENGTH
    assert re.fullmatch(r"[0-9A-Z]+", code)


@pytest.mark.parametrize(
    "factory,prefix",
    [
        (id_gen.generate_patient_code, "PAT"),
        (id_gen.generate_doctor_code, "DOC"),
        (id_gen.generate_nurse_code, "NUR"),
        (id_gen.generate_bill_code, "BIL"),
        (id_gen.generate_admission_code, "ADM"),
    ],
)
def test_prefixed_generators(factory, prefix):
    assert factory().startswith(prefix)


def test_codes_do_not_repeat():
    codes = {id_gen.generate_bill_code() for _ in range(200)}
    assert len(codes) == 200
