"""Unit tests for password hashing and tokens."""

from datetime import timedelta
from uuid import uuid4

from app.core import security


def test_password_round_trip():
    hashed = security.get_password_hash("CarePoint#2024")
    assert hashed != "CarePoint#2024"
    assert security.verify_password("CarePoint#2024", hashed)
    assert not security.verify_password("carepoint#2024", hashed)


def test_long_passwords_truncate_on_character_boundary():
    password = "é" * 40  # 80 bytes
    hashed = security.get_password_hash(password)
    assert security.verify_password(password, hashed)
    assert security.verify_password("é" * 36 + "x", hashed)


def test_malformed_hash_does_not_verify():
    assert not security.verify_password("anything", "not-a-bcrypt-hash")


def test_access_and_refresh_tokens_are_not_interchangeable():
    claims = {"sub": str(uuid4()), "role": "billing"}
    access = security.create_access_token(claims)
    refresh = security.create_refresh_token(claims)

    assert security.decode_token(access, expected_type=security.ACCESS)["role"] == "billing"
    assert security.decode_token(access, expected_type=security.REFRESH) is None
    assert security.decode_token(refresh, expected_type=security.REFRESH)["sub"] == claims["sub"]
    assert security.decode_token(refresh, expected_type=security.ACCESS) is None


def test_expired_and_tampered_tokens_rejected():
    claims = {"sub": str(uuid4())}
    expired = security.create_access_token(claims, expires_delta=timedelta(seconds=-5))
    assert security.decode_token(expired) is None
    assert security.decode_token(security.create_access_token(claims) + "x") is None


def test_token_without_subject_rejected():
    assert security.decode_token(security.create_access_token({"role": "admin"})) is None
