from datetime import timedelta

import jwt

from boilerplate.core.config import settings
from boilerplate.core.security import (
    PasswordHasher,
    create_access_token,
    decode_token,
    get_password_hash,
    validate_password,
    verify_password,
)


# ============================================================================
# PASSWORD HASHER TESTS
# ============================================================================


def test_hash_then_verify():
    hasher = PasswordHasher()
    hashed = hasher.hash("s3cret")

    assert hashed != "s3cret"
    assert hasher.verify(hashed, "s3cret")
    assert not hasher.verify(hashed, "S3cret")


def test_same_password_hashes_differently():
    hasher = PasswordHasher()
    assert hasher.hash("s3cret") != hasher.hash("s3cret")


def test_verify_malformed_hash_returns_false():
    hasher = PasswordHasher()
    assert hasher.verify("not-a-hash", "s3cret") is False
    assert hasher.verify("", "s3cret") is False
    assert hasher.verify(None, "s3cret") is False


def test_module_helpers_round_trip():
    hashed = get_password_hash("Password123")
    assert verify_password("Password123", hashed)
    assert not verify_password("Password124", hashed)


# ============================================================================
# PASSWORD STRENGTH TESTS
# ============================================================================


def test_validate_password_accepts_strong_password():
    assert validate_password("Password123") == (True, None)


def test_validate_password_rejections():
    assert "at least" in validate_password("Pass1")[1]
    assert "uppercase" in validate_password("password123")[1]
    assert "lowercase" in validate_password("PASSWORD123")[1]
    assert "number" in validate_password("Passwordxx")[1]


# ============================================================================
# SESSION TOKEN TESTS
# ============================================================================


def test_session_token_round_trip():
    token = create_access_token({"sub": "7", "role": "guest"})

    payload = decode_token(token)

    assert payload["sub"] == "7"
    assert payload["role"] == "guest"
    assert payload["type"] == "access"


def test_expired_session_token_is_rejected():
    token = create_access_token({"sub": "7"}, expires_delta=timedelta(seconds=-1))
    assert decode_token(token) is None


def test_tampered_session_token_is_rejected():
    token = jwt.encode({"sub": "7", "type": "access"}, "another-secret-key-for-testing-only!", algorithm=settings.algorithm)
    assert decode_token(token) is None
    assert decode_token("garbage") is None
