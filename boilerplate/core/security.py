import re
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

from boilerplate.core.config import settings


class PasswordHasher:
    """Salted one-way hashing of credentials (bcrypt via passlib)."""

    def __init__(self, context: CryptContext | None = None):
        self.context = context or CryptContext(schemes=["bcrypt"], deprecated="auto")

    def hash(self, plaintext: str) -> str:
        """Hash a password. A fresh salt is generated on every call."""
        return self.context.hash(plaintext)

    def verify(self, hash_text: str | None, plaintext: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Malformed or unrecognised hash text is reported as a mismatch.
        """
        try:
            return self.context.verify(plaintext, hash_text)
        except (ValueError, TypeError):
            return False


# Default hasher used by module-level helpers and migrations
pwd_hasher = PasswordHasher()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_hasher.verify(hashed_password, plain_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_hasher.hash(password)


def validate_password(password: str) -> tuple[bool, str | None]:
    """
    Validate password meets requirements:
    - Minimum length (PASSWORD_MIN_LENGTH, default 8)
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one number

    Returns: (is_valid, error_message)
    """
    if len(password) < settings.password_min_length:
        return False, (
            f"Password must be at least {settings.password_min_length} characters long"
        )

    if not re.search(r"[A-Z]", password):
        return False, "Password must contain at least one uppercase letter"

    if not re.search(r"[a-z]", password):
        return False, "Password must contain at least one lowercase letter"

    if not re.search(r"\d", password):
        return False, "Password must contain at least one number"

    return True, None


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a signed session token (stored in the session cookie)."""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt


def create_session_token(user) -> str:
    """Build the claims for a signed-in user and sign them."""
    return create_access_token(
        data={
            "sub": str(user.id),
            "name": user.name,
            "email": user.email,
            "role": user.role.value,
        }
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a session token."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return payload
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
