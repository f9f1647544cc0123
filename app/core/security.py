# app/core/security.py
"""Password hashing and access tokens."""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from app.core.config import get_settings

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash
        return False


def create_access_token(
    user_id: int, email: str, role: str, unit_number: str | None
) -> str:
    """
    Creates a signed bearer token describing the caller.

    Args:
        user_id (int): The user's id, stored as the ``sub`` claim.
        email (str): The user's email address.
        role (str): ``resident`` or ``admin``.
        unit_number (str | None): The resident's unit, used as a default ticket location.

    Returns:
        str: The encoded JWT token.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRE_HOURS),
        "sub": str(user_id),
        "email": email,
        "role": role,
        "unitNumber": unit_number,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
