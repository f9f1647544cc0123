# app/core/deps.py
"""Dependencies for API endpoints."""

from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.logging import logger
from app.core.security import decode_access_token

reusable_oauth2 = HTTPBearer(scheme_name="Bearer")


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller, taken from the token claims as-is."""

    user_id: int
    email: str
    role: str
    unit_number: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def get_current_user(
    token: HTTPAuthorizationCredentials = Depends(reusable_oauth2),
) -> AuthContext:
    """
    Dependency to build the caller's AuthContext from the bearer token.
    """
    try:
        payload = decode_access_token(token.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired."
        ) from None
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}"
        ) from e

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as e:
        logger.warning(f"Malformed user id in token: {subject}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        ) from e

    return AuthContext(
        user_id=user_id,
        email=payload.get("email", ""),
        role=payload.get("role", "resident"),
        unit_number=payload.get("unitNumber"),
    )


def require_admin(user: AuthContext = Depends(get_current_user)) -> AuthContext:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return user
