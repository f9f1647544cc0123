# app/auth/schemas.py
from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from app.core.schemas import CamelModel

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return value


class UserRegister(CamelModel):
    role: Literal["resident", "admin"]
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    unit_number: str | None = None
    admin_code: str | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class UserLogin(CamelModel):
    email: str
    password: str


class ProfileUpdate(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    unit_number: str | None = None


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)

    @field_validator("new_password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class UserOut(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    unit_number: str | None = None
    role: str
    created_at: datetime
    updated_at: datetime | None = None


class TokenOut(CamelModel):
    message: str
    token: str
    user: UserOut


class UserMessageOut(CamelModel):
    message: str
    user: UserOut


class MessageOut(CamelModel):
    message: str
