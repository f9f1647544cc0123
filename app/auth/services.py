# app/auth/services.py
import re

from sqlalchemy.orm import Session
from app.auth.models import User
from app.auth.schemas import ProfileUpdate, UserRegister
from app.core.clock import utcnow
from app.core.config import get_settings
from app.core.errors import AppError, AuthorizationError, ConflictError, ValidationError
from app.core.logging import logger
from app.core.security import hash_password, verify_password

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ADMIN_UNIT = "ADMIN"


class InvalidCredentialsError(AppError):
    status_code = 401


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_user(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def register_user(db: Session, payload: UserRegister) -> User:
    if payload.role == "resident" and not (payload.unit_number or "").strip():
        raise ValidationError("Unit number is required for residents")
    if payload.role == "admin":
        if not payload.admin_code:
            raise ValidationError("Admin access code is required for admin registration")
        if payload.admin_code != get_settings().ADMIN_ACCESS_CODE:
            raise AuthorizationError("Invalid admin access code")

    email = payload.email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format")
    if get_user_by_email(db, email):
        raise ConflictError("User with this email already exists")

    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        unit_number=payload.unit_number.strip() if payload.role == "resident" else ADMIN_UNIT,
        role=payload.role,
        created_at=utcnow(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered {user.role} account {user.email}")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Invalid email or password")
    return user


def update_profile(db: Session, user: User, payload: ProfileUpdate) -> User:
    """Blank or missing fields keep their current value."""
    if payload.first_name and payload.first_name.strip():
        user.first_name = payload.first_name.strip()
    if payload.last_name and payload.last_name.strip():
        user.last_name = payload.last_name.strip()
    if payload.unit_number and payload.unit_number.strip():
        user.unit_number = payload.unit_number.strip()
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    logger.info(f"Profile updated for {user.email}")
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> User:
    if not verify_password(current_password, user.password_hash):
        raise InvalidCredentialsError("Current password is incorrect")
    user.password_hash = hash_password(new_password)
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    logger.info(f"Password changed for {user.email}")
    return user
