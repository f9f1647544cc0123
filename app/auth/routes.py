# app/auth/routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.auth import services as auth_service
from app.auth.schemas import (
    MessageOut,
    PasswordChange,
    ProfileUpdate,
    TokenOut,
    UserLogin,
    UserMessageOut,
    UserOut,
    UserRegister,
)
from app.auth.models import User
from app.core.database import get_db
from app.core.deps import AuthContext, get_current_user
from app.core.security import create_access_token
router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_for(user: User) -> str:
    return create_access_token(user.id, user.email, user.role, user.unit_number)


def current_account(
    user: AuthContext = Depends(get_current_user), db: Session = Depends(get_db)
) -> User:
    account = auth_service.get_user(db, user.user_id)
    if not account:
        raise HTTPException(status_code=404, detail="User not found")
    return account


@router.post("/register", response_model=TokenOut, status_code=201)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    user = auth_service.register_user(db, payload)
    return {
        "message": f"{user.role.capitalize()} account created successfully",
        "token": _token_for(user),
        "user": user,
    }


@router.post("/login", response_model=TokenOut)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, payload.email, payload.password)
    return {"message": "Login successful", "token": _token_for(user), "user": user}


@router.post("/verify", response_model=UserMessageOut)
def verify(account: User = Depends(current_account)):
    return {"message": "Token is valid", "user": account}


@router.get("/me", response_model=UserOut)
def me(account: User = Depends(current_account)):
    return account


@router.get("/profile", response_model=UserOut)
def profile(account: User = Depends(current_account)):
    return account


@router.put("/profile", response_model=UserMessageOut)
def update_profile(
    payload: ProfileUpdate,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
):
    user = auth_service.update_profile(db, account, payload)
    return {"message": "Profile updated successfully", "user": user}


@router.put("/change-password", response_model=MessageOut)
def change_password(
    payload: PasswordChange,
    account: User = Depends(current_account),
    db: Session = Depends(get_db),
):
    auth_service.change_password(db, account, payload.current_password, payload.new_password)
    return {"message": "Password changed successfully"}
