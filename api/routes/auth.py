"""Account registration, login and profile routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.schemas.auth_schemas import (
    UserRegister,
    UserLogin,
    ProfileUpdate,
    UserResponse,
    TokenResponse,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("lyfe.api.auth")


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    """Create an account; 409 when the email is taken"""
    return AuthService.register(db, payload)


@router.post("/login", response_model=TokenResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    return AuthService.login(db, payload)


@router.get("/me", response_model=UserResponse)
def me(user: AppUser = Depends(get_current_user)):
    return user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    user: AppUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AuthService.update_profile(db, user, payload)
