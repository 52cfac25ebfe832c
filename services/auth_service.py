from typing import Dict, Any
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
import logging
import uuid

import bcrypt
import jwt

from app.config import settings
from app.exceptions import UnauthorizedError, NotFoundError, ConflictError
from domain.models import AppUser
from domain.schemas.auth_schemas import UserRegister, UserLogin, ProfileUpdate
from repositories import UserRepository

logger = logging.getLogger("lyfe.auth")


class AuthService:
    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    @staticmethod
    def create_token(user: AppUser) -> Dict[str, Any]:
        """Sign a bearer token for the user.

        Returns:
            {"token": str, "expires_at": datetime}
        """
        expires_at = datetime.utcnow() + timedelta(minutes=settings.jwt_expires_minutes)
        payload = {
            "sub": str(user.user_id),
            "email": user.email,
            "exp": expires_at,
            "iat": datetime.utcnow(),
        }
        token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        return {"token": token, "expires_at": expires_at}

    @staticmethod
    def decode_token(token: str) -> uuid.UUID:
        """Validate a bearer token and return the user id it was issued for.

        Raises:
            UnauthorizedError: expired, tampered or malformed token
        """
        try:
            payload = jwt.decode(
                token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected invalid token: {e}")
            raise UnauthorizedError("Invalid token")

        try:
            return uuid.UUID(payload["sub"])
        except (KeyError, ValueError, TypeError):
            raise UnauthorizedError("Invalid token subject")

    @staticmethod
    def _session_payload(user: AppUser) -> Dict[str, Any]:
        token = AuthService.create_token(user)
        return {
            "token": token["token"],
            "token_type": "bearer",
            "expires_at": token["expires_at"],
            "user": user,
        }

    @staticmethod
    def register(db: Session, data: UserRegister) -> Dict[str, Any]:
        """Create an account and sign the user in.

        Raises:
            ConflictError: email already registered
        """
        user_repo = UserRepository(db)
        if user_repo.get_by_email(data.email):
            raise ConflictError("An account with this email already exists")

        extra = {"timezone": data.timezone} if data.timezone else {}
        user = user_repo.create_user(
            email=data.email,
            name=data.name,
            password_hash=AuthService.hash_password(data.password),
            **extra,
        )
        logger.info(f"Registered user {user.user_id}")
        return AuthService._session_payload(user)

    @staticmethod
    def login(db: Session, data: UserLogin) -> Dict[str, Any]:
        user = UserRepository(db).get_by_email(data.email)
        if not user or not AuthService.verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        logger.info(f"User {user.user_id} logged in")
        return AuthService._session_payload(user)

    @staticmethod
    def get_user(db: Session, user_id: uuid.UUID) -> AppUser:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    @staticmethod
    def update_profile(db: Session, user: AppUser, data: ProfileUpdate) -> AppUser:
        """Update name/timezone/onboarding flag; ``profile`` keys are merged"""
        changes = data.model_dump(exclude_unset=True)
        profile_patch = changes.pop("profile", None)
        if profile_patch:
            changes["profile"] = {**(user.profile or {}), **profile_patch}
        return UserRepository(db).apply_changes(user, changes)
