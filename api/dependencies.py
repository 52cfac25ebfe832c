"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, UnauthorizedError
from domain.models import get_db_session, AppUser
from services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AppUser:
    """Resolve the bearer token to a user.

    Raises:
        UnauthorizedError: missing, malformed or expired token, or unknown user
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Authentication token required")
    user_id = AuthService.decode_token(credentials.credentials)
    try:
        return AuthService.get_user(db, user_id)
    except NotFoundError:
        raise UnauthorizedError("User no longer exists")
