"""
App package - Application configuration and core utilities.
Contains settings and the service exception taxonomy.
"""

from app.config import settings
from app.exceptions import (
    ServiceError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    ExternalServiceError,
)

__all__ = [
    "settings",
    "ServiceError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "ExternalServiceError",
]
