from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: machine-readable error code, defaults to the class default_code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_code = "SERVICE_ERROR"
    default_message = "Service error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_code = "SERVICE_VALIDATION_ERROR"
    default_message = "Invalid input"


class UnauthorizedError(ServiceError):
    """Raised when authentication fails or a token is missing/expired."""

    http_status = 401
    default_code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class NotFoundError(ServiceError):
    """Raised when a requested resource was not found (or is not owned by the caller)."""

    http_status = 404
    default_code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(ServiceError):
    """Raised when a resource conflict occurs (e.g., duplicate email)."""

    http_status = 409
    default_code = "CONFLICT"
    default_message = "Conflict"


class ExternalServiceError(ServiceError):
    """Raised when an upstream API (OpenAI, USDA, Open Food Facts) fails or is not configured."""

    http_status = 503
    default_code = "EXTERNAL_SERVICE_ERROR"
    default_message = "External service unavailable"
