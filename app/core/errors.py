"""Domain error taxonomy.

Services raise these; ``app.main`` maps them to the
``{"success": false, "error": ..., "message": ...}`` envelope. Nothing
here knows about HTTP beyond the status code each error maps to.
"""
from typing import Any, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        error: Optional[str] = None,
        **context: Any,
    ):
        self.error = error or self.error
        self.message = message or self.error
        self.context = context
        super().__init__(self.message)

    def to_payload(self) -> dict:
        payload = {"success": False, "error": self.error, "message": self.message}
        payload.update(self.context)
        return payload


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad request"


class TenantHeaderMissingError(BadRequestError):
    error = "Tenant domain not provided"


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"


class TenantSuspendedError(ForbiddenError):
    error = "Tenant suspended"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class TenantNotFoundError(NotFoundError):
    error = "Tenant not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class OrderCapacityExceeded(ConflictError):
    error = "Order capacity exceeded"


class IllegalStateTransition(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Illegal status transition"
