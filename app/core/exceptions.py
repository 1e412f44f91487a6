"""
Global exception handling for the application.
Standardizes error responses using Problem Details for HTTP APIs (RFC 7807).
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class InvalidCredentialsException(AppError):
    """Submitted credentials were rejected."""
    def __init__(self, message: str = "Invalid email or password", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class ConflictException(AppError):
    """Request conflicts with the current state of a resource."""
    def __init__(self, message: str = "Conflict", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class EventFullException(ConflictException):
    def __init__(self, message: str = "Event is full", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class AlreadyRegisteredException(ConflictException):
    def __init__(
        self,
        message: str = "User is already registered for this event",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class NotRegisteredException(ConflictException):
    def __init__(
        self,
        message: str = "User is not registered for this event",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class RegistrationClosedException(ConflictException):
    def __init__(
        self,
        message: str = "Registration is closed for this event",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class InvalidStateException(ConflictException):
    def __init__(self, message: str = "Invalid state", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class DuplicateEmailException(ConflictException):
    def __init__(self, message: str = "Email already exists", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": exc.__class__.__name__,
                    "message": exc.message,
                    "details": exc.details,
                    "path": request.url.path,
                }
            },
        )

    logger.exception("Unexpected error occurred", path=request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "An unexpected error occurred. Please try again later.",
                "path": request.url.path,
            }
        },
    )
