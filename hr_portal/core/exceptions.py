"""
Global exception handling for the application.
Every failure is converted to a small JSON body carrying a human-readable message.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hr_portal.config import get_settings

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)


class ValidationException(AppError):
    """Malformed or missing input."""
    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class UnauthenticatedException(AppError):
    """No usable bearer credential on the request."""
    def __init__(self, message: str = "No token provided"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, headers={"WWW-Authenticate": "Bearer"})


class InvalidTokenException(UnauthenticatedException):
    """Token signature or structure could not be verified."""
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredException(UnauthenticatedException):
    """Token was valid but its expiry has passed."""
    def __init__(self, message: str = "Token expired"):
        super().__init__(message)


class UserNotFoundException(UnauthenticatedException):
    """Token refers to a user that no longer exists."""
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class InvalidCredentialException(AppError):
    """Wrong password or recovery answer."""
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class AccountDeactivatedException(ForbiddenException):
    """Valid token, but the account behind it is inactive."""
    def __init__(
        self,
        message: str = "Your account has been deactivated. Please contact the administrator.",
    ):
        super().__init__(message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ConflictException(AppError):
    """Duplicate value or referential-integrity violation."""
    def __init__(self, message: str = "Conflict", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class RecoveryNotConfiguredException(AppError):
    """No recovery answer has been set for the primary admin."""
    def __init__(self, message: str = "Recovery answer is not configured. Set one first."):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class RateLimitExceededException(AppError):
    """Too many requests from one client address in the current window."""
    def __init__(self, message: str = "Too many requests. Please try again later.", retry_after: int = 0):
        super().__init__(
            message,
            status.HTTP_429_TOO_MANY_REQUESTS,
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after


def _error_body(request: Request, exc: AppError) -> Dict[str, Any]:
    # Fixed fields win over details
    body: Dict[str, Any] = dict(exc.details)
    body.update(
        success=False,
        message=exc.message,
        code=exc.__class__.__name__,
        path=request.url.path,
    )
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render a recognized application error."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Turn FastAPI body/query validation failures into 400 responses."""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        errors.append(f"{location}: {message}" if location else message)

    return await app_error_handler(request, ValidationException(details={"errors": errors}))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return await app_error_handler(request, exc)

    logger.exception("Unexpected error occurred", path=request.url.path)

    content: Dict[str, Any] = {
        "success": False,
        "message": "An unexpected error occurred. Please try again later.",
        "code": "InternalServerError",
        "path": request.url.path,
    }
    if get_settings().ENVIRONMENT == "development":
        content["error"] = str(exc)

    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_exception_handlers(app) -> None:
    """Attach every handler to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)
