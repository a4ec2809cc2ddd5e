"""
Application errors and their rendering.

Every failure leaves the API as the envelope ``{"success": false, "message": ...}``.
"""

from typing import Dict, Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for all application exceptions."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(APIError):
    """Required input missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields are required"


class DuplicateEmailError(APIError):
    """Email already taken, raised from the unique constraint."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already registered"


class InvalidCredentialsError(APIError):
    """Unknown email or wrong password; the message never says which."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class MissingTokenError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidTokenError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class StoreError(APIError):
    """Any other database failure. Details stay in the logs."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database operation failed"


def error_response(status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body validation failures as 400 envelopes"""
    missing = any(
        err.get("type") in ("missing", "string_too_short")
        for err in exc.errors()
    )
    message = "All fields are required" if missing else "Invalid request body"
    logger.info(f"Request validation failed on {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
