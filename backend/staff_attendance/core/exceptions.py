"""
Application exceptions and the global exception handlers.
Every failure reaches the client as {"success": false, "error": "<message>"}.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int = None, details: Any = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Missing or malformed required field."""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(AppException):
    """No authenticated session."""
    status_code = status.HTTP_401_UNAUTHORIZED


class RoleError(AppException):
    """Authenticated, but the role does not allow the operation."""
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppException):
    """Unknown staff id, holiday, user or other resource."""
    status_code = status.HTTP_404_NOT_FOUND


class ReferentialError(NotFoundError):
    """A write referenced a staff id that does not exist."""


class ConflictError(AppException):
    """Duplicate key on creation."""
    status_code = status.HTTP_409_CONFLICT


class StorageError(AppException):
    """Unrecoverable storage engine failure."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    """Build the uniform error body."""
    content = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )
    return error_response(exc.status_code, exc.message, exc.details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by the framework or endpoints."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )
    response = error_response(exc.status_code, str(exc.detail))
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {}
        for key, value in error.items():
            if key == "ctx" and isinstance(value, dict):
                serialized_error[key] = {
                    ctx_key: str(ctx_value) if isinstance(ctx_value, Exception) else ctx_value
                    for ctx_key, ctx_value in value.items()
                }
            elif isinstance(value, Exception):
                serialized_error[key] = str(value)
            elif key == "input":
                continue
            else:
                serialized_error[key] = value
        serialized.append(serialized_error)
    return serialized


def _validation_message(errors: list) -> str:
    """Summarise validation errors as 'field: reason; field: reason'."""
    parts = []
    for error in errors:
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Validation error"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as 400 Bad Request."""
    serialized_errors = _serialize_validation_errors(exc.errors())

    logger.warning(
        f"Validation error: {serialized_errors}",
        extra={
            "path": request.url.path,
        },
    )

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        _validation_message(serialized_errors),
        serialized_errors,
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle slowapi limit breaches with the uniform error body."""
    logger.warning(
        f"Rate limit exceeded: {exc.detail}",
        extra={
            "path": request.url.path,
        },
    )
    return error_response(status.HTTP_429_TOO_MANY_REQUESTS, f"Rate limit exceeded: {exc.detail}")


async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle storage failures that escaped the repositories."""
    logger.exception(
        f"Storage failure: {exc}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage failure")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
