#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.

Every error leaves the API in one envelope:
    {"error": {"code": "...", "message": "...", "field": "..."}}
"""

import logging
from typing import Any, Dict, Optional
from fastapi import Request
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

logger = logging.getLogger(__name__)

HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    422: "UNPROCESSABLE",
    429: "RATE_LIMIT",
}


def error_body(code: str, message: str, field: Optional[str] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if field:
        error["field"] = field
    return {"error": error}


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.field = field


class ValidationException(ServiceException):
    """Raised when a request field is missing or invalid."""
    status_code = 400
    code = "FIELD_REQUIRED"


class AuthenticationException(ServiceException):
    """Raised when credentials are missing or wrong."""
    status_code = 401
    code = "UNAUTHORIZED"


class InvalidTokenException(ServiceException):
    """Raised when a bearer token fails verification."""
    status_code = 403
    code = "INVALID_TOKEN"


class ForbiddenException(ServiceException):
    """Raised when the caller's role may not perform the action."""
    status_code = 403
    code = "FORBIDDEN"


class NotFoundException(ServiceException):
    """Raised when a resource is missing or not visible to the caller."""
    status_code = 404
    code = "NOT_FOUND"


class ConflictException(ServiceException):
    """Raised when a resource already exists."""
    status_code = 409
    code = "CONFLICT"


class UploadException(ServiceException):
    """Raised when an uploaded file cannot be processed."""
    status_code = 422
    code = "UPLOAD_ERROR"


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    if exc.status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.message, exc.field)
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.

    Args:
        request: The FastAPI request.
        exc: The HTTP exception.

    Returns:
        JSONResponse with error details.
    """
    code = HTTP_STATUS_CODES.get(exc.status_code, "INTERNAL_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Render request validation failures as 400s naming the first bad field.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if not isinstance(part, int)]
    field = location[-1] if location else None
    code = "FIELD_REQUIRED" if first.get("type") == "missing" else "INVALID_FIELD"

    if code == "FIELD_REQUIRED":
        message = f"{field} is required" if field else "Request body is required"
    else:
        message = f"Invalid value for {field}: {first.get('msg', 'invalid')}"

    return JSONResponse(status_code=400, content=error_body(code, message, field))


def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded
) -> JSONResponse:
    logger.warning(f"Rate limit exceeded for {request.client.host if request.client else 'unknown'}")
    return JSONResponse(
        status_code=429,
        content=error_body("RATE_LIMIT", f"Too many requests: {exc.detail}")
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", "Internal server error")
    )
