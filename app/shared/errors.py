"""
Error taxonomy and standardized error responses for the journal service.

Feature code raises the exceptions defined here; the handlers registered by
register_exception_handlers() turn them into the common JSON envelope:

    {"error": {"code": "...", "message": "...", "details": {...}, "correlation_id": "..."}}

Usage:
    from app.shared.errors import ValidationError

    if not query:
        raise ValidationError("query required", details={"field": "q"})
"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger("Journal.Errors")


class ErrorCode(str, Enum):
    """Standard error codes returned by the API."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


# =============================================================================
# EXCEPTIONS
# =============================================================================

class JournalServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class UnauthorizedError(JournalServiceError):
    """Missing or invalid owner identity. Not retried."""

    code = ErrorCode.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Unauthorized", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)


class ValidationError(JournalServiceError):
    """A required input is missing or malformed. Not retried."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400


class UpstreamError(JournalServiceError):
    """The entry store (or another required collaborator) failed."""

    code = ErrorCode.EXTERNAL_SERVICE_ERROR
    status_code = 502

    def __init__(self, service: str, message: str, operation: Optional[str] = None):
        details = {"service": service}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
        self.service = service


class DataIntegrityError(JournalServiceError):
    """Stored rows violate an invariant the aggregation relies on."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

class ErrorDetail(BaseModel):
    """Structured error detail model."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    correlation_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response wrapper."""
    error: ErrorDetail


def get_correlation_id(request: Optional[Request] = None) -> Optional[str]:
    """Extract the correlation ID stored on the request by CorrelationMiddleware."""
    if request is None:
        return None
    return getattr(request.state, "correlation_id", None)


def error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    details: Optional[dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a standardized JSON error response.

    Args:
        code: Error code from ErrorCode enum
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional error details
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with standardized error format
    """
    error_detail = ErrorDetail(
        code=code.value,
        message=message,
        details=details,
        correlation_id=correlation_id,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": error_detail.model_dump(exclude_none=True)},
    )


def internal_error(
    message: str = "Internal server error",
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a 500 internal error response.

    Never pass exception text here; it may contain journal content.
    """
    return error_response(
        code=ErrorCode.INTERNAL_ERROR,
        message=message,
        status_code=500,
        correlation_id=correlation_id,
    )


async def journal_error_handler(request: Request, exc: JournalServiceError) -> JSONResponse:
    """Render a JournalServiceError with its own code and status."""
    correlation_id = get_correlation_id(request)
    if exc.status_code >= 500:
        logger.error(f"{exc.code.value} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code.value} on {request.url.path}: {exc.message}")
    return error_response(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        correlation_id=correlation_id,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the traceback, return a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return internal_error(correlation_id=get_correlation_id(request))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the journal error handlers to an application."""
    app.add_exception_handler(JournalServiceError, journal_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
