"""
Structured exceptions and error responses for habitgrid.

Provides consistent error handling across the API with:
- Custom exception classes
- Structured error response format
- FastAPI exception handlers
"""

from typing import Any, Dict, Optional, List
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from habitgrid.config import get_settings
from habitgrid.logging_config import get_logger

logger = get_logger("errors")


# =============================================================================
# Error Response Schema
# =============================================================================

class ErrorDetail(BaseModel):
    """Detail of a single error."""
    loc: Optional[List[str]] = None  # Location of error (e.g., ["body", "name"])
    msg: str
    type: str


class ErrorResponse(BaseModel):
    """Structured error response format."""
    error: str  # Error code (e.g., "not_found", "validation_error")
    message: str  # Human-readable message
    details: Optional[List[ErrorDetail]] = None


# =============================================================================
# Custom Exceptions
# =============================================================================

class HabitgridException(Exception):
    """Base exception for all habitgrid errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "internal_error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(HabitgridException):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            message=f"{resource} with ID {resource_id} not found",
            error_code="not_found",
            status_code=status.HTTP_404_NOT_FOUND,
        )
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(HabitgridException):
    """Missing or malformed request data."""

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(
            message=message,
            error_code="validation_error",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class StorageError(HabitgridException):
    """A database operation failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(
            message=message,
            error_code="storage_error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        self.cause = cause


# =============================================================================
# Exception Handlers
# =============================================================================

def _error_content(exc: HabitgridException, message: Optional[str] = None) -> dict:
    return {
        "error": exc.error_code,
        "message": message or exc.message,
        "details": exc.details,
    }


async def habitgrid_exception_handler(request: Request, exc: HabitgridException) -> JSONResponse:
    """Handle HabitgridException and return structured response."""
    return JSONResponse(status_code=exc.status_code, content=_error_content(exc))


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Handle StorageError, hiding the cause outside development."""
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc.message} ({exc.cause})")

    if get_settings().is_development:
        message = f"{exc.message}: {exc.cause}" if exc.cause else exc.message
    else:
        message = "Internal Server Error"
    return JSONResponse(status_code=exc.status_code, content=_error_content(exc, message))


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Translate uncaught database errors into a StorageError response."""
    logger.exception(f"Unhandled database error: {exc}")
    return await storage_error_handler(request, StorageError("Database operation failed", exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render pydantic request validation failures as 400 validation errors."""
    details = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", "value_error"),
        }
        for error in exc.errors()
    ]
    fields = ", ".join(".".join(d["loc"][1:]) or d["loc"][0] for d in details if d["loc"])
    message = f"Invalid request: {fields}" if fields else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "validation_error", "message": message, "details": details},
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(HabitgridException, habitgrid_exception_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


# Documented on every router so clients see the structured error body
ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}
