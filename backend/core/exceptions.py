"""
Error types raised by the domain services and the handlers that render them.

Every error response has the same body::

    {"detail": "...", "error_code": "...", "path": "/api/v1/..."}

Services raise the ``APIError`` subclasses directly; database constraint
violations that slip past service checks are reported as conflicts.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """Base for errors with a fixed HTTP status and machine-readable code"""

    status_code_default = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"
    default_error_code = "ERROR"

    def __init__(
        self,
        detail: Optional[str] = None,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=self.status_code_default,
            detail=detail or self.default_detail,
            headers=headers,
        )
        self.error_code = error_code or self.default_error_code


class NotFoundError(APIError):
    """Entity missing, or outside the caller's restaurant"""

    status_code_default = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"
    default_error_code = "NOT_FOUND"


class ValidationError(APIError):
    """Business rule rejected the input (insufficient points, stock, capacity)"""

    status_code_default = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation failed"
    default_error_code = "VALIDATION_ERROR"


class AuthenticationError(APIError):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication failed"
    default_error_code = "AUTH_FAILED"


class PermissionDeniedError(APIError):
    """Caller is authenticated but neither owner nor active staff"""

    status_code_default = status.HTTP_403_FORBIDDEN
    default_detail = "Permission denied"
    default_error_code = "PERMISSION_DENIED"


class ConflictError(APIError):
    """Duplicate entity or a status change that is no longer allowed"""

    status_code_default = status.HTTP_409_CONFLICT
    default_detail = "Resource conflict"
    default_error_code = "CONFLICT"


def _error_body(request: Request, detail: Any, error_code: str) -> Dict[str, Any]:
    return {"detail": detail, "error_code": error_code, "path": str(request.url.path)}


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.detail, exc.error_code),
        headers=exc.headers,
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning(f"ValueError at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(request, str(exc), ValidationError.default_error_code),
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"IntegrityError at {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_body(request, "Request violates a database constraint", "CONSTRAINT_VIOLATION"),
    )


def register_exception_handlers(app):
    """Attach the error handlers to the FastAPI app"""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(ValueError, handle_value_error)
