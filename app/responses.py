"""
BornToMe API Response Utilities
Error taxonomy and the JSON error envelope
"""
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Dict, List, Optional
from datetime import datetime, timezone

from .logging_config import http_logger

FieldErrors = Dict[str, List[str]]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================
# ERROR TYPES
# ============================================================

class ApiException(HTTPException):
    """Custom API exception with error codes"""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str = None,
        errors: Optional[FieldErrors] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = error_code or f"ERR_{status_code}"
        self.errors = errors
        super().__init__(status_code=status_code, detail=message, headers=headers)


class ValidationError(ApiException):
    """Malformed, missing or out-of-range input."""

    def __init__(self, errors: FieldErrors, message: str = "The given data was invalid."):
        super().__init__(422, message, "VALIDATION_ERROR", errors)


class ConflictError(ApiException):
    """Unique constraint violation, reported like a validation failure."""

    def __init__(self, field: str, message: str):
        super().__init__(422, message, "CONFLICT", {field: [message]})


class AuthenticationError(ApiException):
    """Login failed. The message never says which credential was wrong."""

    def __init__(self, message: str = "These credentials do not match our records."):
        super().__init__(422, message, "INVALID_CREDENTIALS", {"email": [message]})


class UnauthenticatedError(ApiException):
    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(401, message, "UNAUTHENTICATED", headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(ApiException):
    def __init__(self, message: str = "This action is unauthorized."):
        super().__init__(403, message, "FORBIDDEN")


class NotFoundError(ApiException):
    def __init__(self, resource: str = "Resource", id=None):
        message = f"{resource} not found" if id is None else f"{resource} '{id}' not found"
        super().__init__(404, message, "NOT_FOUND")


# ============================================================
# RESPONSES
# ============================================================

def error_response(
    status_code: int,
    message: str,
    error_code: str,
    errors: Optional[FieldErrors] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content = {
        "ok": False,
        "error": message,
        "error_code": error_code,
        "timestamp": _timestamp(),
    }
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def message(text: str) -> Dict:
    """Plain acknowledgement body, e.g. for logout."""
    return {"message": text}


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for API errors"""

    if isinstance(exc, ApiException):
        http_logger.warning(
            f"API Error: {exc.detail}",
            status_code=exc.status_code,
            error_code=exc.error_code,
            path=request.url.path,
        )
        return error_response(exc.status_code, exc.detail, exc.error_code, exc.errors, exc.headers)

    if isinstance(exc, StarletteHTTPException):
        http_logger.warning(
            f"HTTP Error: {exc.detail}",
            status_code=exc.status_code,
            path=request.url.path,
        )
        return error_response(
            exc.status_code,
            str(exc.detail),
            f"HTTP_{exc.status_code}",
            headers=getattr(exc, "headers", None),
        )

    http_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    return error_response(500, "An unexpected error occurred", "INTERNAL_ERROR")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI's own body/path validation failures with the field map shape."""
    from .validation import format_errors

    errors = format_errors(exc.errors())
    http_logger.warning(
        "Request validation failed",
        status_code=422,
        path=request.url.path,
        fields=sorted(errors),
    )
    return error_response(422, "The given data was invalid.", "VALIDATION_ERROR", errors)
