"""
===============================================================================
MODULE: Standard error responses (RFC 7807 / Problem Details)
===============================================================================

Goal
----
Every HTTP error has the same shape so that:
- The admin console can branch on "code"
- Operators can correlate by request_id
- A denied request always carries the redirect destination

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  AppHTTPException + handlers

Responsibilities:
  - Define the error code catalogue (ErrorCode)
  - Build the RFC7807 payload (ErrorDetail)
  - Provide factories for frequent errors
  - Provide FastAPI handlers returning application/problem+json

Collaborators:
  - crosscutting/middleware.py (request_id)
  - interfaces/api/http/error_mapping.py (maps domain errors)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INELIGIBLE = "INELIGIBLE"
    INVALID_STATE = "INVALID_STATE"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorDetail(BaseModel):
    """
    RFC 7807 model (Problem Details).

    Extra fields:
    - code: stable error code for clients
    - errors: optional list of details (e.g. [{"field": "cgpa", "msg": "..."}])
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

_OPENAPI_ERROR_CONTENT = {
    PROBLEM_JSON_MEDIA_TYPE: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
}


def _openapi_entry(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    }


OPENAPI_ERROR_RESPONSES = {
    "401": _openapi_entry("Unauthorized"),
    "403": _openapi_entry("Forbidden"),
    "404": _openapi_entry("Not Found"),
    "409": _openapi_entry("Conflict"),
    "422": _openapi_entry("Validation Error"),
    "default": _openapi_entry("Error"),
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      AppHTTPException

    Responsibilities:
      - Attach a stable ErrorCode
      - Carry validation details (errors[])
      - Allow custom headers (Location on redirects, WWW-Authenticate)

    Collaborators:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Error factories
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(422, ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException(
        404, ErrorCode.NOT_FOUND, f"{resource} '{identifier}' not found"
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def unauthorized(
    detail: str = "Authentication required", redirect_to: str | None = None
) -> AppHTTPException:
    errors = [{"redirect_to": redirect_to}] if redirect_to else None
    exc = AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail, errors)
    exc.headers = {"WWW-Authenticate": "Bearer"}
    return exc


def forbidden(
    detail: str = "Access denied", redirect_to: str | None = None
) -> AppHTTPException:
    errors = [{"redirect_to": redirect_to}] if redirect_to else None
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail, errors)


def ineligible(detail: str, shortfall: float) -> AppHTTPException:
    return AppHTTPException(
        422, ErrorCode.INELIGIBLE, detail, [{"shortfall": shortfall}]
    )


def invalid_state(detail: str, current: str) -> AppHTTPException:
    return AppHTTPException(
        409, ErrorCode.INVALID_STATE, detail, [{"current_status": current}]
    )


def confirmation_required(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFIRMATION_REQUIRED, detail)


def internal_error(detail: str = "An unexpected error occurred") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


def database_error(
    detail: str = "The election store is temporarily unavailable",
) -> AppHTTPException:
    return AppHTTPException(503, ErrorCode.DATABASE_ERROR, detail)


# ---------------------------------------------------------------------------
# FastAPI handlers
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Render AppHTTPException as problem+json, appending the request_id."""
    request_id = getattr(getattr(request, "state", None), "request_id", None)

    errors = exc.errors or []
    if request_id:
        errors = [*errors, {"request_id": request_id}]

    error = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.value.replace("_", " ").title(),
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error.model_dump(mode="json", exclude_none=True),
        headers=getattr(exc, "headers", None),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Fallback for unhandled exceptions.
    (Never exposes internal details to the client.)
    """
    request_id = getattr(getattr(request, "state", None), "request_id", None)
    errors = [{"request_id": request_id}] if request_id else None

    error = ErrorDetail(
        type="about:blank/internal_error",
        title="Internal Server Error",
        status=500,
        detail="An unexpected error occurred",
        code=ErrorCode.INTERNAL_ERROR,
        instance=str(request.url),
        errors=errors,
    )
    return JSONResponse(
        status_code=500,
        content=error.model_dump(mode="json", exclude_none=True),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
