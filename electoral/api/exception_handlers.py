"""
===============================================================================
CRC CARD - electoral/api/exception_handlers.py (centralized exception handling)
===============================================================================

Responsibilities:
  - Translate core exceptions into RFC7807 responses.
  - Log errors with request_id + error_id for correlation.
  - Keep internal details out of unhandled-error responses.

Collaborators:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: ElectoralError and subclasses
  - interfaces/api/http/error_mapping.to_http_error
  - crosscutting.config.get_settings (level of detail)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import DatabaseError, ElectoralError
from ..crosscutting.logger import logger
from ..interfaces.api.http.error_mapping import to_http_error


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def electoral_error_handler(
    request: Request, exc: ElectoralError
) -> JSONResponse:
    """Domain and authorization errors: expected outcomes, logged at info."""
    logger.info(
        "Request rejected",
        extra={
            "code": exc.error_code,
            "error_id": exc.error_id,
            "request_id": _request_id_from(request),
        },
    )
    return await app_exception_handler(request, to_http_error(exc))


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    request_id = _request_id_from(request)

    logger.error(
        "Store unavailable",
        extra={
            "code": ErrorCode.DATABASE_ERROR.value,
            "error_id": exc.error_id,
            "message": exc.message,
            "request_id": request_id,
        },
    )

    app_exc = to_http_error(exc)
    app_exc.errors = [{"error_id": exc.error_id}]
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Fallback for untyped exceptions.

    - Full log with stack trace.
    - Generic response in production.
    """
    request_id = _request_id_from(request)
    settings = get_settings()

    logger.error(
        "Unhandled exception",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if not settings.is_production() else "An unexpected error occurred"

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Register handlers on the FastAPI app.

    AppHTTPException must be registered to keep RFC7807; Exception goes last
    as the fallback.
    """
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(ElectoralError, electoral_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
