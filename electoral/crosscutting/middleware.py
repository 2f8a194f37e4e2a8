"""
===============================================================================
MODULE: HTTP middleware (request context)
===============================================================================

Goal
----
RequestContextMiddleware:
   - Generate/propagate request_id
   - Set contextvars (method/path)
   - Log and record metrics per request

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  RequestContextMiddleware

Responsibilities:
  - Observability (request_id + logs + metrics)
  - Guarantee clear_context() so the actor of one request never leaks
    into the next

Collaborators:
  - electoral/context.py
  - crosscutting/metrics.py
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger
from .metrics import record_request_metrics


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      RequestContextMiddleware

    Responsibilities:
      - Accept or generate X-Request-Id and echo it on the response
      - Set contextvars for log correlation
      - Emit one completion log line and HTTP metrics per request

    Collaborators:
      - crosscutting.metrics.record_request_metrics
      - crosscutting.logger
    ----------------------------------------------------------------------------
    """

    _QUIET_PATHS = {"/healthz", "/metrics"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = (
            incoming if self._is_valid_request_id(incoming) else str(uuid.uuid4())
        )

        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        except Exception:
            latency = time.perf_counter() - start
            logger.exception(
                "request failed",
                extra={"status_code": 500, "latency_ms": round(latency * 1000, 2)},
            )
            raise
        finally:
            latency = time.perf_counter() - start
            record_request_metrics(
                endpoint=request.url.path,
                method=request.method,
                status_code=status_code,
                latency_seconds=latency,
            )

            if request.url.path not in self._QUIET_PATHS:
                logger.info(
                    "request completed",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                    },
                )

            clear_context()

    @staticmethod
    def _is_valid_request_id(value: str) -> bool:
        return bool(value) and len(value) <= 128
