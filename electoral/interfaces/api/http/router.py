"""
===============================================================================
CRC CARD - router.py (Root router / composition)
===============================================================================

Responsibilities:
  - Define the root APIRouter included by FastAPI under /v1.
  - Attach the RFC7807 responses to OpenAPI.
  - Compose the feature routers.

Collaborators:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.*
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers import (
    aspirants_router,
    audit_router,
    candidates_router,
    eligibility_router,
)


def build_router() -> APIRouter:
    """Build the v1 root router (callable from tests without import side effects)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(candidates_router)
    api_router.include_router(eligibility_router)
    api_router.include_router(aspirants_router)
    api_router.include_router(audit_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
