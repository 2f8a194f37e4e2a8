"""
===============================================================================
CRC CARD - interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Re-export one router per feature for the root router.

Notes:
    - No endpoints are defined here.
===============================================================================
"""

from .aspirants import router as aspirants_router
from .audit import router as audit_router
from .candidates import router as candidates_router
from .eligibility import router as eligibility_router

__all__ = [
    "aspirants_router",
    "audit_router",
    "candidates_router",
    "eligibility_router",
]
