"""HTTP schemas for the CGPA eligibility check."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .....domain.eligibility import Eligibility


class EligibilityCheckReq(BaseModel):
    declared_standing: float = Field(..., description="Declared CGPA (2.00 - 5.00)")
    minimum_standing: float | None = Field(
        default=None,
        ge=0,
        le=5,
        description="Position minimum CGPA; 0 or absent means no requirement",
    )


class EligibilityCheckRes(BaseModel):
    result: Eligibility
    shortfall: float = 0.0
