"""
Name:
    Eligibility Router

Responsibilities:
    - Stateless CGPA check used by the application form before submission.
"""

from __future__ import annotations

from fastapi import APIRouter

from .....domain.eligibility import meets_requirement, standing_shortfall
from ..schemas.eligibility import EligibilityCheckReq, EligibilityCheckRes

router = APIRouter(tags=["eligibility"])


@router.post("/eligibility/check", response_model=EligibilityCheckRes)
async def check_eligibility(req: EligibilityCheckReq):
    # Out-of-range declared standing raises InputValidationError (422).
    result = meets_requirement(req.declared_standing, req.minimum_standing)
    return EligibilityCheckRes(
        result=result,
        shortfall=standing_shortfall(req.declared_standing, req.minimum_standing),
    )
