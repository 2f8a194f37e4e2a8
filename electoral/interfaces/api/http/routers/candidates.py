"""
===============================================================================
CRC CARD - interfaces/api/http/routers/candidates.py
===============================================================================

Name:
    Candidates Router

Responsibilities:
    - Public list of promoted candidates (no authentication).

Collaborators:
    - domain.repositories.AspirantRepository.list_public_candidates
    - container.get_aspirant_repository
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .....container import get_aspirant_repository
from .....domain.entities import Candidate
from .....domain.repositories import AspirantRepository
from ..schemas.candidates import CandidateRes, CandidatesRes

router = APIRouter(tags=["candidates"])


def _to_candidate_res(candidate: Candidate) -> CandidateRes:
    return CandidateRes(
        id=candidate.id,
        aspirant_id=candidate.aspirant_id,
        name=candidate.name,
        matric=candidate.matric,
        department=candidate.department.value,
        department_code=candidate.department.code,
        position_id=candidate.position_id,
        created_at=candidate.created_at,
    )


@router.get("/candidates", response_model=CandidatesRes)
async def list_candidates(
    aspirants: AspirantRepository = Depends(get_aspirant_repository),
):
    candidates = await aspirants.list_public_candidates()
    return CandidatesRes(candidates=[_to_candidate_res(c) for c in candidates])
