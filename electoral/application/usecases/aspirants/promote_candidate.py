"""
===============================================================================
USE CASE: Promote Candidate
===============================================================================

Business Goal:
    Turn an aspirant into a publicly visible candidate, one way and for good,
    once the CGPA requirement of the target position is satisfied.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    PromoteCandidateUseCase

Responsibilities:
    - Check preconditions in order: exists, not terminal, eligible.
    - Write promoted + is_public (and the candidate row) atomically.

Collaborators:
    - AspirantRepository: get_aspirant / apply_transition
    - PositionRepository: get_requirement
    - domain.eligibility.meets_requirement
    - domain.lifecycle.ensure_transition

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    - aspirant_id: UUID

Outputs:
    - Aspirant (status=promoted, is_public=True)

Errors:
    - NotFoundError: aspirant or position does not exist
    - InvalidStateError: aspirant already promoted/disqualified (checked
      before eligibility), or changed concurrently
    - IneligibleError: CGPA below the position minimum (no override)
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.exceptions import IneligibleError, NotFoundError
from ....domain.eligibility import meets_requirement
from ....domain.entities import Aspirant, AspirantUpdate
from ....domain.lifecycle import AspirantStatus, ensure_transition
from ....domain.repositories import AspirantRepository, PositionRepository
from .aspirant_access import commit_transition, load_aspirant

_RESOURCE_POSITION: Final[str] = "Position"


class PromoteCandidateUseCase:
    def __init__(
        self,
        aspirant_repository: AspirantRepository,
        position_repository: PositionRepository,
    ) -> None:
        self._aspirants = aspirant_repository
        self._positions = position_repository

    async def execute(self, aspirant_id: UUID) -> Aspirant:
        aspirant = await load_aspirant(self._aspirants, aspirant_id)
        ensure_transition(aspirant.status, AspirantStatus.PROMOTED)

        requirement = await self._positions.get_requirement(aspirant.position_id)
        if requirement is None:
            raise NotFoundError(_RESOURCE_POSITION, aspirant.position_id)

        eligibility = meets_requirement(aspirant.cgpa, requirement.min_cgpa)
        if not eligibility.permits_promotion:
            raise IneligibleError(aspirant.cgpa, requirement.min_cgpa)

        return await commit_transition(
            self._aspirants,
            aspirant,
            AspirantUpdate(status=AspirantStatus.PROMOTED, is_public=True),
        )
