"""
===============================================================================
CRC CARD - application/promotion.py
===============================================================================

Class:
    PromotionGate

Responsibilities:
    - Present the promotion summary (name, matric, department, position)
      that an administrator must confirm.
    - Derive a confirmation token from exactly what was shown.
    - Only call the controller when the submitted token matches the
      aspirant as it is now.

Collaborators:
    - application.lifecycle_controller.CandidateLifecycleController
    - domain.repositories.AspirantRepository / PositionRepository
    - domain.eligibility (shown alongside the summary)

Notes:
    - This is a confirmation step for humans. Authorization is still
      enforced by the controller's guard.
    - Any change to the aspirant after the summary was produced (status,
      details) invalidates the token.
===============================================================================
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import Final
from uuid import UUID

from ..crosscutting.exceptions import ConfirmationRequiredError, NotFoundError
from ..domain.eligibility import Eligibility, meets_requirement
from ..domain.entities import Aspirant
from ..domain.lifecycle import AspirantStatus
from ..domain.repositories import AspirantRepository, PositionRepository
from .lifecycle_controller import CandidateLifecycleController
from .usecases.aspirants.aspirant_access import load_aspirant

_MSG_CONFIRM_AGAIN: Final[str] = (
    "The promotion details changed or were not confirmed. "
    "Review the summary and confirm again."
)


@dataclass(frozen=True, slots=True)
class PromotionSummary:
    aspirant_id: UUID
    name: str
    matric: str
    department: str
    department_code: str
    position: str
    status: AspirantStatus
    cgpa: float
    min_cgpa: float
    eligibility: Eligibility
    confirmation_token: str


def _confirmation_token(aspirant: Aspirant, position_name: str) -> str:
    fingerprint = "|".join(
        [
            str(aspirant.id),
            aspirant.full_name,
            aspirant.matric,
            aspirant.department.value,
            position_name,
            aspirant.status.value,
            aspirant.updated_at.isoformat() if aspirant.updated_at else "",
        ]
    )
    return hashlib.sha256(fingerprint.encode("utf-8")).hexdigest()


class PromotionGate:
    def __init__(
        self,
        controller: CandidateLifecycleController,
        aspirant_repository: AspirantRepository,
        position_repository: PositionRepository,
    ) -> None:
        self._controller = controller
        self._aspirants = aspirant_repository
        self._positions = position_repository

    async def summarize(self, aspirant_id: UUID) -> PromotionSummary:
        await self._controller.authorize("promotion_summary")
        return await self._build_summary(aspirant_id)

    async def promote(
        self,
        aspirant_id: UUID,
        *,
        confirmation_token: str | None,
        origin_address: str | None = None,
    ) -> Aspirant:
        await self._controller.authorize("promote")

        summary = await self._build_summary(aspirant_id)
        if not confirmation_token or not hmac.compare_digest(
            summary.confirmation_token, confirmation_token
        ):
            raise ConfirmationRequiredError(_MSG_CONFIRM_AGAIN)

        return await self._controller.promote(
            aspirant_id, origin_address=origin_address
        )

    async def _build_summary(self, aspirant_id: UUID) -> PromotionSummary:
        aspirant = await load_aspirant(self._aspirants, aspirant_id)
        requirement = await self._positions.get_requirement(aspirant.position_id)
        if requirement is None:
            raise NotFoundError("Position", aspirant.position_id)

        return PromotionSummary(
            aspirant_id=aspirant.id,
            name=aspirant.full_name,
            matric=aspirant.matric,
            department=aspirant.department.value,
            department_code=aspirant.department.code,
            position=requirement.position_name,
            status=aspirant.status,
            cgpa=aspirant.cgpa,
            min_cgpa=requirement.min_cgpa,
            eligibility=meets_requirement(aspirant.cgpa, requirement.min_cgpa),
            confirmation_token=_confirmation_token(
                aspirant, requirement.position_name
            ),
        )
