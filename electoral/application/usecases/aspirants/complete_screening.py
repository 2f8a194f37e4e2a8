"""
===============================================================================
USE CASE: Complete Screening
===============================================================================

Business Goal:
    Record the outcome of a screening interview. A pass makes the aspirant
    eligible for promotion (screened); a fail keeps them under review with
    the result on file.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CompleteScreeningUseCase

Responsibilities:
    - Require under_review with a scheduled slot.
    - Map the outcome to the next status.

Collaborators:
    - AspirantRepository
    - domain.lifecycle.ensure_transition

Errors:
    - NotFoundError
    - InvalidStateError: not under review, or no screening scheduled
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.exceptions import InputValidationError, InvalidStateError
from ....domain.entities import Aspirant, AspirantUpdate, ScreeningOutcome
from ....domain.lifecycle import AspirantStatus, ensure_transition
from ....domain.repositories import AspirantRepository
from .aspirant_access import commit_transition, load_aspirant

_MSG_NOT_SCHEDULED: Final[str] = (
    "Schedule a screening before recording its outcome."
)

_NEXT_STATUS: Final[dict[ScreeningOutcome, AspirantStatus]] = {
    ScreeningOutcome.PASSED: AspirantStatus.SCREENED,
    ScreeningOutcome.FAILED: AspirantStatus.UNDER_REVIEW,
}


class CompleteScreeningUseCase:
    def __init__(self, aspirant_repository: AspirantRepository) -> None:
        self._aspirants = aspirant_repository

    async def execute(
        self,
        aspirant_id: UUID,
        outcome: ScreeningOutcome | str,
        notes: str | None = None,
    ) -> Aspirant:
        try:
            outcome = ScreeningOutcome(outcome)
        except ValueError as exc:
            raise InputValidationError(
                "Screening outcome must be 'passed' or 'failed'.", field="outcome"
            ) from exc
        target = _NEXT_STATUS[outcome]

        aspirant = await load_aspirant(self._aspirants, aspirant_id)
        ensure_transition(aspirant.status, target)
        if (
            aspirant.status is not AspirantStatus.UNDER_REVIEW
            or aspirant.screening_slot is None
        ):
            raise InvalidStateError(
                aspirant.status.value, target.value, _MSG_NOT_SCHEDULED
            )

        return await commit_transition(
            self._aspirants,
            aspirant,
            AspirantUpdate(
                status=target,
                screening_result=outcome,
                admin_notes=notes,
            ),
        )
