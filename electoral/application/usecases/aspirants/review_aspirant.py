"""
USE CASE: Begin Review

Moves a freshly submitted application under review (submitted -> under_review).

Errors:
    - NotFoundError
    - InvalidStateError: not in submitted
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import InvalidStateError
from ....domain.entities import Aspirant, AspirantUpdate
from ....domain.lifecycle import AspirantStatus, ensure_transition
from ....domain.repositories import AspirantRepository
from .aspirant_access import commit_transition, load_aspirant


class ReviewAspirantUseCase:
    def __init__(self, aspirant_repository: AspirantRepository) -> None:
        self._aspirants = aspirant_repository

    async def execute(self, aspirant_id: UUID, notes: str | None = None) -> Aspirant:
        aspirant = await load_aspirant(self._aspirants, aspirant_id)
        ensure_transition(aspirant.status, AspirantStatus.UNDER_REVIEW)
        if aspirant.status is not AspirantStatus.SUBMITTED:
            raise InvalidStateError(
                aspirant.status.value,
                AspirantStatus.UNDER_REVIEW.value,
                "Aspirant is already under review.",
            )

        return await commit_transition(
            self._aspirants,
            aspirant,
            AspirantUpdate(status=AspirantStatus.UNDER_REVIEW, admin_notes=notes),
        )
