"""
===============================================================================
USE CASE: Disqualify Aspirant
===============================================================================

Business Goal:
    End a candidacy permanently, keeping the reason on record.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    DisqualifyAspirantUseCase

Responsibilities:
    - Require a non-blank reason.
    - Refuse when the aspirant is already terminal.
    - Write disqualified + reason atomically.

Collaborators:
    - AspirantRepository
    - domain.lifecycle.ensure_transition

Errors:
    - InputValidationError: blank reason
    - NotFoundError / InvalidStateError
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import InputValidationError
from ....domain.entities import Aspirant, AspirantUpdate
from ....domain.lifecycle import AspirantStatus, ensure_transition
from ....domain.repositories import AspirantRepository
from .aspirant_access import commit_transition, load_aspirant


class DisqualifyAspirantUseCase:
    def __init__(self, aspirant_repository: AspirantRepository) -> None:
        self._aspirants = aspirant_repository

    async def execute(self, aspirant_id: UUID, reason: str) -> Aspirant:
        normalized_reason = (reason or "").strip()
        if not normalized_reason:
            raise InputValidationError(
                "A reason is required to disqualify an aspirant.", field="reason"
            )

        aspirant = await load_aspirant(self._aspirants, aspirant_id)
        ensure_transition(aspirant.status, AspirantStatus.DISQUALIFIED)

        return await commit_transition(
            self._aspirants,
            aspirant,
            AspirantUpdate(
                status=AspirantStatus.DISQUALIFIED,
                disqualification_reason=normalized_reason,
            ),
        )
