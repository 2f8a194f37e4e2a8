"""
===============================================================================
USE CASE: Schedule Screening
===============================================================================

Business Goal:
    Book the screening interview of an aspirant. Scheduling moves a
    submitted application under review; rescheduling keeps it there.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ScheduleScreeningUseCase

Responsibilities:
    - Accept submitted / under_review aspirants only.
    - Store the slot as an aware UTC datetime.

Collaborators:
    - AspirantRepository
    - domain.lifecycle.ensure_transition

Errors:
    - NotFoundError / InvalidStateError
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from ....domain.entities import Aspirant, AspirantUpdate
from ....domain.lifecycle import AspirantStatus, ensure_transition
from ....domain.repositories import AspirantRepository
from .aspirant_access import commit_transition, load_aspirant


def _as_utc(slot: datetime) -> datetime:
    # Naive datetimes are taken as UTC.
    if slot.tzinfo is None:
        return slot.replace(tzinfo=timezone.utc)
    return slot.astimezone(timezone.utc)


class ScheduleScreeningUseCase:
    def __init__(self, aspirant_repository: AspirantRepository) -> None:
        self._aspirants = aspirant_repository

    async def execute(
        self, aspirant_id: UUID, slot: datetime, notes: str | None = None
    ) -> Aspirant:
        aspirant = await load_aspirant(self._aspirants, aspirant_id)
        ensure_transition(aspirant.status, AspirantStatus.UNDER_REVIEW)

        return await commit_transition(
            self._aspirants,
            aspirant,
            AspirantUpdate(
                status=AspirantStatus.UNDER_REVIEW,
                screening_slot=_as_utc(slot),
                admin_notes=notes,
            ),
        )
