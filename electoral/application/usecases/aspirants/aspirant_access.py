"""
===============================================================================
CRC CARD - application/usecases/aspirants/aspirant_access.py
===============================================================================

Responsibilities:
  - Load an aspirant or raise NotFoundError.
  - Commit a transition as a compare-and-set on the status that was read,
    turning a lost race into InvalidStateError.

Collaborators:
  - domain.repositories.AspirantRepository
  - every lifecycle use case in this package
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import UUID

from ....crosscutting.exceptions import InvalidStateError, NotFoundError
from ....domain.entities import Aspirant, AspirantUpdate
from ....domain.repositories import AspirantRepository

_RESOURCE_ASPIRANT: Final[str] = "Aspirant"
_MSG_CONCURRENT_CHANGE: Final[str] = (
    "This aspirant was changed by someone else. Refresh and try again."
)


async def load_aspirant(repository: AspirantRepository, aspirant_id: UUID) -> Aspirant:
    aspirant = await repository.get_aspirant(aspirant_id)
    if aspirant is None:
        raise NotFoundError(_RESOURCE_ASPIRANT, aspirant_id)
    return aspirant


async def commit_transition(
    repository: AspirantRepository, aspirant: Aspirant, update: AspirantUpdate
) -> Aspirant:
    """
    Apply `update` only if the stored status is still `aspirant.status`.

    Nothing is written when the precondition no longer holds.
    """
    updated = await repository.apply_transition(
        aspirant.id, expected_status=aspirant.status, update=update
    )
    if updated is None:
        current = await repository.get_aspirant(aspirant.id)
        raise InvalidStateError(
            current.status.value if current else "missing",
            update.status.value,
            _MSG_CONCURRENT_CHANGE,
        )
    return updated
