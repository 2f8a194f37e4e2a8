"""
USE CASE: Verify Payment

Sets (or clears) the payment-verified flag of a non-terminal aspirant.
The lifecycle status does not change.
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import InvalidStateError
from ....domain.entities import Aspirant, AspirantUpdate
from ....domain.repositories import AspirantRepository
from .aspirant_access import commit_transition, load_aspirant


class VerifyPaymentUseCase:
    def __init__(self, aspirant_repository: AspirantRepository) -> None:
        self._aspirants = aspirant_repository

    async def execute(self, aspirant_id: UUID, verified: bool = True) -> Aspirant:
        aspirant = await load_aspirant(self._aspirants, aspirant_id)
        if aspirant.is_terminal:
            raise InvalidStateError(
                aspirant.status.value,
                aspirant.status.value,
                f"Aspirant is already {aspirant.status.value}; "
                "payment can no longer be changed.",
            )

        return await commit_transition(
            self._aspirants,
            aspirant,
            AspirantUpdate(status=aspirant.status, payment_verified=bool(verified)),
        )
