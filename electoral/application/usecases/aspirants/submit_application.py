"""
===============================================================================
USE CASE: Submit Application
===============================================================================

Business Goal:
    Let a signed-in student file an aspirant application for a position.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    SubmitApplicationUseCase

Responsibilities:
    - Validate name, matriculation number, department and declared CGPA
      before anything is stored.
    - Refuse positions that do not exist.
    - Refuse a CGPA below the position minimum.
    - Store the application as submitted, owned by the caller.

Collaborators:
    - AspirantRepository
    - PositionRepository
    - domain.entities (Department, validate_matric)
    - domain.eligibility

Errors:
    - InputValidationError: blank name, bad matric, unknown department,
      CGPA outside [2.00, 5.00]
    - NotFoundError: unknown position
    - IneligibleError: CGPA below the position minimum
===============================================================================
"""

from __future__ import annotations

from uuid import UUID, uuid4

from ....crosscutting.exceptions import (
    IneligibleError,
    InputValidationError,
    NotFoundError,
)
from ....domain.eligibility import (
    Eligibility,
    meets_requirement,
    validate_declared_standing,
)
from ....domain.entities import Aspirant, Department, validate_matric
from ....domain.lifecycle import AspirantStatus
from ....domain.repositories import AspirantRepository, PositionRepository

_MAX_NAME_CHARS = 255


class SubmitApplicationUseCase:
    def __init__(
        self,
        aspirant_repository: AspirantRepository,
        position_repository: PositionRepository,
    ) -> None:
        self._aspirants = aspirant_repository
        self._positions = position_repository

    async def execute(
        self,
        *,
        user_id: str,
        full_name: str,
        matric: str,
        department: str,
        position_id: UUID,
        cgpa: float,
    ) -> Aspirant:
        name = (full_name or "").strip()
        if not name:
            raise InputValidationError("Full name is required.", field="full_name")
        if len(name) > _MAX_NAME_CHARS:
            raise InputValidationError(
                f"Full name must be at most {_MAX_NAME_CHARS} characters.",
                field="full_name",
            )

        normalized_matric = validate_matric(matric)
        parsed_department = Department.parse(department)
        standing = validate_declared_standing(cgpa)

        requirement = await self._positions.get_requirement(position_id)
        if requirement is None:
            raise NotFoundError("Position", position_id)
        if meets_requirement(standing, requirement.min_cgpa) is Eligibility.FAILS:
            raise IneligibleError(standing, requirement.min_cgpa)

        return await self._aspirants.submit(
            Aspirant(
                id=uuid4(),
                full_name=name,
                matric=normalized_matric,
                department=parsed_department,
                position_id=position_id,
                cgpa=standing,
                status=AspirantStatus.SUBMITTED,
                user_id=user_id,
            )
        )
