"""
===============================================================================
CRC CARD - domain/entities.py
===============================================================================

Module:
    Domain entities (Department, Aspirant, PositionRequirement, Candidate)

Responsibilities:
    - Define the core records of the election workflow (no infrastructure).
    - Keep simple invariants close to the data (closed department list,
      matriculation number format).
    - Provide clear types for use cases and repositories.

Collaborators:
    - domain.lifecycle: AspirantStatus and allowed transitions.
    - domain.repositories: persist/retrieve these entities.
    - application/usecases: build AspirantUpdate values for transitions.

Principles:
    - No DB/FastAPI dependencies.
    - Frozen records: a transition produces a new Aspirant, never mutates one.
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from ..crosscutting.exceptions import InputValidationError
from .lifecycle import AspirantStatus

_MATRIC_PATTERN = re.compile(r"^\d{2}/\d{2}[A-Za-z]{3}\d{3}$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Department
# ---------------------------------------------------------------------------


class Department(str, Enum):
    """Closed list of College of Health Sciences departments."""

    NURSING_SCIENCES = "Nursing Sciences"
    MEDICAL_LABORATORY_SCIENCES = "Medical Laboratory Sciences"
    COMMUNITY_MEDICINE = "Community Medicine and Public Health"
    MEDICINE_AND_SURGERY = "Medicine and Surgery"
    HUMAN_ANATOMY = "Human Anatomy"
    HUMAN_PHYSIOLOGY = "Human Physiology"
    MEDICAL_BIOCHEMISTRY = "Medical Biochemistry"

    @property
    def code(self) -> str:
        return _DEPARTMENT_CODES[self]

    @classmethod
    def parse(cls, value: str) -> "Department":
        """
        Accept a department label or its code (case-insensitive).

        Raises:
            InputValidationError: the value is not one of the seven departments.
        """
        raw = (value or "").strip()
        for department in cls:
            if raw == department.value or raw.upper() == department.code:
                return department
        lowered = raw.lower()
        for department in cls:
            if lowered == department.value.lower():
                return department
        raise InputValidationError(
            f"'{raw}' is not a recognised department.", field="department"
        )


_DEPARTMENT_CODES: dict[Department, str] = {
    Department.NURSING_SCIENCES: "NSC",
    Department.MEDICAL_LABORATORY_SCIENCES: "MLS",
    Department.COMMUNITY_MEDICINE: "PUH",
    Department.MEDICINE_AND_SURGERY: "MED",
    Department.HUMAN_ANATOMY: "ANA",
    Department.HUMAN_PHYSIOLOGY: "PHS",
    Department.MEDICAL_BIOCHEMISTRY: "BCH",
}


def validate_matric(value: str) -> str:
    """Normalize a matriculation number (e.g. 19/08nur012 -> 19/08NUR012)."""
    candidate = (value or "").strip().upper()
    if not _MATRIC_PATTERN.match(candidate):
        raise InputValidationError(
            "Matriculation number must look like 19/08NUR012.", field="matric"
        )
    return candidate


# ---------------------------------------------------------------------------
# Screening
# ---------------------------------------------------------------------------


class ScreeningOutcome(str, Enum):
    PASSED = "passed"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Aspirant
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Aspirant:
    """
    Declared candidacy before public visibility.

    Owned by the election administration process; only lifecycle use cases
    change `status`.
    """

    id: UUID
    full_name: str
    matric: str
    department: Department
    position_id: UUID
    cgpa: float
    status: AspirantStatus = AspirantStatus.SUBMITTED
    user_id: str | None = None
    is_public: bool = False
    payment_verified: bool = False
    screening_slot: datetime | None = None
    screening_result: ScreeningOutcome | None = None
    disqualification_reason: str | None = None
    admin_notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


@dataclass(frozen=True, slots=True)
class AspirantUpdate:
    """
    Field changes applied together with a status compare-and-set.

    Only non-None fields are written; `status` is always written.
    """

    status: AspirantStatus
    is_public: bool | None = None
    payment_verified: bool | None = None
    screening_slot: datetime | None = None
    screening_result: ScreeningOutcome | None = None
    disqualification_reason: str | None = None
    admin_notes: str | None = None

    def changes(self) -> dict[str, object]:
        """Column -> value for every field that must be written."""
        values: dict[str, object] = {"status": self.status}
        for name in (
            "is_public",
            "payment_verified",
            "screening_slot",
            "screening_result",
            "disqualification_reason",
            "admin_notes",
        ):
            value = getattr(self, name)
            if value is not None:
                values[name] = value
        return values


# ---------------------------------------------------------------------------
# Positions / candidates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PositionRequirement:
    """Read-only reference data: minimum CGPA for a position (0 = none)."""

    position_id: UUID
    position_name: str
    min_cgpa: float = 0.0


@dataclass(frozen=True, slots=True)
class Candidate:
    """Publicly visible candidate, created by the promotion write."""

    id: UUID
    aspirant_id: UUID
    name: str
    matric: str
    department: Department
    position_id: UUID
    created_at: datetime | None = None

    @classmethod
    def from_aspirant(cls, candidate_id: UUID, aspirant: Aspirant) -> "Candidate":
        return cls(
            id=candidate_id,
            aspirant_id=aspirant.id,
            name=aspirant.full_name,
            matric=aspirant.matric,
            department=aspirant.department,
            position_id=aspirant.position_id,
            created_at=_utcnow(),
        )
