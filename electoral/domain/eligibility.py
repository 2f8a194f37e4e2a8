"""
Name: Eligibility Evaluator

Responsibilities:
  - Validate a declared CGPA at the boundary (closed range [2.00, 5.00])
  - Compare a declared CGPA with a position minimum (three-valued result)
  - Report the shortfall for domain-language messages

Collaborators:
  - application/usecases/aspirants/promote_candidate.py (precondition)
  - interfaces/api/http/routers/eligibility.py (form feedback)

Notes:
  - Pure functions: no I/O, no logging
  - A minimum <= 0 means "no requirement configured" -> NOT_APPLICABLE
  - Out-of-range values are rejected, never clamped
"""

from __future__ import annotations

import math
from enum import Enum

from ..crosscutting.exceptions import InputValidationError

MIN_DECLARED_STANDING = 2.0
MAX_DECLARED_STANDING = 5.0


class Eligibility(str, Enum):
    MEETS = "meets"
    FAILS = "fails"
    NOT_APPLICABLE = "not_applicable"

    @property
    def permits_promotion(self) -> bool:
        return self is not Eligibility.FAILS


def validate_declared_standing(value: float) -> float:
    """
    Accept a CGPA in [2.00, 5.00].

    Raises:
        InputValidationError: non-numeric, NaN or out of range.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputValidationError("CGPA must be a number.", field="cgpa")
    standing = float(value)
    if math.isnan(standing):
        raise InputValidationError("CGPA must be a number.", field="cgpa")
    if not MIN_DECLARED_STANDING <= standing <= MAX_DECLARED_STANDING:
        raise InputValidationError(
            f"CGPA must be between {MIN_DECLARED_STANDING:.2f} and "
            f"{MAX_DECLARED_STANDING:.2f}.",
            field="cgpa",
        )
    return standing


def meets_requirement(declared: float, minimum: float | None) -> Eligibility:
    declared = validate_declared_standing(declared)
    if minimum is None or minimum <= 0:
        return Eligibility.NOT_APPLICABLE
    return Eligibility.MEETS if declared >= minimum else Eligibility.FAILS


def standing_shortfall(declared: float, minimum: float | None) -> float:
    """Points missing to reach the minimum (0.0 when met or not applicable)."""
    if minimum is None or minimum <= 0 or declared >= minimum:
        return 0.0
    return round(minimum - declared, 2)
