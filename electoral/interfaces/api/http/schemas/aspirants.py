"""
===============================================================================
CRC CARD - schemas/aspirants.py
===============================================================================

Module:
    HTTP schemas for the aspirant lifecycle

Responsibilities:
    - Request DTOs for submission, review, payment, screening,
      disqualification and promotion.
    - Response DTOs for an aspirant and for the promotion summary.

Collaborators:
    - domain.entities (Department, ScreeningOutcome)
    - domain.lifecycle.AspirantStatus
    - domain.eligibility.Eligibility
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from .....domain.eligibility import Eligibility
from .....domain.entities import ScreeningOutcome
from .....domain.lifecycle import AspirantStatus

_MAX_NOTES_CHARS = 2000


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class SubmitApplicationReq(BaseModel):
    full_name: str = Field(..., max_length=255)
    matric: str = Field(..., max_length=20, description="e.g. 19/08NUR012")
    department: str = Field(
        ..., max_length=100, description="Department label or code (e.g. NSC)"
    )
    position_id: UUID
    cgpa: float = Field(..., description="Declared CGPA on a 5.00 scale")


class ReviewAspirantReq(BaseModel):
    notes: str | None = Field(default=None, max_length=_MAX_NOTES_CHARS)


class VerifyPaymentReq(BaseModel):
    verified: bool = Field(
        default=True, description="False withdraws an earlier verification"
    )


class ScheduleScreeningReq(BaseModel):
    slot: datetime = Field(..., description="Screening date and time (ISO 8601)")
    notes: str | None = Field(default=None, max_length=_MAX_NOTES_CHARS)


class CompleteScreeningReq(BaseModel):
    outcome: ScreeningOutcome
    notes: str | None = Field(default=None, max_length=_MAX_NOTES_CHARS)


class DisqualifyAspirantReq(BaseModel):
    reason: str = Field(..., max_length=_MAX_NOTES_CHARS)


class PromoteAspirantReq(BaseModel):
    confirmation_token: str = Field(
        ...,
        min_length=1,
        description="Token returned by GET /aspirants/{id}/promotion-summary",
    )


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class AspirantRes(BaseModel):
    id: UUID
    full_name: str
    matric: str
    department: str
    department_code: str
    position_id: UUID
    cgpa: float
    status: AspirantStatus
    is_public: bool
    payment_verified: bool
    screening_slot: datetime | None = None
    screening_result: ScreeningOutcome | None = None
    disqualification_reason: str | None = None
    admin_notes: str | None = None
    updated_at: datetime | None = None


class PromotionSummaryRes(BaseModel):
    """What the administrator confirms before a promotion."""

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
