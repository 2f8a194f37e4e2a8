"""HTTP schemas for the public candidate list."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class CandidateRes(BaseModel):
    id: UUID
    aspirant_id: UUID
    name: str
    matric: str
    department: str
    department_code: str
    position_id: UUID
    created_at: datetime | None = None


class CandidatesRes(BaseModel):
    candidates: list[CandidateRes]
