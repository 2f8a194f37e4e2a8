"""
===============================================================================
CRC CARD - schemas/audit.py
===============================================================================

Module:
    HTTP schemas for the audit trail

Responsibilities:
    - Request DTO for audit ingestion (POST /audit-log).
    - Response DTOs for the admin listing (offset pagination).

Collaborators:
    - domain.audit.AuditRecord

Notes:
    - `action` is a plain string here so that an unknown action gets the
      same problem+json 422 as every other domain validation error.
    - A client-supplied ip_address never overrides the address the server
      observed on the connection.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, IPvAnyAddress


class AuditLogReq(BaseModel):
    action: str = Field(..., min_length=1, max_length=50)
    entity_type: str | None = Field(default=None, max_length=100)
    entity_id: str | None = Field(default=None, max_length=255)
    details: dict[str, Any] = Field(default_factory=dict)
    # Optional echo of the caller; it must match the authenticated identity.
    user_id: str | None = None
    # Only stored when the server cannot see the client address itself.
    ip_address: IPvAnyAddress | None = None


class AuditLogAcceptedRes(BaseModel):
    accepted: bool = True


class AuditRecordRes(BaseModel):
    id: UUID
    user_id: str
    action: str
    entity_type: str | None = None
    entity_id: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    ip_address: str | None = None
    created_at: datetime | None = None


class AuditRecordsRes(BaseModel):
    records: list[AuditRecordRes]
    next_offset: int | None = None
