"""
===============================================================================
CRC CARD - domain/audit.py
===============================================================================

Module:
    Audit models (domain)

Responsibilities:
    - Define the closed set of audit action kinds (AuditAction).
    - Define the append-only audit record (AuditRecord) and its wire shape.

Collaborators:
    - domain.repositories.AuditRecordRepository: appends and lists records.
    - electoral/audit.py: builds records for the acting identity.
    - infra repos: map to/from the audit_logs table.

Notes:
    - Records are never edited or deleted once written.
    - A record without an actor cannot be constructed.
    - New action kinds are added here and nowhere else.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


class AuditAction(str, Enum):
    """Closed set of privileged actions that produce audit records."""

    ADMIN_LOGIN = "admin_login"
    ADMIN_LOGOUT = "admin_logout"
    STUDENT_UPLOAD = "student_upload"
    STUDENT_ADD = "student_add"
    STUDENT_DELETE = "student_delete"
    ASPIRANT_REVIEW = "aspirant_review"
    PAYMENT_VERIFY = "payment_verify"
    SCREENING_SCHEDULE = "screening_schedule"
    SCREENING_COMPLETE = "screening_complete"
    PROMOTE_CANDIDATE = "promote_candidate"
    DISQUALIFY_ASPIRANT = "disqualify_aspirant"
    CANDIDATE_ADD = "candidate_add"
    CANDIDATE_EDIT = "candidate_edit"
    CANDIDATE_DELETE = "candidate_delete"
    POSITION_CREATE = "position_create"
    POSITION_UPDATE = "position_update"
    POSITION_DELETE = "position_delete"
    POSITION_TOGGLE = "position_toggle"
    TIMELINE_CREATE = "timeline_create"
    TIMELINE_UPDATE = "timeline_update"
    TIMELINE_TOGGLE = "timeline_toggle"
    TIMELINE_DELETE = "timeline_delete"
    VOTING_START = "voting_start"
    VOTING_PAUSE = "voting_pause"
    VOTING_RESUME = "voting_resume"
    RESULTS_PUBLISH = "results_publish"
    VOTER_REGISTER = "voter_register"
    VOTER_VOTE_CAST = "voter_vote_cast"
    RESOURCE_ADD = "resource_add"
    RESOURCE_UPDATE = "resource_update"
    RESOURCE_DELETE = "resource_delete"
    EVENT_ADD = "event_add"
    EVENT_UPDATE = "event_update"
    EVENT_DELETE = "event_delete"
    CONTENT_ADD = "content_add"
    CONTENT_UPDATE = "content_update"
    CONTENT_DELETE = "content_delete"


@dataclass(frozen=True, slots=True)
class AuditRecord:
    """One privileged action and the authenticated actor that performed it."""

    id: UUID
    user_id: str
    action: AuditAction
    entity_type: str | None = None
    entity_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    ip_address: str | None = None
    # Assigned by the store on insert.
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not (self.user_id or "").strip():
            raise ValueError("AuditRecord requires a non-empty actor (user_id)")
        if not isinstance(self.action, AuditAction):
            raise TypeError(f"action must be an AuditAction, got {self.action!r}")

    def to_wire(self) -> dict[str, Any]:
        """Persisted/returned shape of one record."""
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "action": self.action.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "details": dict(self.details),
            "ip_address": self.ip_address,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
