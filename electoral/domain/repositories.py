"""
===============================================================================
CRC CARD - domain/repositories.py
===============================================================================

Module:
    Repository ports (Protocols)

Responsibilities:
    - Describe what the core needs from the authenticated data store.
    - Keep use cases independent of PostgreSQL / in-memory implementations.

Collaborators:
    - infrastructure/repositories/postgres: psycopg implementations.
    - infrastructure/repositories/in_memory: dev/test implementations.
    - identity.roles, audit, application/usecases: consumers.

Notes:
    - All methods are coroutines (the store sits behind network I/O).
    - The audit port exposes append and list only; records are never
      updated or deleted.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from .audit import AuditAction, AuditRecord
from .entities import Aspirant, AspirantUpdate, Candidate, PositionRequirement
from .lifecycle import AspirantStatus


class RoleAssignmentRepository(Protocol):
    """R: Read-only lookup of (user_id, role) assignments."""

    async def has_assignment(self, user_id: str, role: str) -> bool:
        """R: True iff exactly that (user_id, role) row exists."""
        ...


class AspirantRepository(Protocol):
    """
    R: Interface for aspirant persistence.

    Implementations must provide:
      - Lookup by id
      - Insertion of a newly submitted application
      - Atomic compare-and-set of the lifecycle status
      - Candidate row creation in the same write as a promotion
    """

    async def get_aspirant(self, aspirant_id: UUID) -> Aspirant | None:
        """R: Fetch an aspirant, None if missing."""
        ...

    async def submit(self, aspirant: Aspirant) -> Aspirant:
        """R: Store a new application and return it as persisted."""
        ...

    async def apply_transition(
        self,
        aspirant_id: UUID,
        *,
        expected_status: AspirantStatus,
        update: AspirantUpdate,
    ) -> Aspirant | None:
        """
        R: Write `update` iff the stored status still equals `expected_status`.

        Returns the updated aspirant, or None when the precondition no longer
        holds (nothing is written in that case).
        """
        ...

    async def list_public_candidates(self) -> list[Candidate]:
        """R: Candidates created by promotions, oldest first."""
        ...


class PositionRepository(Protocol):
    """R: Read-only position requirements."""

    async def get_requirement(self, position_id: UUID) -> PositionRequirement | None:
        ...


class AuditRecordRepository(Protocol):
    """R: Append-only audit store."""

    async def append(self, record: AuditRecord) -> AuditRecord:
        """R: Insert one record; returns it with created_at assigned."""
        ...

    async def list_records(
        self,
        *,
        action: AuditAction | None = None,
        user_id: str | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
        start_at: datetime | None = None,
        end_at: datetime | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditRecord]:
        """R: Records in insertion order, newest first, with optional filters."""
        ...
