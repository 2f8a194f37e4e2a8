# =============================================================================
# FILE: infrastructure/repositories/in_memory/audit_repository.py
# =============================================================================
"""
In-Memory append-only audit store for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import List

from ....domain.audit import AuditAction, AuditRecord


class InMemoryAuditRecordRepository:
    """
    In-memory implementation of AuditRecordRepository.

    Records are kept in insertion order; there is no way to edit or remove
    one through this class.
    """

    def __init__(self) -> None:
        self._records: List[AuditRecord] = []

    @property
    def records(self) -> tuple[AuditRecord, ...]:
        """Snapshot in insertion order (oldest first)."""
        return tuple(self._records)

    async def append(self, record: AuditRecord) -> AuditRecord:
        stored = replace(record, created_at=datetime.now(timezone.utc))
        self._records.append(stored)
        return stored

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
        if limit <= 0:
            return []
        offset = max(offset, 0)

        results = list(reversed(self._records))
        if action is not None:
            results = [r for r in results if r.action == action]
        if user_id is not None:
            results = [r for r in results if r.user_id == user_id]
        if entity_type is not None:
            results = [r for r in results if r.entity_type == entity_type]
        if entity_id is not None:
            results = [r for r in results if r.entity_id == entity_id]
        if start_at is not None:
            results = [r for r in results if r.created_at and r.created_at >= start_at]
        if end_at is not None:
            results = [r for r in results if r.created_at and r.created_at <= end_at]

        return results[offset : offset + limit]
