"""
============================================================
CRC CARD - infrastructure/repositories/postgres/audit_record.py
============================================================
Class: PostgresAuditRecordRepository

Responsibilities:
  - Append audit records to audit_logs (created_at assigned by the DB).
  - List records with optional filters, newest first.

Collaborators:
  - domain.audit.AuditRecord / AuditAction
  - psycopg_pool.AsyncConnectionPool
  - psycopg.types.json.Jsonb
  - crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Append-only: there is no UPDATE/DELETE path here, and the table
    trigger rejects both.
  - Ordering uses the identity column `seq` (insertion order), not
    created_at.
  - Errors propagate as DatabaseError; AuditRecorder contains them.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.audit import AuditAction, AuditRecord

_SELECT_COLUMNS = (
    "id, user_id, action, entity_type, entity_id, details, ip_address, created_at"
)


def _row_to_record(row: tuple) -> AuditRecord:
    return AuditRecord(
        id=row[0],
        user_id=row[1],
        action=AuditAction(row[2]),
        entity_type=row[3],
        entity_id=row[4],
        details=row[5] or {},
        ip_address=row[6],
        created_at=row[7],
    )


class PostgresAuditRecordRepository:
    """PostgreSQL repository for the audit trail (audit_logs)."""

    def __init__(self, pool: AsyncConnectionPool | None = None):
        self._pool = pool

    def _get_pool(self) -> AsyncConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    async def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object],
        error_message: str,
        extra: dict[str, object],
    ) -> list[tuple]:
        try:
            async with self._get_pool().connection() as conn:
                cur = await conn.execute(query, tuple(params))
                return await cur.fetchall()
        except Exception as exc:
            logger.exception(error_message, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{error_message}: {exc}") from exc

    async def append(self, record: AuditRecord) -> AuditRecord:
        try:
            async with self._get_pool().connection() as conn:
                cur = await conn.execute(
                    """
                    INSERT INTO audit_logs
                        (id, user_id, action, entity_type, entity_id, details, ip_address)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING created_at
                    """,
                    (
                        record.id,
                        record.user_id,
                        record.action.value,
                        record.entity_type,
                        record.entity_id,
                        Jsonb(record.details or {}),
                        record.ip_address,
                    ),
                )
                row = await cur.fetchone()
        except Exception as exc:
            logger.exception(
                "PostgresAuditRecordRepository: failed to append audit record",
                extra={
                    "record_id": str(record.id),
                    "action": record.action.value,
                    "error": str(exc),
                },
            )
            raise DatabaseError(f"Failed to append audit record: {exc}") from exc

        return AuditRecord(
            id=record.id,
            user_id=record.user_id,
            action=record.action,
            entity_type=record.entity_type,
            entity_id=record.entity_id,
            details=record.details,
            ip_address=record.ip_address,
            created_at=row[0] if row else None,
        )

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

        conditions: list[str] = []
        params: list[object] = []

        if action is not None:
            conditions.append("action = %s")
            params.append(action.value)
        if user_id:
            conditions.append("user_id = %s")
            params.append(user_id)
        if entity_type:
            conditions.append("entity_type = %s")
            params.append(entity_type)
        if entity_id:
            conditions.append("entity_id = %s")
            params.append(entity_id)
        if start_at is not None:
            conditions.append("created_at >= %s")
            params.append(start_at)
        if end_at is not None:
            conditions.append("created_at <= %s")
            params.append(end_at)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        rows = await self._fetchall(
            query=f"""
                SELECT {_SELECT_COLUMNS}
                FROM audit_logs
                {where_clause}
                ORDER BY seq DESC
                LIMIT %s OFFSET %s
            """,
            params=[*params, limit, offset],
            error_message="PostgresAuditRecordRepository: failed to list audit records",
            extra={
                "action": action.value if action else None,
                "user_id": user_id,
                "entity_type": entity_type,
            },
        )
        return [_row_to_record(row) for row in rows]
