"""
============================================================
CRC CARD - infrastructure/repositories/postgres/aspirant.py
============================================================
Classes:
  - PostgresAspirantRepository
  - PostgresPositionRepository

Responsibilities:
  - Map aspirant_applications / candidates / aspirant_positions rows to
    domain entities.
  - Insert newly submitted applications (status submitted).
  - Apply lifecycle transitions as one conditional UPDATE
    (WHERE id = ... AND status = <expected>) and, for promotions, insert
    the candidate row in the same transaction.

Collaborators:
  - psycopg_pool.AsyncConnectionPool
  - domain.entities (Aspirant, AspirantUpdate, Candidate, PositionRequirement)
  - crosscutting.exceptions.DatabaseError
  - crosscutting.logger

Constraints / Notes:
  - Queries are always parameterized. Column names in SET come from the
    fixed _WRITABLE_COLUMNS whitelist, never from input.
  - A transition that matches no row returns None; the use case decides
    what that means.
============================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Final
from uuid import UUID, uuid4

from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import (
    Aspirant,
    AspirantUpdate,
    Candidate,
    Department,
    PositionRequirement,
    ScreeningOutcome,
)
from ....domain.lifecycle import AspirantStatus

_ASPIRANT_COLUMNS: Final[str] = (
    "id, user_id, full_name, matric, department, position_id, cgpa, status, "
    "is_public, payment_verified, screening_slot, screening_result, "
    "disqualification_reason, admin_notes, created_at, updated_at"
)

_CANDIDATE_COLUMNS: Final[str] = (
    "id, aspirant_id, name, matric, department, position_id, created_at"
)

_WRITABLE_COLUMNS: Final[frozenset[str]] = frozenset(
    {
        "status",
        "is_public",
        "payment_verified",
        "screening_slot",
        "screening_result",
        "disqualification_reason",
        "admin_notes",
    }
)


def _db_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _row_to_aspirant(row: tuple) -> Aspirant:
    return Aspirant(
        id=row[0],
        user_id=row[1],
        full_name=row[2],
        matric=row[3],
        department=Department(row[4]),
        position_id=row[5],
        cgpa=float(row[6]),
        status=AspirantStatus(row[7]),
        is_public=bool(row[8]),
        payment_verified=bool(row[9]),
        screening_slot=row[10],
        screening_result=ScreeningOutcome(row[11]) if row[11] else None,
        disqualification_reason=row[12],
        admin_notes=row[13],
        created_at=row[14],
        updated_at=row[15],
    )


def _row_to_candidate(row: tuple) -> Candidate:
    return Candidate(
        id=row[0],
        aspirant_id=row[1],
        name=row[2],
        matric=row[3],
        department=Department(row[4]),
        position_id=row[5],
        created_at=row[6],
    )


class _PoolBacked:
    def __init__(self, pool: AsyncConnectionPool | None = None):
        # Injectable pool: tests pass their own; production uses the global one.
        self._pool = pool

    def _get_pool(self) -> AsyncConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()


class PostgresAspirantRepository(_PoolBacked):
    """PostgreSQL repository for aspirants and the candidates they become."""

    async def get_aspirant(self, aspirant_id: UUID) -> Aspirant | None:
        try:
            async with self._get_pool().connection() as conn:
                cur = await conn.execute(
                    f"SELECT {_ASPIRANT_COLUMNS} FROM aspirant_applications "
                    "WHERE id = %s",
                    (aspirant_id,),
                )
                row = await cur.fetchone()
        except Exception as exc:
            logger.exception(
                "PostgresAspirantRepository: failed to load aspirant",
                extra={"aspirant_id": str(aspirant_id), "error": str(exc)},
            )
            raise DatabaseError(f"Failed to load aspirant: {exc}") from exc
        return _row_to_aspirant(row) if row else None

    async def submit(self, aspirant: Aspirant) -> Aspirant:
        try:
            async with self._get_pool().connection() as conn:
                cur = await conn.execute(
                    f"""
                    INSERT INTO aspirant_applications
                        (id, user_id, full_name, matric, department,
                         position_id, cgpa, status)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_ASPIRANT_COLUMNS}
                    """,
                    (
                        aspirant.id,
                        aspirant.user_id,
                        aspirant.full_name,
                        aspirant.matric,
                        aspirant.department.value,
                        aspirant.position_id,
                        aspirant.cgpa,
                        aspirant.status.value,
                    ),
                )
                row = await cur.fetchone()
        except Exception as exc:
            logger.exception(
                "PostgresAspirantRepository: failed to submit application",
                extra={"aspirant_id": str(aspirant.id), "error": str(exc)},
            )
            raise DatabaseError(f"Failed to submit application: {exc}") from exc
        return _row_to_aspirant(row)

    async def apply_transition(
        self,
        aspirant_id: UUID,
        *,
        expected_status: AspirantStatus,
        update: AspirantUpdate,
    ) -> Aspirant | None:
        changes = update.changes()
        unknown = set(changes) - _WRITABLE_COLUMNS
        if unknown:
            raise ValueError(f"Columns not writable: {sorted(unknown)}")

        assignments = ", ".join(f"{column} = %s" for column in changes)
        params: list[object] = [_db_value(v) for v in changes.values()]

        try:
            async with self._get_pool().connection() as conn:
                async with conn.transaction():
                    cur = await conn.execute(
                        f"""
                        UPDATE aspirant_applications
                        SET {assignments}, updated_at = now()
                        WHERE id = %s AND status = %s
                        RETURNING {_ASPIRANT_COLUMNS}
                        """,
                        (*params, aspirant_id, expected_status.value),
                    )
                    row = await cur.fetchone()
                    if row is None:
                        return None

                    aspirant = _row_to_aspirant(row)
                    if aspirant.status is AspirantStatus.PROMOTED:
                        await conn.execute(
                            """
                            INSERT INTO candidates
                                (id, aspirant_id, name, matric, department, position_id)
                            VALUES (%s, %s, %s, %s, %s, %s)
                            ON CONFLICT (aspirant_id) DO NOTHING
                            """,
                            (
                                uuid4(),
                                aspirant.id,
                                aspirant.full_name,
                                aspirant.matric,
                                aspirant.department.value,
                                aspirant.position_id,
                            ),
                        )
        except Exception as exc:
            logger.exception(
                "PostgresAspirantRepository: transition failed",
                extra={
                    "aspirant_id": str(aspirant_id),
                    "expected_status": expected_status.value,
                    "target_status": update.status.value,
                    "error": str(exc),
                },
            )
            raise DatabaseError(f"Failed to apply transition: {exc}") from exc

        return aspirant

    async def list_public_candidates(self) -> list[Candidate]:
        try:
            async with self._get_pool().connection() as conn:
                cur = await conn.execute(
                    f"SELECT {_CANDIDATE_COLUMNS} FROM candidates "
                    "ORDER BY created_at ASC, id ASC"
                )
                rows = await cur.fetchall()
        except Exception as exc:
            logger.exception(
                "PostgresAspirantRepository: failed to list candidates",
                extra={"error": str(exc)},
            )
            raise DatabaseError(f"Failed to list candidates: {exc}") from exc
        return [_row_to_candidate(row) for row in rows]


class PostgresPositionRepository(_PoolBacked):
    """Read-only access to aspirant_positions."""

    async def get_requirement(self, position_id: UUID) -> PositionRequirement | None:
        try:
            async with self._get_pool().connection() as conn:
                cur = await conn.execute(
                    "SELECT id, position_name, min_cgpa FROM aspirant_positions "
                    "WHERE id = %s",
                    (position_id,),
                )
                row = await cur.fetchone()
        except Exception as exc:
            logger.exception(
                "PostgresPositionRepository: failed to load position",
                extra={"position_id": str(position_id), "error": str(exc)},
            )
            raise DatabaseError(f"Failed to load position: {exc}") from exc

        if row is None:
            return None
        return PositionRequirement(
            position_id=row[0],
            position_name=row[1],
            min_cgpa=float(row[2] or 0),
        )
