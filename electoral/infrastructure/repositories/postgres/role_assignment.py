"""
============================================================
CRC CARD - infrastructure/repositories/postgres/role_assignment.py
============================================================
Class: PostgresRoleAssignmentRepository

Responsibilities:
  - Single (user_id, role) lookup against user_roles.

Collaborators:
  - psycopg_pool.AsyncConnectionPool
  - crosscutting.exceptions.DatabaseError (identity.roles turns it into
    RoleLookupError)

Notes:
  - Zero rows means "does not hold the role", not an error.
============================================================
"""

from __future__ import annotations

from psycopg_pool import AsyncConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger


class PostgresRoleAssignmentRepository:
    def __init__(self, pool: AsyncConnectionPool | None = None):
        self._pool = pool

    def _get_pool(self) -> AsyncConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    async def has_assignment(self, user_id: str, role: str) -> bool:
        try:
            async with self._get_pool().connection() as conn:
                cur = await conn.execute(
                    "SELECT 1 FROM user_roles WHERE user_id = %s AND role = %s LIMIT 1",
                    (user_id, role),
                )
                row = await cur.fetchone()
        except Exception as exc:
            logger.exception(
                "PostgresRoleAssignmentRepository: role lookup failed",
                extra={"user_id": user_id, "role": role, "error": str(exc)},
            )
            raise DatabaseError(f"Failed to look up role: {exc}") from exc
        return row is not None
