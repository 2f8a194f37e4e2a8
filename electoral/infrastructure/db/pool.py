"""
===============================================================================
CRC CARD - infrastructure/db/pool.py
===============================================================================

Component:
  PostgreSQL async connection pool (singleton)

Responsibilities:
  - Initialize, expose and close the pool.
  - Configure each connection (statement_timeout).

Collaborators:
  - psycopg_pool.AsyncConnectionPool
  - crosscutting.config (timeout)
  - api/main.py lifespan (init/close)

Principles:
  - Fail fast (double init, use before init)
  - One pool per process
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

_pool: Optional[AsyncConnectionPool] = None


async def _configure_connection(conn: AsyncConnection) -> None:
    """Apply statement_timeout to every new pooled connection."""
    from ...crosscutting.config import get_settings

    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        await conn.execute(f"SET statement_timeout = {timeout_ms}")
        await conn.commit()


async def init_pool(
    database_url: str, min_size: int, max_size: int
) -> AsyncConnectionPool:
    """Initialize the pool (once per process)."""
    global _pool

    if _pool is not None:
        raise PoolAlreadyInitializedError("The pool is already initialized.")

    logger.info(
        "Initializing DB pool",
        extra={"min_size": min_size, "max_size": max_size},
    )

    pool = AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        configure=_configure_connection,
        open=False,
    )
    await pool.open()
    _pool = pool

    logger.info("DB pool initialized")
    return pool


def get_pool() -> AsyncConnectionPool:
    if _pool is None:
        raise PoolNotInitializedError("Pool not initialized. Call init_pool() first.")
    return _pool


async def close_pool() -> None:
    """Close the pool (idempotent)."""
    global _pool

    if _pool is not None:
        logger.info("Closing DB pool")
        try:
            await _pool.close()
        finally:
            _pool = None
        logger.info("DB pool closed")


async def ping() -> bool:
    """True when a pooled connection answers SELECT 1 (used by /healthz)."""
    try:
        async with get_pool().connection() as conn:
            await conn.execute("SELECT 1")
        return True
    except Exception as exc:
        logger.warning("DB ping failed", extra={"error": str(exc)})
        return False
