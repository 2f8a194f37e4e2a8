"""
===============================================================================
CRC CARD - electoral/container.py (Composition Root / manual DI)
===============================================================================

Responsibilities:
  - Compose repositories and services behind the domain ports.
  - Expose factories for FastAPI (Depends) and for scripts.
  - Keep singletons cached with lru_cache.
  - Choose Postgres or in-memory adapters from Settings.

Collaborators:
  - electoral.crosscutting.config.get_settings
  - electoral.domain.repositories.* (ports)
  - electoral.infrastructure.repositories.* (adapters)
  - electoral.identity.roles.RoleResolver

Notes:
  - No business logic here.
  - No FastAPI imports here (factories only).
  - Per-request objects (session, guard, recorder, controller) are built in
    interfaces/api/http/dependencies.py from these singletons.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .crosscutting.config import get_settings
from .domain.repositories import (
    AspirantRepository,
    AuditRecordRepository,
    PositionRepository,
    RoleAssignmentRepository,
)
from .identity.roles import RoleResolver
from .infrastructure.repositories import (
    InMemoryAspirantRepository,
    InMemoryAuditRecordRepository,
    InMemoryPositionRepository,
    InMemoryRoleAssignmentRepository,
    PostgresAspirantRepository,
    PostgresAuditRecordRepository,
    PostgresPositionRepository,
    PostgresRoleAssignmentRepository,
)


def _use_postgres() -> bool:
    """An empty DATABASE_URL selects the in-memory adapters."""
    return get_settings().uses_database()


# =============================================================================
# Repositories (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_role_assignment_repository() -> RoleAssignmentRepository:
    if _use_postgres():
        return PostgresRoleAssignmentRepository()
    return InMemoryRoleAssignmentRepository()


@lru_cache(maxsize=1)
def get_aspirant_repository() -> AspirantRepository:
    if _use_postgres():
        return PostgresAspirantRepository()
    return InMemoryAspirantRepository()


@lru_cache(maxsize=1)
def get_position_repository() -> PositionRepository:
    if _use_postgres():
        return PostgresPositionRepository()
    return InMemoryPositionRepository()


@lru_cache(maxsize=1)
def get_audit_repository() -> AuditRecordRepository:
    if _use_postgres():
        return PostgresAuditRecordRepository()
    return InMemoryAuditRecordRepository()


# =============================================================================
# Services
# =============================================================================


@lru_cache(maxsize=1)
def get_role_resolver() -> RoleResolver:
    return RoleResolver(get_role_assignment_repository())


def clear_container_cache() -> None:
    """Drop cached singletons (tests that switch settings between cases)."""
    for factory in (
        get_role_assignment_repository,
        get_aspirant_repository,
        get_position_repository,
        get_audit_repository,
        get_role_resolver,
    ):
        factory.cache_clear()
