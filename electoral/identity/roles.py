"""
===============================================================================
CRC CARD - identity/roles.py
===============================================================================

Module:
    Role Resolver

Responsibilities:
    - Answer "does this identity hold this role?" with a single lookup.
    - Translate store/transport faults into RoleLookupError.

Collaborators:
    - domain.repositories.RoleAssignmentRepository: (user_id, role) lookup.
    - identity.guard.AuthorizationGuard: main consumer (fails closed).
    - crosscutting.logger / metrics: diagnostics for failed lookups.

Notes:
    - A missing row is a plain False, not an error.
    - Roles come from the role-assignment store, never from token claims.
===============================================================================
"""

from __future__ import annotations

from enum import Enum

from ..crosscutting.exceptions import RoleLookupError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_role_lookup_failure
from ..domain.repositories import RoleAssignmentRepository
from .session import Identity


class AppRole(str, Enum):
    ADMIN = "admin"
    ASPIRANT = "aspirant"
    VOTER = "voter"


class RoleResolver:
    """Membership check against the role-assignment table."""

    def __init__(self, repository: RoleAssignmentRepository):
        self._repository = repository

    async def has_role(self, identity: Identity, role: AppRole | str) -> bool:
        """
        Raises:
            RoleLookupError: the store could not be reached or read.
        """
        role_value = AppRole(role).value
        try:
            return bool(
                await self._repository.has_assignment(identity.user_id, role_value)
            )
        except Exception as exc:
            record_role_lookup_failure()
            logger.warning(
                "Role lookup failed",
                extra={
                    "user_id": identity.user_id,
                    "role": role_value,
                    "error": str(exc),
                },
            )
            raise RoleLookupError(
                "Could not verify role membership.", original_error=exc
            ) from exc
