# =============================================================================
# FILE: infrastructure/repositories/in_memory/role_repository.py
# =============================================================================
"""
In-Memory role-assignment store for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from typing import Iterable


class InMemoryRoleAssignmentRepository:
    """
    In-memory implementation of RoleAssignmentRepository.

    Assignments are managed by grant()/revoke(); the core only reads them.
    """

    def __init__(self, assignments: Iterable[tuple[str, str]] = ()) -> None:
        self._assignments: set[tuple[str, str]] = {
            (str(user_id), str(role)) for user_id, role in assignments
        }

    def grant(self, user_id: str, role: str) -> None:
        self._assignments.add((str(user_id), str(role)))

    def revoke(self, user_id: str, role: str) -> None:
        self._assignments.discard((str(user_id), str(role)))

    async def has_assignment(self, user_id: str, role: str) -> bool:
        return (str(user_id), str(role)) in self._assignments
