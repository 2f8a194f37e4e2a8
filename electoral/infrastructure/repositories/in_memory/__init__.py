"""In-memory repositories (tests and local development without a database)."""

from .aspirant_repository import InMemoryAspirantRepository, InMemoryPositionRepository
from .audit_repository import InMemoryAuditRecordRepository
from .role_repository import InMemoryRoleAssignmentRepository

__all__ = [
    "InMemoryAspirantRepository",
    "InMemoryAuditRecordRepository",
    "InMemoryPositionRepository",
    "InMemoryRoleAssignmentRepository",
]
