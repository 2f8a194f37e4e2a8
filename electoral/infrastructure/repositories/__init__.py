"""Repository implementations (PostgreSQL and in-memory)."""

from .in_memory import (
    InMemoryAspirantRepository,
    InMemoryAuditRecordRepository,
    InMemoryPositionRepository,
    InMemoryRoleAssignmentRepository,
)
from .postgres import (
    PostgresAspirantRepository,
    PostgresAuditRecordRepository,
    PostgresPositionRepository,
    PostgresRoleAssignmentRepository,
)

__all__ = [
    "InMemoryAspirantRepository",
    "InMemoryAuditRecordRepository",
    "InMemoryPositionRepository",
    "InMemoryRoleAssignmentRepository",
    "PostgresAspirantRepository",
    "PostgresAuditRecordRepository",
    "PostgresPositionRepository",
    "PostgresRoleAssignmentRepository",
]
