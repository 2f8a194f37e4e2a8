"""PostgreSQL repositories (psycopg 3, async pool)."""

from .aspirant import PostgresAspirantRepository, PostgresPositionRepository
from .audit_record import PostgresAuditRecordRepository
from .role_assignment import PostgresRoleAssignmentRepository

__all__ = [
    "PostgresAspirantRepository",
    "PostgresAuditRecordRepository",
    "PostgresPositionRepository",
    "PostgresRoleAssignmentRepository",
]
