"""
Domain layer: entities, lifecycle rules, eligibility and repository ports.

No dependencies on the database, FastAPI or configuration.
"""

from .audit import AuditAction, AuditRecord
from .eligibility import Eligibility, meets_requirement, validate_declared_standing
from .entities import (
    Aspirant,
    AspirantUpdate,
    Candidate,
    Department,
    PositionRequirement,
    ScreeningOutcome,
)
from .lifecycle import AspirantStatus, ensure_transition

__all__ = [
    "Aspirant",
    "AspirantStatus",
    "AspirantUpdate",
    "AuditAction",
    "AuditRecord",
    "Candidate",
    "Department",
    "Eligibility",
    "PositionRequirement",
    "ScreeningOutcome",
    "ensure_transition",
    "meets_requirement",
    "validate_declared_standing",
]
