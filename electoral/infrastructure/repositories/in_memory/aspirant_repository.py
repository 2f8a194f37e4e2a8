# =============================================================================
# FILE: infrastructure/repositories/in_memory/aspirant_repository.py
# =============================================================================
"""
In-Memory aspirant, candidate and position stores for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from ....domain.entities import (
    Aspirant,
    AspirantUpdate,
    Candidate,
    PositionRequirement,
)
from ....domain.lifecycle import AspirantStatus


class InMemoryAspirantRepository:
    """
    In-memory implementation of AspirantRepository.

    apply_transition() runs without awaiting, so the compare-and-set is
    atomic within one event loop.
    """

    def __init__(self, aspirants: Optional[List[Aspirant]] = None) -> None:
        self._aspirants: Dict[UUID, Aspirant] = {}
        self._candidates: Dict[UUID, Candidate] = {}
        for aspirant in aspirants or []:
            self.add(aspirant)

    def add(self, aspirant: Aspirant) -> Aspirant:
        now = datetime.now(timezone.utc)
        stored = replace(
            aspirant,
            created_at=aspirant.created_at or now,
            updated_at=aspirant.updated_at or now,
        )
        self._aspirants[stored.id] = stored
        return stored

    async def get_aspirant(self, aspirant_id: UUID) -> Aspirant | None:
        return self._aspirants.get(aspirant_id)

    async def submit(self, aspirant: Aspirant) -> Aspirant:
        return self.add(aspirant)

    async def apply_transition(
        self,
        aspirant_id: UUID,
        *,
        expected_status: AspirantStatus,
        update: AspirantUpdate,
    ) -> Aspirant | None:
        current = self._aspirants.get(aspirant_id)
        if current is None or current.status != expected_status:
            return None

        updated = replace(
            current,
            **update.changes(),
            updated_at=datetime.now(timezone.utc),
        )
        self._aspirants[aspirant_id] = updated

        if update.status is AspirantStatus.PROMOTED:
            self._candidates.setdefault(
                aspirant_id, Candidate.from_aspirant(uuid4(), updated)
            )
        return updated

    async def list_public_candidates(self) -> list[Candidate]:
        return sorted(
            self._candidates.values(),
            key=lambda c: (c.created_at or datetime.min.replace(tzinfo=timezone.utc)),
        )


class InMemoryPositionRepository:
    """In-memory implementation of PositionRepository."""

    def __init__(self, requirements: Optional[List[PositionRequirement]] = None):
        self._requirements: Dict[UUID, PositionRequirement] = {
            r.position_id: r for r in requirements or []
        }

    def add(self, requirement: PositionRequirement) -> None:
        self._requirements[requirement.position_id] = requirement

    async def get_requirement(self, position_id: UUID) -> PositionRequirement | None:
        return self._requirements.get(position_id)
