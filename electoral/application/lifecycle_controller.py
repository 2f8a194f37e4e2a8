"""
===============================================================================
CRC CARD - application/lifecycle_controller.py
===============================================================================

Class:
    CandidateLifecycleController

Responsibilities:
    - Gate every lifecycle operation on the Authorization Guard (admin).
    - Delegate the transition to the matching use case.
    - Record the audit event after a successful write, never before and
      never on failure.
    - Count applied / rejected transitions.

Collaborators:
    - identity.guard.AuthorizationGuard
    - audit.AuditRecorder
    - application/usecases/aspirants/*
    - crosscutting.metrics / logger

Rules:
    - A guard that is not AUTHORIZED stops the call before any repository
      access (AuthorizationDeniedError).
    - Lifecycle failures surface as typed exceptions (IneligibleError,
      InvalidStateError, NotFoundError, InputValidationError).
    - The audit outcome never changes the returned aspirant.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Awaitable, Callable
from uuid import UUID

from ..audit import AuditRecorder
from ..crosscutting.exceptions import AuthorizationDeniedError, ElectoralError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_lifecycle_transition
from ..domain.audit import AuditAction
from ..domain.entities import Aspirant, ScreeningOutcome
from ..domain.repositories import AspirantRepository, PositionRepository
from ..identity.guard import AuthorizationGuard
from .usecases.aspirants import (
    CompleteScreeningUseCase,
    DisqualifyAspirantUseCase,
    PromoteCandidateUseCase,
    ReviewAspirantUseCase,
    ScheduleScreeningUseCase,
    VerifyPaymentUseCase,
)

AUDIT_ENTITY_TYPE = "aspirant"


class CandidateLifecycleController:
    def __init__(
        self,
        guard: AuthorizationGuard,
        recorder: AuditRecorder,
        aspirant_repository: AspirantRepository,
        position_repository: PositionRepository,
    ) -> None:
        self._guard = guard
        self._recorder = recorder
        self._promote = PromoteCandidateUseCase(aspirant_repository, position_repository)
        self._disqualify = DisqualifyAspirantUseCase(aspirant_repository)
        self._schedule = ScheduleScreeningUseCase(aspirant_repository)
        self._complete = CompleteScreeningUseCase(aspirant_repository)
        self._review = ReviewAspirantUseCase(aspirant_repository)
        self._verify_payment = VerifyPaymentUseCase(aspirant_repository)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def promote(
        self, aspirant_id: UUID, *, origin_address: str | None = None
    ) -> Aspirant:
        return await self._transition(
            "promote",
            AuditAction.PROMOTE_CANDIDATE,
            aspirant_id,
            lambda: self._promote.execute(aspirant_id),
            details=lambda a: {
                "name": a.full_name,
                "matric": a.matric,
                "position_id": a.position_id,
                "cgpa": a.cgpa,
            },
            origin_address=origin_address,
        )

    async def disqualify(
        self, aspirant_id: UUID, reason: str, *, origin_address: str | None = None
    ) -> Aspirant:
        return await self._transition(
            "disqualify",
            AuditAction.DISQUALIFY_ASPIRANT,
            aspirant_id,
            lambda: self._disqualify.execute(aspirant_id, reason),
            details=lambda a: {"reason": a.disqualification_reason},
            origin_address=origin_address,
        )

    async def schedule_screening(
        self,
        aspirant_id: UUID,
        slot: datetime,
        *,
        notes: str | None = None,
        origin_address: str | None = None,
    ) -> Aspirant:
        return await self._transition(
            "schedule_screening",
            AuditAction.SCREENING_SCHEDULE,
            aspirant_id,
            lambda: self._schedule.execute(aspirant_id, slot, notes),
            details=lambda a: {"screening_slot": a.screening_slot},
            origin_address=origin_address,
        )

    async def complete_screening(
        self,
        aspirant_id: UUID,
        outcome: ScreeningOutcome | str,
        *,
        notes: str | None = None,
        origin_address: str | None = None,
    ) -> Aspirant:
        return await self._transition(
            "complete_screening",
            AuditAction.SCREENING_COMPLETE,
            aspirant_id,
            lambda: self._complete.execute(aspirant_id, outcome, notes),
            details=lambda a: {"outcome": a.screening_result},
            origin_address=origin_address,
        )

    async def begin_review(
        self,
        aspirant_id: UUID,
        *,
        notes: str | None = None,
        origin_address: str | None = None,
    ) -> Aspirant:
        return await self._transition(
            "begin_review",
            AuditAction.ASPIRANT_REVIEW,
            aspirant_id,
            lambda: self._review.execute(aspirant_id, notes),
            origin_address=origin_address,
        )

    async def verify_payment(
        self,
        aspirant_id: UUID,
        *,
        verified: bool = True,
        origin_address: str | None = None,
    ) -> Aspirant:
        return await self._transition(
            "verify_payment",
            AuditAction.PAYMENT_VERIFY,
            aspirant_id,
            lambda: self._verify_payment.execute(aspirant_id, verified),
            details=lambda a: {"verified": a.payment_verified},
            origin_address=origin_address,
        )

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------
    async def authorize(self, operation: str) -> None:
        """Raise AuthorizationDeniedError unless the guard is AUTHORIZED."""
        decision = await self._guard.evaluate()
        if decision.allowed:
            return
        record_lifecycle_transition(operation, "forbidden")
        authenticated = self._guard.authenticated
        logger.warning(
            "Lifecycle operation denied",
            extra={
                "operation": operation,
                "guard_state": decision.state.value,
                "authenticated": authenticated,
            },
        )
        raise AuthorizationDeniedError(
            "You must be an election administrator to do this."
            if authenticated
            else "Sign in to continue.",
            authenticated=authenticated,
            redirect_to=decision.redirect_to,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    async def _transition(
        self,
        operation: str,
        action: AuditAction,
        aspirant_id: UUID,
        step: Callable[[], Awaitable[Aspirant]],
        *,
        details: Callable[[Aspirant], dict[str, Any]] | None = None,
        origin_address: str | None,
    ) -> Aspirant:
        await self.authorize(operation)

        try:
            aspirant = await step()
        except ElectoralError as exc:
            record_lifecycle_transition(operation, exc.error_code.lower())
            logger.info(
                "Lifecycle operation rejected",
                extra={
                    "operation": operation,
                    "aspirant_id": str(aspirant_id),
                    "error_code": exc.error_code,
                    "error_id": exc.error_id,
                },
            )
            raise

        record_lifecycle_transition(operation, "applied")
        logger.info(
            "Lifecycle operation applied",
            extra={
                "operation": operation,
                "aspirant_id": str(aspirant.id),
                "status": aspirant.status.value,
            },
        )

        audit_details = {"status": aspirant.status}
        if details is not None:
            audit_details.update(details(aspirant))
        self._recorder.record(
            action,
            entity_type=AUDIT_ENTITY_TYPE,
            entity_id=aspirant.id,
            details=audit_details,
            origin_address=origin_address,
        )
        return aspirant
