"""
===============================================================================
CRC CARD - interfaces/api/http/routers/aspirants.py
===============================================================================

Name:
    Aspirant Lifecycle Router

Responsibilities:
    - Signed-in students submit an application (POST /aspirants).
    - Admin endpoints that move an aspirant through review, payment,
      screening, disqualification and promotion.
    - Promotion summary + confirmed promotion.
    - Drain pending audit writes after the response (BackgroundTasks).

Collaborators:
    - application.lifecycle_controller.CandidateLifecycleController
    - application.promotion.PromotionGate
    - application.usecases.aspirants.SubmitApplicationUseCase
    - audit.AuditRecorder
    - dependencies (per-request wiring)
    - schemas.aspirants

Notes:
    - Authorization is enforced by the controller's guard; a denial is an
      AuthorizationDeniedError mapped to 401/403 by the exception handlers.
    - Submission only needs a signed-in identity; the application is owned
      by the token subject.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from .....application.lifecycle_controller import CandidateLifecycleController
from .....application.promotion import PromotionGate, PromotionSummary
from .....application.usecases.aspirants import SubmitApplicationUseCase
from .....audit import AuditRecorder
from .....domain.entities import Aspirant
from .....identity.session import Identity
from ..dependencies import (
    get_audit_recorder,
    get_lifecycle_controller,
    get_promotion_gate,
    get_submit_application_use_case,
    origin_address,
    require_identity,
)
from ..schemas.aspirants import (
    AspirantRes,
    CompleteScreeningReq,
    DisqualifyAspirantReq,
    PromoteAspirantReq,
    PromotionSummaryRes,
    ReviewAspirantReq,
    ScheduleScreeningReq,
    SubmitApplicationReq,
    VerifyPaymentReq,
)

router = APIRouter(prefix="/aspirants", tags=["aspirants"])


def _to_aspirant_res(aspirant: Aspirant) -> AspirantRes:
    return AspirantRes(
        id=aspirant.id,
        full_name=aspirant.full_name,
        matric=aspirant.matric,
        department=aspirant.department.value,
        department_code=aspirant.department.code,
        position_id=aspirant.position_id,
        cgpa=aspirant.cgpa,
        status=aspirant.status,
        is_public=aspirant.is_public,
        payment_verified=aspirant.payment_verified,
        screening_slot=aspirant.screening_slot,
        screening_result=aspirant.screening_result,
        disqualification_reason=aspirant.disqualification_reason,
        admin_notes=aspirant.admin_notes,
        updated_at=aspirant.updated_at,
    )


def _to_summary_res(summary: PromotionSummary) -> PromotionSummaryRes:
    return PromotionSummaryRes(
        aspirant_id=summary.aspirant_id,
        name=summary.name,
        matric=summary.matric,
        department=summary.department,
        department_code=summary.department_code,
        position=summary.position,
        status=summary.status,
        cgpa=summary.cgpa,
        min_cgpa=summary.min_cgpa,
        eligibility=summary.eligibility,
        confirmation_token=summary.confirmation_token,
    )


@router.post("", response_model=AspirantRes, status_code=status.HTTP_201_CREATED)
async def submit_application(
    req: SubmitApplicationReq,
    identity: Identity = Depends(require_identity),
    use_case: SubmitApplicationUseCase = Depends(get_submit_application_use_case),
):
    aspirant = await use_case.execute(
        user_id=identity.user_id,
        full_name=req.full_name,
        matric=req.matric,
        department=req.department,
        position_id=req.position_id,
        cgpa=req.cgpa,
    )
    return _to_aspirant_res(aspirant)


@router.post("/{aspirant_id}/review", response_model=AspirantRes)
async def begin_review(
    aspirant_id: UUID,
    request: Request,
    background_tasks: BackgroundTasks,
    req: ReviewAspirantReq | None = None,
    controller: CandidateLifecycleController = Depends(get_lifecycle_controller),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    aspirant = await controller.begin_review(
        aspirant_id,
        notes=req.notes if req else None,
        origin_address=origin_address(request),
    )
    background_tasks.add_task(recorder.drain)
    return _to_aspirant_res(aspirant)


@router.post("/{aspirant_id}/payment/verify", response_model=AspirantRes)
async def verify_payment(
    aspirant_id: UUID,
    request: Request,
    background_tasks: BackgroundTasks,
    req: VerifyPaymentReq | None = None,
    controller: CandidateLifecycleController = Depends(get_lifecycle_controller),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    aspirant = await controller.verify_payment(
        aspirant_id,
        verified=req.verified if req else True,
        origin_address=origin_address(request),
    )
    background_tasks.add_task(recorder.drain)
    return _to_aspirant_res(aspirant)


@router.post("/{aspirant_id}/screening", response_model=AspirantRes)
async def schedule_screening(
    aspirant_id: UUID,
    req: ScheduleScreeningReq,
    request: Request,
    background_tasks: BackgroundTasks,
    controller: CandidateLifecycleController = Depends(get_lifecycle_controller),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    aspirant = await controller.schedule_screening(
        aspirant_id,
        req.slot,
        notes=req.notes,
        origin_address=origin_address(request),
    )
    background_tasks.add_task(recorder.drain)
    return _to_aspirant_res(aspirant)


@router.post("/{aspirant_id}/screening/complete", response_model=AspirantRes)
async def complete_screening(
    aspirant_id: UUID,
    req: CompleteScreeningReq,
    request: Request,
    background_tasks: BackgroundTasks,
    controller: CandidateLifecycleController = Depends(get_lifecycle_controller),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    aspirant = await controller.complete_screening(
        aspirant_id,
        req.outcome,
        notes=req.notes,
        origin_address=origin_address(request),
    )
    background_tasks.add_task(recorder.drain)
    return _to_aspirant_res(aspirant)


@router.post("/{aspirant_id}/disqualify", response_model=AspirantRes)
async def disqualify_aspirant(
    aspirant_id: UUID,
    req: DisqualifyAspirantReq,
    request: Request,
    background_tasks: BackgroundTasks,
    controller: CandidateLifecycleController = Depends(get_lifecycle_controller),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    aspirant = await controller.disqualify(
        aspirant_id, req.reason, origin_address=origin_address(request)
    )
    background_tasks.add_task(recorder.drain)
    return _to_aspirant_res(aspirant)


@router.get("/{aspirant_id}/promotion-summary", response_model=PromotionSummaryRes)
async def promotion_summary(
    aspirant_id: UUID,
    gate: PromotionGate = Depends(get_promotion_gate),
):
    summary = await gate.summarize(aspirant_id)
    return _to_summary_res(summary)


@router.post("/{aspirant_id}/promote", response_model=AspirantRes)
async def promote_aspirant(
    aspirant_id: UUID,
    req: PromoteAspirantReq,
    request: Request,
    background_tasks: BackgroundTasks,
    gate: PromotionGate = Depends(get_promotion_gate),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    aspirant = await gate.promote(
        aspirant_id,
        confirmation_token=req.confirmation_token,
        origin_address=origin_address(request),
    )
    background_tasks.add_task(recorder.drain)
    return _to_aspirant_res(aspirant)
