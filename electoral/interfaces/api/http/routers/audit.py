"""
===============================================================================
CRC CARD - interfaces/api/http/routers/audit.py
===============================================================================

Name:
    Audit Router

Responsibilities:
    - POST /audit-log: record a privileged action performed elsewhere (admin
      console) under the authenticated caller's identity.
    - GET /admin/audit: admin-only listing with filters and offset paging.

Collaborators:
    - audit.AuditRecorder (ingestion, detached write)
    - domain.repositories.AuditRecordRepository (listing)
    - dependencies.require_identity / require_role(AppRole.ADMIN)
    - schemas.audit

Rules:
    - The actor is always the token subject. A body user_id that names
      someone else is refused (403).
    - Actions outside AuditAction are refused (422).
    - The recorded address is the connection peer; the body ip_address is a
      fallback for transports that hide it.
    - Naive start_at / end_at filters are read as UTC.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from .....audit import AuditRecorder
from .....container import get_audit_repository
from .....crosscutting.error_responses import forbidden, validation_error
from .....domain.audit import AuditAction, AuditRecord
from .....domain.repositories import AuditRecordRepository
from .....identity.roles import AppRole
from .....identity.session import Identity
from ..dependencies import (
    get_audit_recorder,
    origin_address,
    require_identity,
    require_role,
)
from ..schemas.audit import (
    AuditLogAcceptedRes,
    AuditLogReq,
    AuditRecordRes,
    AuditRecordsRes,
)

router = APIRouter(tags=["audit"])


def _parse_action(raw: str) -> AuditAction:
    try:
        return AuditAction(raw.strip())
    except ValueError:
        raise validation_error(
            f"Unknown audit action: {raw!r}",
            [{"field": "action", "msg": "not a recognised audit action"}],
        )


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _recorded_address(request: Request, req: AuditLogReq) -> str | None:
    observed = origin_address(request)
    if observed:
        return observed
    return str(req.ip_address) if req.ip_address is not None else None


def _to_audit_record_res(record: AuditRecord) -> AuditRecordRes:
    return AuditRecordRes(
        id=record.id,
        user_id=record.user_id,
        action=record.action.value,
        entity_type=record.entity_type,
        entity_id=record.entity_id,
        details=record.details or {},
        ip_address=record.ip_address,
        created_at=record.created_at,
    )


@router.post("/audit-log", response_model=AuditLogAcceptedRes, status_code=202)
async def ingest_audit_log(
    req: AuditLogReq,
    request: Request,
    background_tasks: BackgroundTasks,
    identity: Identity = Depends(require_identity),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    if req.user_id is not None and req.user_id != identity.user_id:
        raise forbidden("Audit records can only be written for yourself.")

    action = _parse_action(req.action)
    recorder.record(
        action,
        entity_type=req.entity_type,
        entity_id=req.entity_id,
        details=req.details,
        origin_address=_recorded_address(request, req),
    )
    background_tasks.add_task(recorder.drain)
    return AuditLogAcceptedRes()


@router.get("/admin/audit", response_model=AuditRecordsRes)
async def list_audit_records(
    action: str | None = Query(None),
    user_id: str | None = Query(None),
    entity_type: str | None = Query(None),
    entity_id: str | None = Query(None),
    start_at: datetime | None = Query(None),
    end_at: datetime | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    audit_repo: AuditRecordRepository = Depends(get_audit_repository),
    _admin: Identity = Depends(require_role(AppRole.ADMIN)),
):
    start_at, end_at = _as_utc(start_at), _as_utc(end_at)
    if start_at and end_at and start_at > end_at:
        raise validation_error("start_at must be before end_at")

    records = await audit_repo.list_records(
        action=_parse_action(action) if action else None,
        user_id=user_id,
        entity_type=entity_type,
        entity_id=entity_id,
        start_at=start_at,
        end_at=end_at,
        limit=limit,
        offset=offset,
    )

    next_offset = offset + limit if len(records) == limit else None
    return AuditRecordsRes(
        records=[_to_audit_record_res(r) for r in records],
        next_offset=next_offset,
    )
