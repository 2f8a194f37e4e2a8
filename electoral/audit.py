"""
===============================================================================
CRC CARD - electoral/audit.py (Audit Recorder)
===============================================================================

Responsibilities:
  - Build audit records for the acting identity with a consistent shape.
  - Submit each record as one detached write that the caller never awaits.
  - Contain write failures: wrap them in AuditWriteFailure, report them to a
    diagnostics sink and swallow them.

Collaborators:
  - electoral.domain.audit.AuditAction / AuditRecord
  - electoral.domain.repositories.AuditRecordRepository
  - electoral.identity.session.SessionProvider (acting identity)
  - electoral.crosscutting.logger / metrics (default diagnostics sink)

Rules:
  - No identity -> no record. Anonymous records are never written.
  - Only AuditAction members are accepted; free-form strings raise TypeError.
  - At-most-once: a failed write is reported, never retried.
  - The outcome of the write never reaches the action it describes.
===============================================================================
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable
from uuid import UUID, uuid4

from .crosscutting.exceptions import AuditWriteFailure
from .crosscutting.logger import logger
from .crosscutting.metrics import record_audit_write
from .domain.audit import AuditAction, AuditRecord
from .domain.repositories import AuditRecordRepository
from .identity.session import SessionProvider

DiagnosticsSink = Callable[[AuditWriteFailure], None]


def _sanitize(value: Any) -> Any:
    """
    Convert values to JSON-serializable types.
    - primitives -> as is
    - dict/list/tuple -> sanitized recursively
    - UUID/Enum/datetime -> string form
    - anything else -> str(value)
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, dict):
        return {str(k): _sanitize(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [_sanitize(v) for v in value]

    if isinstance(value, Enum):
        return _sanitize(value.value)

    if isinstance(value, (datetime, date)):
        return value.isoformat()

    if isinstance(value, UUID):
        return str(value)

    return str(value)


def log_audit_failure(failure: AuditWriteFailure) -> None:
    """Default diagnostics sink: structured warning + failure counter."""
    record = failure.record
    record_audit_write(record.action.value if record else "unknown", "failed")
    logger.warning(
        "Audit record write failed",
        extra={
            "error_id": failure.error_id,
            "action": record.action.value if record else None,
            "entity_type": record.entity_type if record else None,
            "entity_id": record.entity_id if record else None,
            "error": str(failure.original_error or failure.message),
        },
    )


class AuditRecorder:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      AuditRecorder

    Responsibilities:
      - record(): synchronous, returns immediately
      - Track pending writes so they can be drained on shutdown / in tests

    Collaborators:
      - SessionProvider, AuditRecordRepository, DiagnosticsSink
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        session: SessionProvider,
        repository: AuditRecordRepository,
        diagnostics: DiagnosticsSink | None = None,
        *,
        enabled: bool = True,
    ):
        self._session = session
        self._repository = repository
        self._diagnostics = diagnostics or log_audit_failure
        self._enabled = enabled
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def record(
        self,
        action: AuditAction,
        *,
        entity_type: str | None = None,
        entity_id: str | UUID | None = None,
        details: dict[str, Any] | None = None,
        origin_address: str | None = None,
    ) -> asyncio.Task | None:
        """
        Schedule one audit write for the current identity.

        Returns the detached write task, or None when nothing was submitted
        (no identity, auditing disabled, or no running event loop).
        """
        if not isinstance(action, AuditAction):
            raise TypeError(f"Unknown audit action: {action!r}")

        if not self._enabled:
            return None

        identity = self._session.current_identity()
        if identity is None:
            return None

        record = AuditRecord(
            id=uuid4(),
            user_id=identity.user_id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            details=_sanitize(details or {}),
            ip_address=origin_address or None,
        )

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            self._report(
                AuditWriteFailure(
                    "No running event loop for audit write",
                    record=record,
                    original_error=exc,
                )
            )
            return None

        task = loop.create_task(self._write(record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every write submitted so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _write(self, record: AuditRecord) -> None:
        try:
            await self._repository.append(record)
        except Exception as exc:
            self._report(
                AuditWriteFailure(
                    f"Could not persist audit record '{record.action.value}'",
                    record=record,
                    original_error=exc,
                )
            )
            return
        record_audit_write(record.action.value, "written")

    def _report(self, failure: AuditWriteFailure) -> None:
        try:
            self._diagnostics(failure)
        except Exception:
            logger.exception(
                "Audit diagnostics sink failed", extra={"error_id": failure.error_id}
            )
