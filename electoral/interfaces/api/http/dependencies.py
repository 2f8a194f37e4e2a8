"""
===============================================================================
CRC CARD - dependencies.py (request-scoped wiring)
===============================================================================

Responsibilities:
  - Resolve the acting identity from the access token (header or cookie).
  - Build one Session Provider per request and share it between the
    Authorization Guard and the Audit Recorder.
  - Provide require_identity() / require_role() guards for routers.
  - Build the Candidate Lifecycle Controller and Promotion Gate.
  - Build the application submission use case.

Collaborators:
  - identity.tokens (extract/decode access tokens)
  - identity.session.LocalSessionProvider
  - identity.guard.AuthorizationGuard
  - audit.AuditRecorder
  - container (repository singletons, role resolver)
  - crosscutting.error_responses (401/403 with redirect_to)

Notes:
  - FastAPI caches dependencies per request, so every consumer of
    get_session() in one request sees the same provider.
  - An invalid or expired token is a 401, not an anonymous request.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from ....application.lifecycle_controller import CandidateLifecycleController
from ....application.promotion import PromotionGate
from ....application.usecases.aspirants import SubmitApplicationUseCase
from ....audit import AuditRecorder
from ....container import (
    get_aspirant_repository,
    get_audit_repository,
    get_position_repository,
    get_role_resolver,
)
from ....context import set_actor_context
from ....crosscutting.config import get_settings
from ....crosscutting.error_responses import AppHTTPException, forbidden, unauthorized
from ....domain.repositories import (
    AspirantRepository,
    AuditRecordRepository,
    PositionRepository,
)
from ....identity.guard import AuthorizationGuard
from ....identity.roles import AppRole, RoleResolver
from ....identity.session import Identity, LocalSessionProvider
from ....identity.tokens import decode_access_token, extract_access_token

_MSG_SIGN_IN = "Sign in to continue."
_MSG_ROLE_REQUIRED = "You don't have permission to view this page."


def _redirect_target() -> str:
    return get_settings().unauthorized_redirect


def origin_address(request: Request) -> str | None:
    """Client address for audit records (None when the transport hides it)."""
    return request.client.host if request.client else None


# ---------------------------------------------------------------------------
# Identity / session
# ---------------------------------------------------------------------------
async def get_identity(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
) -> Identity | None:
    token = extract_access_token(request, authorization)
    if not token:
        return None

    try:
        identity = decode_access_token(token)
    except AppHTTPException as exc:
        raise unauthorized(str(exc.detail), redirect_to=_redirect_target()) from exc

    set_actor_context(identity.user_id)
    request.state.identity = identity
    return identity


async def get_session(
    identity: Identity | None = Depends(get_identity),
) -> LocalSessionProvider:
    return LocalSessionProvider(identity)


async def require_identity(
    identity: Identity | None = Depends(get_identity),
) -> Identity:
    if identity is None:
        raise unauthorized(_MSG_SIGN_IN, redirect_to=_redirect_target())
    return identity


def require_role(role: AppRole | str) -> Callable:
    """Dependency FastAPI: the caller must hold `role` (resolved per request)."""
    required_role = AppRole(role)

    async def dependency(
        session: LocalSessionProvider = Depends(get_session),
        resolver: RoleResolver = Depends(get_role_resolver),
    ) -> Identity:
        guard = AuthorizationGuard(
            session,
            resolver,
            required_role=required_role,
            redirect_to=_redirect_target(),
        )
        async with guard:
            decision = await guard.settled()

        if decision.allowed:
            return session.current_identity()
        if not guard.authenticated:
            raise unauthorized(_MSG_SIGN_IN, redirect_to=decision.redirect_to)
        raise forbidden(_MSG_ROLE_REQUIRED, redirect_to=decision.redirect_to)

    return dependency


# ---------------------------------------------------------------------------
# Lifecycle wiring
# ---------------------------------------------------------------------------
async def get_admin_guard(
    session: LocalSessionProvider = Depends(get_session),
    resolver: RoleResolver = Depends(get_role_resolver),
) -> AuthorizationGuard:
    return AuthorizationGuard(
        session,
        resolver,
        required_role=AppRole.ADMIN,
        redirect_to=_redirect_target(),
    )


async def get_audit_recorder(
    session: LocalSessionProvider = Depends(get_session),
    repository: AuditRecordRepository = Depends(get_audit_repository),
) -> AuditRecorder:
    return AuditRecorder(session, repository, enabled=get_settings().audit_enabled)


async def get_lifecycle_controller(
    guard: AuthorizationGuard = Depends(get_admin_guard),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    aspirants: AspirantRepository = Depends(get_aspirant_repository),
    positions: PositionRepository = Depends(get_position_repository),
) -> CandidateLifecycleController:
    return CandidateLifecycleController(guard, recorder, aspirants, positions)


async def get_promotion_gate(
    controller: CandidateLifecycleController = Depends(get_lifecycle_controller),
    aspirants: AspirantRepository = Depends(get_aspirant_repository),
    positions: PositionRepository = Depends(get_position_repository),
) -> PromotionGate:
    return PromotionGate(controller, aspirants, positions)


async def get_submit_application_use_case(
    aspirants: AspirantRepository = Depends(get_aspirant_repository),
    positions: PositionRepository = Depends(get_position_repository),
) -> SubmitApplicationUseCase:
    return SubmitApplicationUseCase(aspirants, positions)
