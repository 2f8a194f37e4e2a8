"""
Name: API Test Fixtures

Responsibilities:
  - Build an app with the v1 router and the problem+json handlers
  - Override the repository singletons with in-memory stores
  - Issue access tokens for an admin and a voter
"""

from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from electoral.api.exception_handlers import register_exception_handlers
from electoral.container import (
    get_aspirant_repository,
    get_audit_repository,
    get_position_repository,
    get_role_resolver,
)
from electoral.crosscutting.middleware import RequestContextMiddleware
from electoral.identity.roles import RoleResolver
from electoral.identity.tokens import create_access_token
from electoral.infrastructure.repositories.in_memory import (
    InMemoryAspirantRepository,
    InMemoryAuditRecordRepository,
    InMemoryPositionRepository,
    InMemoryRoleAssignmentRepository,
)
from electoral.interfaces.api.http.router import build_router


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    app.include_router(build_router(), prefix="/v1")
    register_exception_handlers(app)
    return app


@pytest.fixture
def stores(position):
    return SimpleNamespace(
        aspirants=InMemoryAspirantRepository(),
        positions=InMemoryPositionRepository([position]),
        audit=InMemoryAuditRecordRepository(),
        roles=InMemoryRoleAssignmentRepository([("admin-1", "admin")]),
    )


@pytest.fixture
def client(stores):
    app = _build_app()
    resolver = RoleResolver(stores.roles)
    app.dependency_overrides[get_aspirant_repository] = lambda: stores.aspirants
    app.dependency_overrides[get_position_repository] = lambda: stores.positions
    app.dependency_overrides[get_audit_repository] = lambda: stores.audit
    app.dependency_overrides[get_role_resolver] = lambda: resolver
    return TestClient(app)


@pytest.fixture
def admin_headers(admin_identity):
    token, _ = create_access_token(admin_identity)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def voter_headers(voter_identity):
    token, _ = create_access_token(voter_identity)
    return {"Authorization": f"Bearer {token}"}
