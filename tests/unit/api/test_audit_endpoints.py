"""
Name: Audit Endpoint Tests

Responsibilities:
  - POST /v1/audit-log records under the token subject only
  - Unknown actions and foreign user ids are refused
  - GET /v1/admin/audit is admin-only, filtered and paged
  - Time filters without an offset are read as UTC
  - The connection address wins over a client-supplied ip_address
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from starlette.requests import Request

from electoral.domain.audit import AuditAction, AuditRecord
from electoral.interfaces.api.http.routers.audit import _recorded_address
from electoral.interfaces.api.http.schemas.audit import AuditLogReq

pytestmark = pytest.mark.unit


def test_ingest_records_for_caller(client, stores, admin_headers):
    res = client.post(
        "/v1/audit-log",
        json={
            "action": "position_create",
            "entity_type": "position",
            "entity_id": "pos-7",
            "details": {"title": "Welfare Director"},
        },
        headers=admin_headers,
    )

    assert res.status_code == 202
    assert res.json() == {"accepted": True}
    assert len(stores.audit.records) == 1
    record = stores.audit.records[0]
    assert record.user_id == "admin-1"
    assert record.action is AuditAction.POSITION_CREATE
    assert record.details == {"title": "Welfare Director"}


def test_ingest_with_matching_user_id_is_accepted(client, stores, admin_headers):
    res = client.post(
        "/v1/audit-log",
        json={"action": "admin_login", "user_id": "admin-1"},
        headers=admin_headers,
    )
    assert res.status_code == 202
    assert stores.audit.records[0].action is AuditAction.ADMIN_LOGIN


def test_ingest_for_someone_else_is_403(client, stores, admin_headers):
    res = client.post(
        "/v1/audit-log",
        json={"action": "admin_login", "user_id": "admin-2"},
        headers=admin_headers,
    )

    assert res.status_code == 403
    assert res.json()["code"] == "FORBIDDEN"
    assert stores.audit.records == ()


def test_ingest_unknown_action_is_422(client, stores, admin_headers):
    res = client.post(
        "/v1/audit-log", json={"action": "drop_tables"}, headers=admin_headers
    )

    assert res.status_code == 422
    assert res.json()["code"] == "VALIDATION_ERROR"
    assert stores.audit.records == ()


def test_ingest_signed_out_is_401(client, stores):
    res = client.post("/v1/audit-log", json={"action": "admin_login"})

    assert res.status_code == 401
    assert stores.audit.records == ()


def _seed_records(stores, count: int) -> None:
    for i in range(count):
        stores.audit._records.append(
            AuditRecord(
                id=uuid4(),
                user_id="admin-1" if i % 2 == 0 else "admin-2",
                action=AuditAction.PROMOTE_CANDIDATE
                if i % 2 == 0
                else AuditAction.ASPIRANT_REVIEW,
                entity_type="aspirant",
                entity_id=f"a-{i}",
            )
        )


def test_admin_listing_requires_admin(client, stores, voter_headers):
    _seed_records(stores, 2)

    signed_out = client.get("/v1/admin/audit")
    voter = client.get("/v1/admin/audit", headers=voter_headers)

    assert signed_out.status_code == 401
    assert voter.status_code == 403
    assert voter.json()["detail"] == "You don't have permission to view this page."


def test_admin_listing_filters_by_action(client, stores, admin_headers):
    _seed_records(stores, 4)

    res = client.get(
        "/v1/admin/audit",
        params={"action": "promote_candidate"},
        headers=admin_headers,
    )

    assert res.status_code == 200
    records = res.json()["records"]
    assert len(records) == 2
    assert {r["action"] for r in records} == {"promote_candidate"}
    assert [r["entity_id"] for r in records] == ["a-2", "a-0"]
    assert res.json()["next_offset"] is None


def test_admin_listing_pages(client, stores, admin_headers):
    _seed_records(stores, 3)

    first = client.get(
        "/v1/admin/audit", params={"limit": 2}, headers=admin_headers
    ).json()
    second = client.get(
        "/v1/admin/audit",
        params={"limit": 2, "offset": first["next_offset"]},
        headers=admin_headers,
    ).json()

    assert first["next_offset"] == 2
    assert [r["entity_id"] for r in first["records"]] == ["a-2", "a-1"]
    assert [r["entity_id"] for r in second["records"]] == ["a-0"]
    assert second["next_offset"] is None


def test_admin_listing_rejects_inverted_window(client, admin_headers):
    res = client.get(
        "/v1/admin/audit",
        params={
            "start_at": "2026-03-02T00:00:00+00:00",
            "end_at": "2026-03-01T00:00:00+00:00",
        },
        headers=admin_headers,
    )
    assert res.status_code == 422


def test_admin_listing_rejects_unknown_action_filter(client, admin_headers):
    res = client.get(
        "/v1/admin/audit", params={"action": "nope"}, headers=admin_headers
    )
    assert res.status_code == 422


def test_admin_listing_reads_naive_window_as_utc(client, stores, admin_headers):
    stores.audit._records.append(
        AuditRecord(
            id=uuid4(),
            user_id="admin-1",
            action=AuditAction.ADMIN_LOGIN,
            created_at=datetime.now(timezone.utc),
        )
    )

    res = client.get(
        "/v1/admin/audit",
        params={"start_at": "2020-01-01T00:00:00"},
        headers=admin_headers,
    )
    empty = client.get(
        "/v1/admin/audit",
        params={"end_at": "2020-01-01T00:00:00"},
        headers=admin_headers,
    )

    assert res.status_code == 200
    assert [r["action"] for r in res.json()["records"]] == ["admin_login"]
    assert empty.status_code == 200
    assert empty.json()["records"] == []


def test_admin_listing_mixed_window_is_compared_in_utc(client, admin_headers):
    res = client.get(
        "/v1/admin/audit",
        params={
            "start_at": "2026-03-01T10:00:00",
            "end_at": "2026-03-01T10:30:00+01:00",
        },
        headers=admin_headers,
    )
    assert res.status_code == 422


def test_ingest_keeps_connection_address_over_body(client, stores, admin_headers):
    res = client.post(
        "/v1/audit-log",
        json={"action": "admin_login", "ip_address": "203.0.113.9"},
        headers=admin_headers,
    )

    assert res.status_code == 202
    assert stores.audit.records[0].ip_address == "testclient"


def test_ingest_rejects_malformed_ip_address(client, stores, admin_headers):
    res = client.post(
        "/v1/audit-log",
        json={"action": "admin_login", "ip_address": "not-an-ip"},
        headers=admin_headers,
    )

    assert res.status_code == 422
    assert stores.audit.records == ()


def test_body_ip_address_is_used_when_transport_hides_client():
    request = Request({"type": "http", "headers": [], "client": None})
    req = AuditLogReq(action="admin_login", ip_address="203.0.113.9")

    assert _recorded_address(request, req) == "203.0.113.9"
    assert _recorded_address(request, AuditLogReq(action="admin_login")) is None
