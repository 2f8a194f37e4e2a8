"""
Name: Postgres Repository Tests (fake pool)

Responsibilities:
  - SQL shape: application insert, compare-and-set UPDATE, candidate
    insert on promotion
  - Audit listing is ordered by seq and paged
  - Driver failures surface as DatabaseError

Notes:
  - _FakePool mimics psycopg_pool.AsyncConnectionPool.connection() and
    returns queued rows; no database is needed.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from electoral.crosscutting.exceptions import DatabaseError
from electoral.domain.audit import AuditAction, AuditRecord
from electoral.domain.entities import Aspirant, AspirantUpdate, Department
from electoral.domain.lifecycle import AspirantStatus
from electoral.infrastructure.repositories.postgres import (
    PostgresAspirantRepository,
    PostgresAuditRecordRepository,
    PostgresPositionRepository,
    PostgresRoleAssignmentRepository,
)

pytestmark = pytest.mark.unit

_NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


class _FakeCursor:
    def __init__(self, rows):
        self._rows = rows

    async def fetchone(self):
        return self._rows[0] if self._rows else None

    async def fetchall(self):
        return list(self._rows)


class _FakeConnection:
    def __init__(self, results, fail_with=None):
        self._results = results
        self._fail_with = fail_with
        self.executed: list[tuple[str, tuple]] = []

    async def execute(self, query, params=()):
        if self._fail_with is not None:
            raise self._fail_with
        self.executed.append((" ".join(query.split()), tuple(params)))
        return _FakeCursor(self._results.pop(0) if self._results else [])

    @asynccontextmanager
    async def transaction(self):
        yield


class _FakePool:
    def __init__(self, *results, fail_with=None):
        self.conn = _FakeConnection(list(results), fail_with)

    @asynccontextmanager
    async def connection(self):
        yield self.conn


def _aspirant_row(aspirant_id, position_id, status="promoted"):
    return (
        aspirant_id,
        None,
        "Adaeze Okafor",
        "19/08NUR012",
        "Nursing Sciences",
        position_id,
        3.5,
        status,
        status == "promoted",
        False,
        None,
        None,
        None,
        None,
        _NOW,
        _NOW,
    )


@pytest.mark.asyncio
async def test_submit_inserts_submitted_application():
    aspirant_id, position_id = uuid4(), uuid4()
    pool = _FakePool([_aspirant_row(aspirant_id, position_id, status="submitted")])
    repo = PostgresAspirantRepository(pool)

    stored = await repo.submit(
        Aspirant(
            id=aspirant_id,
            full_name="Adaeze Okafor",
            matric="19/08NUR012",
            department=Department.NURSING_SCIENCES,
            position_id=position_id,
            cgpa=3.5,
            status=AspirantStatus.SUBMITTED,
            user_id="student-1",
        )
    )

    assert stored.status is AspirantStatus.SUBMITTED
    assert stored.is_public is False
    sql, params = pool.conn.executed[0]
    assert sql.startswith("INSERT INTO aspirant_applications")
    assert "RETURNING id, user_id" in sql
    assert params == (
        aspirant_id,
        "student-1",
        "Adaeze Okafor",
        "19/08NUR012",
        "Nursing Sciences",
        position_id,
        3.5,
        "submitted",
    )


@pytest.mark.asyncio
async def test_submit_failure_becomes_database_error(make_aspirant):
    repo = PostgresAspirantRepository(_FakePool(fail_with=OSError("down")))

    with pytest.raises(DatabaseError):
        await repo.submit(make_aspirant(status=AspirantStatus.SUBMITTED))


@pytest.mark.asyncio
async def test_transition_is_compare_and_set_and_creates_candidate():
    aspirant_id, position_id = uuid4(), uuid4()
    pool = _FakePool([_aspirant_row(aspirant_id, position_id)], [])
    repo = PostgresAspirantRepository(pool)

    aspirant = await repo.apply_transition(
        aspirant_id,
        expected_status=AspirantStatus.SCREENED,
        update=AspirantUpdate(status=AspirantStatus.PROMOTED, is_public=True),
    )

    assert aspirant.status is AspirantStatus.PROMOTED
    update_sql, update_params = pool.conn.executed[0]
    assert "WHERE id = %s AND status = %s" in update_sql
    assert update_params == ("promoted", True, aspirant_id, "screened")
    insert_sql, insert_params = pool.conn.executed[1]
    assert "INSERT INTO candidates" in insert_sql
    assert "ON CONFLICT (aspirant_id) DO NOTHING" in insert_sql
    assert insert_params[1] == aspirant_id


@pytest.mark.asyncio
async def test_transition_miss_returns_none_without_candidate():
    pool = _FakePool([])
    repo = PostgresAspirantRepository(pool)

    result = await repo.apply_transition(
        uuid4(),
        expected_status=AspirantStatus.SCREENED,
        update=AspirantUpdate(status=AspirantStatus.PROMOTED, is_public=True),
    )

    assert result is None
    assert len(pool.conn.executed) == 1


@pytest.mark.asyncio
async def test_driver_failure_becomes_database_error():
    repo = PostgresAspirantRepository(_FakePool(fail_with=OSError("connection reset")))

    with pytest.raises(DatabaseError):
        await repo.get_aspirant(uuid4())


@pytest.mark.asyncio
async def test_position_without_minimum_reads_as_zero():
    position_id = uuid4()
    repo = PostgresPositionRepository(_FakePool([(position_id, "Welfare", None)]))

    requirement = await repo.get_requirement(position_id)

    assert requirement.position_name == "Welfare"
    assert requirement.min_cgpa == 0.0


@pytest.mark.asyncio
async def test_role_lookup_reads_user_roles():
    pool = _FakePool([(1,)], [])
    repo = PostgresRoleAssignmentRepository(pool)

    assert await repo.has_assignment("admin-1", "admin") is True
    assert await repo.has_assignment("voter-1", "admin") is False
    assert pool.conn.executed[0][1] == ("admin-1", "admin")


@pytest.mark.asyncio
async def test_audit_append_returns_db_timestamp():
    pool = _FakePool([(_NOW,)])
    repo = PostgresAuditRecordRepository(pool)
    record = AuditRecord(
        id=uuid4(), user_id="admin-1", action=AuditAction.PROMOTE_CANDIDATE
    )

    stored = await repo.append(record)

    assert stored.created_at == _NOW
    sql, params = pool.conn.executed[0]
    assert sql.startswith("INSERT INTO audit_logs")
    assert params[2] == "promote_candidate"


@pytest.mark.asyncio
async def test_audit_list_orders_by_seq_and_pages():
    record_id = uuid4()
    pool = _FakePool(
        [(record_id, "admin-1", "admin_login", None, None, None, None, _NOW)]
    )
    repo = PostgresAuditRecordRepository(pool)

    records = await repo.list_records(user_id="admin-1", limit=10, offset=20)

    assert [r.id for r in records] == [record_id]
    assert records[0].details == {}
    sql, params = pool.conn.executed[0]
    assert "WHERE user_id = %s" in sql
    assert "ORDER BY seq DESC" in sql
    assert params == ("admin-1", 10, 20)


@pytest.mark.asyncio
async def test_audit_append_failure_becomes_database_error():
    repo = PostgresAuditRecordRepository(_FakePool(fail_with=OSError("down")))
    record = AuditRecord(id=uuid4(), user_id="admin-1", action=AuditAction.ADMIN_LOGIN)

    with pytest.raises(DatabaseError):
        await repo.append(record)
