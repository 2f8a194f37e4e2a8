"""
Name: Domain Entities Unit Tests

Responsibilities:
  - Department parsing (label, code, case-insensitive label)
  - Matriculation number normalization
  - AspirantUpdate change sets
  - AuditRecord invariants (actor required, closed action set)
"""

from uuid import uuid4

import pytest

from electoral.crosscutting.exceptions import InputValidationError
from electoral.domain.audit import AuditAction, AuditRecord
from electoral.domain.entities import (
    AspirantUpdate,
    Candidate,
    Department,
    ScreeningOutcome,
    validate_matric,
)
from electoral.domain.lifecycle import AspirantStatus

pytestmark = pytest.mark.unit


class TestDepartment:
    def test_parse_accepts_label_code_and_lowercase_label(self):
        assert Department.parse("Human Anatomy") is Department.HUMAN_ANATOMY
        assert Department.parse("mls") is Department.MEDICAL_LABORATORY_SCIENCES
        assert Department.parse("  medicine and surgery ") is (
            Department.MEDICINE_AND_SURGERY
        )

    def test_every_department_has_a_code(self):
        codes = {d.code for d in Department}
        assert codes == {"NSC", "MLS", "PUH", "MED", "ANA", "PHS", "BCH"}

    def test_parse_rejects_unknown_department(self):
        with pytest.raises(InputValidationError) as exc_info:
            Department.parse("Pharmacy")
        assert exc_info.value.field == "department"


class TestMatric:
    def test_normalizes_to_upper_case(self):
        assert validate_matric(" 19/08nur012 ") == "19/08NUR012"

    @pytest.mark.parametrize("value", ["", "19-08-NUR-012", "19/08NU012", "1/08NUR012"])
    def test_rejects_malformed_values(self, value):
        with pytest.raises(InputValidationError):
            validate_matric(value)


class TestAspirantUpdate:
    def test_changes_include_status_and_set_fields_only(self):
        update = AspirantUpdate(
            status=AspirantStatus.SCREENED,
            screening_result=ScreeningOutcome.PASSED,
        )
        assert update.changes() == {
            "status": AspirantStatus.SCREENED,
            "screening_result": ScreeningOutcome.PASSED,
        }

    def test_false_flags_are_written(self):
        update = AspirantUpdate(status=AspirantStatus.SUBMITTED, payment_verified=False)
        assert update.changes()["payment_verified"] is False


class TestCandidate:
    def test_from_aspirant_copies_public_fields(self, make_aspirant):
        aspirant = make_aspirant()
        candidate = Candidate.from_aspirant(uuid4(), aspirant)

        assert candidate.aspirant_id == aspirant.id
        assert candidate.name == aspirant.full_name
        assert candidate.matric == aspirant.matric
        assert candidate.department is aspirant.department
        assert candidate.created_at is not None


class TestAuditRecord:
    def test_requires_actor(self):
        with pytest.raises(ValueError):
            AuditRecord(id=uuid4(), user_id="  ", action=AuditAction.ADMIN_LOGIN)

    def test_rejects_free_form_action(self):
        with pytest.raises(TypeError):
            AuditRecord(id=uuid4(), user_id="admin-1", action="promote_candidate")

    def test_to_wire(self):
        record_id = uuid4()
        record = AuditRecord(
            id=record_id,
            user_id="admin-1",
            action=AuditAction.PROMOTE_CANDIDATE,
            entity_type="aspirant",
            entity_id="abc",
            details={"name": "Adaeze Okafor"},
        )
        wire = record.to_wire()
        assert wire["id"] == str(record_id)
        assert wire["action"] == "promote_candidate"
        assert wire["details"] == {"name": "Adaeze Okafor"}
        assert wire["created_at"] is None

    def test_action_set_is_closed(self):
        with pytest.raises(ValueError):
            AuditAction("delete_everything")
