"""
Name: Aspirant Use Case Tests

Responsibilities:
  - Each lifecycle step writes the expected fields and status
  - Preconditions (state, schedule, reason) are enforced before any write
  - A concurrent change between read and write is reported, not overwritten

Collaborators:
  - application.usecases.aspirants.*
  - infrastructure.repositories.in_memory (aspirants, positions)
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from electoral.application.usecases.aspirants import (
    CompleteScreeningUseCase,
    DisqualifyAspirantUseCase,
    PromoteCandidateUseCase,
    ReviewAspirantUseCase,
    ScheduleScreeningUseCase,
    VerifyPaymentUseCase,
)
from electoral.crosscutting.exceptions import (
    IneligibleError,
    InputValidationError,
    InvalidStateError,
    NotFoundError,
)
from electoral.domain.entities import PositionRequirement, ScreeningOutcome
from electoral.domain.lifecycle import AspirantStatus
from electoral.infrastructure.repositories.in_memory import (
    InMemoryAspirantRepository,
    InMemoryPositionRepository,
)

pytestmark = pytest.mark.unit

_SLOT = datetime(2026, 3, 14, 10, 30, tzinfo=timezone.utc)


class _RacingAspirantRepository(InMemoryAspirantRepository):
    """Another admin disqualifies the aspirant between read and write."""

    async def apply_transition(self, aspirant_id, *, expected_status, update):
        current = self._aspirants[aspirant_id]
        self._aspirants[aspirant_id] = replace(
            current, status=AspirantStatus.DISQUALIFIED
        )
        return await super().apply_transition(
            aspirant_id, expected_status=expected_status, update=update
        )


@pytest.mark.asyncio
async def test_review_moves_submitted_to_under_review(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(status=AspirantStatus.SUBMITTED))

    updated = await ReviewAspirantUseCase(repo).execute(aspirant.id, "Docs complete")

    assert updated.status is AspirantStatus.UNDER_REVIEW
    assert updated.admin_notes == "Docs complete"


@pytest.mark.asyncio
async def test_review_twice_is_invalid(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(status=AspirantStatus.UNDER_REVIEW))

    with pytest.raises(InvalidStateError):
        await ReviewAspirantUseCase(repo).execute(aspirant.id)


@pytest.mark.asyncio
async def test_schedule_screening_stores_slot_in_utc(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(status=AspirantStatus.SUBMITTED))
    lagos = timezone(timedelta(hours=1))

    updated = await ScheduleScreeningUseCase(repo).execute(
        aspirant.id, datetime(2026, 3, 14, 11, 30, tzinfo=lagos)
    )

    assert updated.status is AspirantStatus.UNDER_REVIEW
    assert updated.screening_slot == _SLOT
    assert updated.screening_slot.tzinfo is timezone.utc


@pytest.mark.asyncio
async def test_screening_can_be_rescheduled(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(
        make_aspirant(status=AspirantStatus.UNDER_REVIEW, screening_slot=_SLOT)
    )
    later = _SLOT + timedelta(days=1)

    updated = await ScheduleScreeningUseCase(repo).execute(aspirant.id, later)

    assert updated.screening_slot == later


@pytest.mark.asyncio
async def test_screened_aspirant_cannot_be_rescheduled(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(
        make_aspirant(
            status=AspirantStatus.SCREENED,
            screening_slot=_SLOT,
            screening_result=ScreeningOutcome.PASSED,
        )
    )

    with pytest.raises(InvalidStateError):
        await ScheduleScreeningUseCase(repo).execute(
            aspirant.id, _SLOT + timedelta(days=1)
        )

    stored = await repo.get_aspirant(aspirant.id)
    assert stored.status is AspirantStatus.SCREENED
    assert stored.screening_slot == _SLOT


@pytest.mark.asyncio
async def test_passed_screening_marks_screened(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(
        make_aspirant(status=AspirantStatus.UNDER_REVIEW, screening_slot=_SLOT)
    )

    updated = await CompleteScreeningUseCase(repo).execute(aspirant.id, "passed")

    assert updated.status is AspirantStatus.SCREENED
    assert updated.screening_result is ScreeningOutcome.PASSED


@pytest.mark.asyncio
async def test_failed_screening_stays_under_review(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(
        make_aspirant(status=AspirantStatus.UNDER_REVIEW, screening_slot=_SLOT)
    )

    updated = await CompleteScreeningUseCase(repo).execute(
        aspirant.id, ScreeningOutcome.FAILED, "Missing documents"
    )

    assert updated.status is AspirantStatus.UNDER_REVIEW
    assert updated.screening_result is ScreeningOutcome.FAILED
    assert updated.admin_notes == "Missing documents"


@pytest.mark.asyncio
async def test_screening_outcome_requires_a_schedule(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(status=AspirantStatus.UNDER_REVIEW))

    with pytest.raises(InvalidStateError) as exc_info:
        await CompleteScreeningUseCase(repo).execute(aspirant.id, "passed")

    assert "Schedule a screening" in exc_info.value.message


@pytest.mark.asyncio
async def test_unknown_screening_outcome_is_rejected(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(
        make_aspirant(status=AspirantStatus.UNDER_REVIEW, screening_slot=_SLOT)
    )

    with pytest.raises(InputValidationError) as exc_info:
        await CompleteScreeningUseCase(repo).execute(aspirant.id, "maybe")
    assert exc_info.value.field == "outcome"


@pytest.mark.asyncio
async def test_verify_payment_sets_and_clears_flag(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(status=AspirantStatus.UNDER_REVIEW))
    use_case = VerifyPaymentUseCase(repo)

    verified = await use_case.execute(aspirant.id)
    assert verified.payment_verified is True
    assert verified.status is AspirantStatus.UNDER_REVIEW

    withdrawn = await use_case.execute(aspirant.id, verified=False)
    assert withdrawn.payment_verified is False


@pytest.mark.asyncio
async def test_verify_payment_on_terminal_aspirant_is_invalid(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(status=AspirantStatus.DISQUALIFIED))

    with pytest.raises(InvalidStateError):
        await VerifyPaymentUseCase(repo).execute(aspirant.id)


@pytest.mark.asyncio
async def test_disqualify_requires_a_reason(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant())

    with pytest.raises(InputValidationError) as exc_info:
        await DisqualifyAspirantUseCase(repo).execute(aspirant.id, "   ")

    assert exc_info.value.field == "reason"
    assert (await repo.get_aspirant(aspirant.id)).status is AspirantStatus.SCREENED


@pytest.mark.asyncio
async def test_disqualify_stores_trimmed_reason(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant())

    updated = await DisqualifyAspirantUseCase(repo).execute(
        aspirant.id, "  Forged result slip "
    )

    assert updated.status is AspirantStatus.DISQUALIFIED
    assert updated.disqualification_reason == "Forged result slip"


@pytest.mark.asyncio
async def test_promote_creates_public_candidate(make_aspirant, position):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(cgpa=3.5))

    updated = await PromoteCandidateUseCase(
        repo, InMemoryPositionRepository([position])
    ).execute(aspirant.id)

    assert updated.status is AspirantStatus.PROMOTED
    assert updated.is_public is True
    candidates = await repo.list_public_candidates()
    assert [c.aspirant_id for c in candidates] == [aspirant.id]


@pytest.mark.asyncio
async def test_promote_below_minimum_is_ineligible(make_aspirant, position):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(cgpa=2.5))

    with pytest.raises(IneligibleError) as exc_info:
        await PromoteCandidateUseCase(
            repo, InMemoryPositionRepository([position])
        ).execute(aspirant.id)

    assert exc_info.value.shortfall == 0.5
    assert "below the minimum requirement" in exc_info.value.message
    assert await repo.list_public_candidates() == []


@pytest.mark.asyncio
async def test_promote_without_minimum_is_allowed(make_aspirant):
    open_position = PositionRequirement(uuid4(), "Welfare Director", min_cgpa=0.0)
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant(cgpa=2.1, position_id=open_position.position_id))

    updated = await PromoteCandidateUseCase(
        repo, InMemoryPositionRepository([open_position])
    ).execute(aspirant.id)

    assert updated.status is AspirantStatus.PROMOTED


@pytest.mark.asyncio
async def test_promote_unknown_position_is_not_found(make_aspirant):
    repo = InMemoryAspirantRepository()
    aspirant = repo.add(make_aspirant())

    with pytest.raises(NotFoundError) as exc_info:
        await PromoteCandidateUseCase(repo, InMemoryPositionRepository()).execute(
            aspirant.id
        )
    assert exc_info.value.resource == "Position"


@pytest.mark.asyncio
async def test_unknown_aspirant_is_not_found():
    with pytest.raises(NotFoundError) as exc_info:
        await ReviewAspirantUseCase(InMemoryAspirantRepository()).execute(uuid4())
    assert exc_info.value.resource == "Aspirant"


@pytest.mark.asyncio
async def test_concurrent_change_is_reported(make_aspirant, position):
    repo = _RacingAspirantRepository()
    aspirant = repo.add(make_aspirant(cgpa=3.5))

    with pytest.raises(InvalidStateError) as exc_info:
        await PromoteCandidateUseCase(
            repo, InMemoryPositionRepository([position])
        ).execute(aspirant.id)

    assert exc_info.value.current == "disqualified"
    assert "changed by someone else" in exc_info.value.message
    assert await repo.list_public_candidates() == []
