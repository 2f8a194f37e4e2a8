"""
Name: Aspirant Lifecycle Rules Tests

Responsibilities:
  - Allowed / forbidden transitions between aspirant states
  - Terminal states refuse every further transition
"""

import pytest

from electoral.crosscutting.exceptions import InvalidStateError
from electoral.domain.lifecycle import (
    TERMINAL_STATES,
    AspirantStatus,
    can_transition,
    ensure_transition,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "current, target",
    [
        (AspirantStatus.SUBMITTED, AspirantStatus.UNDER_REVIEW),
        (AspirantStatus.UNDER_REVIEW, AspirantStatus.UNDER_REVIEW),
        (AspirantStatus.UNDER_REVIEW, AspirantStatus.SCREENED),
        (AspirantStatus.SCREENED, AspirantStatus.PROMOTED),
        (AspirantStatus.SUBMITTED, AspirantStatus.DISQUALIFIED),
        (AspirantStatus.SCREENED, AspirantStatus.DISQUALIFIED),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current, target)
    ensure_transition(current, target)


def test_screened_cannot_go_back_to_review():
    assert not can_transition(AspirantStatus.SCREENED, AspirantStatus.UNDER_REVIEW)
    with pytest.raises(InvalidStateError) as exc_info:
        ensure_transition(AspirantStatus.SCREENED, AspirantStatus.UNDER_REVIEW)
    assert exc_info.value.current == "screened"
    assert exc_info.value.attempted == "under_review"


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATES, key=lambda s: s.value))
@pytest.mark.parametrize("target", list(AspirantStatus))
def test_terminal_states_refuse_everything(terminal, target):
    assert terminal.is_terminal
    with pytest.raises(InvalidStateError) as exc_info:
        ensure_transition(terminal, target)
    assert terminal.value in exc_info.value.message


def test_non_terminal_states():
    assert not AspirantStatus.SUBMITTED.is_terminal
    assert not AspirantStatus.UNDER_REVIEW.is_terminal
    assert not AspirantStatus.SCREENED.is_terminal
