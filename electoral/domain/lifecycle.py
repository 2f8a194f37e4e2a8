"""
===============================================================================
CRC CARD - domain/lifecycle.py
===============================================================================

Module:
    Aspirant lifecycle state machine

Responsibilities:
    - Enumerate lifecycle states and mark the terminal ones.
    - Hold the table of allowed transitions.
    - Reject any transition not in the table (InvalidStateError).

Collaborators:
    - domain.entities.Aspirant: carries the current status.
    - application/usecases/aspirants: call ensure_transition() before writing.

Notes:
    - promoted and disqualified are terminal: no edge leaves them.
    - under_review -> under_review is allowed (rescheduling a screening,
      recording a failed screening).
===============================================================================
"""

from __future__ import annotations

from enum import Enum

from ..crosscutting.exceptions import InvalidStateError


class AspirantStatus(str, Enum):
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    SCREENED = "screened"
    PROMOTED = "promoted"
    DISQUALIFIED = "disqualified"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES: frozenset[AspirantStatus] = frozenset(
    {AspirantStatus.PROMOTED, AspirantStatus.DISQUALIFIED}
)

_ALLOWED: dict[AspirantStatus, frozenset[AspirantStatus]] = {
    AspirantStatus.SUBMITTED: frozenset(
        {
            AspirantStatus.UNDER_REVIEW,
            AspirantStatus.PROMOTED,
            AspirantStatus.DISQUALIFIED,
        }
    ),
    AspirantStatus.UNDER_REVIEW: frozenset(
        {
            AspirantStatus.UNDER_REVIEW,
            AspirantStatus.SCREENED,
            AspirantStatus.PROMOTED,
            AspirantStatus.DISQUALIFIED,
        }
    ),
    AspirantStatus.SCREENED: frozenset(
        {AspirantStatus.PROMOTED, AspirantStatus.DISQUALIFIED}
    ),
    AspirantStatus.PROMOTED: frozenset(),
    AspirantStatus.DISQUALIFIED: frozenset(),
}


def can_transition(current: AspirantStatus, target: AspirantStatus) -> bool:
    return target in _ALLOWED[current]


def ensure_transition(current: AspirantStatus, target: AspirantStatus) -> None:
    """
    Raise InvalidStateError unless current -> target is allowed.

    Terminal states get a dedicated message so the admin console can say
    why nothing happened.
    """
    if can_transition(current, target):
        return
    if current.is_terminal:
        raise InvalidStateError(
            current.value,
            target.value,
            f"Aspirant is already {current.value}; no further changes are allowed.",
        )
    raise InvalidStateError(current.value, target.value)
