"""
===============================================================================
CRC CARD - identity/guard.py
===============================================================================

Module:
    Authorization Guard

Responsibilities:
    - Combine the Session Provider and the Role Resolver into one decision:
      PENDING (loading), AUTHORIZED (allow) or DENIED (redirect).
    - Re-evaluate on every identity change and every required-role change.
    - Apply only the result of the most recently issued evaluation.

Collaborators:
    - identity.session.SessionProvider: identity + change subscription.
    - identity.roles.RoleResolver: role membership (RoleLookupError = denied).
    - application.lifecycle_controller: refuses to act unless AUTHORIZED.
    - interfaces/api/http/dependencies: maps DENIED to 401/403 + redirect.

Notes:
    - Evaluations are numbered. A result whose number is not the latest is
      discarded, whatever order the lookups complete in.
    - Every failure path ends in DENIED.
===============================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum

from ..crosscutting.exceptions import RoleLookupError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_guard_decision, record_stale_evaluation
from .roles import AppRole, RoleResolver
from .session import Identity, SessionProvider, Subscription


class GuardState(str, Enum):
    PENDING = "pending"
    AUTHORIZED = "authorized"
    DENIED = "denied"


@dataclass(frozen=True, slots=True)
class GuardDecision:
    """What the boundary should do: show loading, show content or redirect."""

    state: GuardState
    redirect_to: str | None = None

    @property
    def loading(self) -> bool:
        return self.state is GuardState.PENDING

    @property
    def allowed(self) -> bool:
        return self.state is GuardState.AUTHORIZED


class AuthorizationGuard:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      AuthorizationGuard

    Responsibilities:
      - Own the PENDING / AUTHORIZED / DENIED state
      - Schedule one evaluation task per trigger, numbered by generation
      - Drop results from superseded generations

    Collaborators:
      - SessionProvider, RoleResolver
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        session: SessionProvider,
        resolver: RoleResolver,
        *,
        required_role: AppRole | str | None = None,
        redirect_to: str = "/",
    ):
        self._session = session
        self._resolver = resolver
        self._required_role = AppRole(required_role) if required_role else None
        self._redirect_to = redirect_to

        self._state = GuardState.PENDING
        self._generation = 0
        self._latest: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()
        self._subscription: Subscription | None = None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------
    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def required_role(self) -> AppRole | None:
        return self._required_role

    @property
    def authenticated(self) -> bool:
        return self._session.current_identity() is not None

    def decision(self) -> GuardDecision:
        if self._state is GuardState.DENIED:
            return GuardDecision(GuardState.DENIED, self._redirect_to)
        return GuardDecision(self._state)

    # ------------------------------------------------------------------
    # Lifecycle (mount / unmount)
    # ------------------------------------------------------------------
    def mount(self) -> None:
        """Subscribe to identity changes and start the first evaluation."""
        if self._subscription is None:
            self._subscription = self._session.on_identity_change(
                self._on_identity_change
            )
        self.refresh()

    def unmount(self) -> None:
        """Release the subscription and cancel evaluations still in flight."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for task in list(self._in_flight):
            task.cancel()

    async def __aenter__(self) -> "AuthorizationGuard":
        self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------
    def refresh(self) -> asyncio.Task:
        return self._schedule(self._session.current_identity())

    def set_required_role(self, role: AppRole | str | None) -> None:
        new_role = AppRole(role) if role else None
        if new_role == self._required_role:
            return
        self._required_role = new_role
        self.refresh()

    def _on_identity_change(self, identity: Identity | None) -> None:
        self._schedule(identity)

    def _schedule(self, identity: Identity | None) -> asyncio.Task:
        self._generation += 1
        self._state = GuardState.PENDING

        task = asyncio.get_running_loop().create_task(
            self._run(self._generation, identity, self._required_role)
        )
        self._latest = task
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    # ------------------------------------------------------------------
    # Waiting for a result
    # ------------------------------------------------------------------
    async def settled(self) -> GuardDecision:
        """Wait until the latest issued evaluation has been applied."""
        while self._latest is not None:
            task = self._latest
            await asyncio.wait({task})
            if task is self._latest:
                break
        return self.decision()

    async def evaluate(self) -> GuardDecision:
        """Issue a fresh evaluation for the current identity and wait for it."""
        self.refresh()
        return await self.settled()

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    async def _run(
        self, generation: int, identity: Identity | None, role: AppRole | None
    ) -> None:
        state = await self._decide(identity, role)

        if generation != self._generation:
            record_stale_evaluation()
            logger.debug(
                "Discarded stale guard evaluation",
                extra={"generation": generation, "latest": self._generation},
            )
            return

        self._state = state
        record_guard_decision(state.value, role.value if role else None)

    async def _decide(
        self, identity: Identity | None, role: AppRole | None
    ) -> GuardState:
        if identity is None:
            return GuardState.DENIED
        if role is None:
            return GuardState.AUTHORIZED
        try:
            allowed = await self._resolver.has_role(identity, role)
        except RoleLookupError as exc:
            logger.warning(
                "Role lookup failed; denying access",
                extra={"user_id": identity.user_id, "error_id": exc.error_id},
            )
            return GuardState.DENIED
        return GuardState.AUTHORIZED if allowed else GuardState.DENIED
