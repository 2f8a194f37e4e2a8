"""
===============================================================================
CRC CARD - identity/session.py
===============================================================================

Module:
    Session Provider (contract + local implementation)

Responsibilities:
    - Expose the identity bound to the live session (or None).
    - Notify subscribers on every sign-in / sign-out / refresh, in order.
    - Hand out Subscription handles that release the listener on teardown.

Collaborators:
    - identity.guard.AuthorizationGuard: subscribes to identity changes.
    - audit.AuditRecorder: reads the acting identity.
    - interfaces/api/http/dependencies: builds one provider per request
      from the verified access token.

Notes:
    - Providers are injected into each component; there is no global
      "current user".
    - Delivery is synchronous. If a listener causes a newer event, delivery
      of the older one stops so nobody observes a stale identity after it.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated user bound to a session. Never persisted by the core."""

    user_id: str
    email: str | None = None

    def __post_init__(self) -> None:
        if not (self.user_id or "").strip():
            raise ValueError("Identity requires a non-empty user_id")


IdentityListener = Callable[[Identity | None], None]


class Subscription:
    """Handle returned by on_identity_change(); release with unsubscribe()."""

    __slots__ = ("_release", "_active")

    def __init__(self, release: Callable[[], None]):
        self._release = release
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._release()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class SessionProvider(Protocol):
    """R: Source of the acting identity."""

    def current_identity(self) -> Identity | None:
        ...

    def on_identity_change(self, callback: IdentityListener) -> Subscription:
        ...


class LocalSessionProvider:
    """
    In-process session provider.

    Used by the HTTP boundary (seeded from the access token of one request)
    and by tests, which drive sign_in/sign_out/refresh directly.
    """

    def __init__(self, identity: Identity | None = None):
        self._identity = identity
        self._listeners: list[IdentityListener] = []
        self._sequence = 0

    def current_identity(self) -> Identity | None:
        return self._identity

    def on_identity_change(self, callback: IdentityListener) -> Subscription:
        self._listeners.append(callback)

        def release() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return Subscription(release)

    def sign_in(self, identity: Identity) -> None:
        self._set(identity)

    def sign_out(self) -> None:
        self._set(None)

    def refresh(self, identity: Identity | None = None) -> None:
        """Session refresh: re-announce the current (or a renewed) identity."""
        self._set(identity if identity is not None else self._identity)

    def _set(self, identity: Identity | None) -> None:
        self._identity = identity
        self._sequence += 1
        sequence = self._sequence

        for listener in list(self._listeners):
            if sequence != self._sequence:
                break
            listener(identity)
