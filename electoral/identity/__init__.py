"""
Identity boundary: sessions, role resolution and the authorization guard.
"""

from .guard import AuthorizationGuard, GuardDecision, GuardState
from .roles import AppRole, RoleResolver
from .session import Identity, LocalSessionProvider, SessionProvider, Subscription

__all__ = [
    "AppRole",
    "AuthorizationGuard",
    "GuardDecision",
    "GuardState",
    "Identity",
    "LocalSessionProvider",
    "RoleResolver",
    "SessionProvider",
    "Subscription",
]
