"""
===============================================================================
CRC CARD - identity/tokens.py
===============================================================================

Module:
    Access tokens (JWT)

Responsibilities:
    - Issue signed access tokens (tests, local tooling).
    - Decode and validate access tokens (signature, exp, minimal claims).
    - Extract the token from `Authorization: Bearer` or the session cookie.

Collaborators:
    - crosscutting.config.get_settings: secret, TTL, cookie name.
    - crosscutting.error_responses: standard 401.
    - interfaces/api/http/dependencies: token -> Identity -> session provider.

Notes:
    - Minimal claims: sub, email, iat, exp, typ.
    - Roles are NOT carried in the token; they are resolved per request
      through the role-assignment store.
    - Tokens and secrets are never logged.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Request

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from .session import Identity

JWT_ALGORITHM: str = "HS256"

DEFAULT_ACCESS_TOKEN_COOKIE: str = "access_token"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Auth settings snapshot."""

    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str


def get_auth_settings() -> AuthSettings:
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
        jwt_cookie_name=s.jwt_cookie_name,
    )


def create_access_token(
    identity: Identity, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Create a signed access token.

    Returns:
        (token, expires_in_seconds)
    """
    auth_settings = settings or get_auth_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(auth_settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: identity.user_id,
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
        CLAIM_TYP: TOKEN_TYPE_ACCESS,
    }
    if identity.email:
        payload[CLAIM_EMAIL] = identity.email

    token = jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_access_token(token: str, settings: AuthSettings | None = None) -> Identity:
    """Decode and validate an access token.

    Errors:
        - 401 when expired or the signature is invalid.
        - 401 when minimal claims are missing.
    """
    auth_settings = settings or get_auth_settings()

    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Session expired. Please sign in again.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Invalid access token.") from exc

    user_id = str(payload.get(CLAIM_SUB) or "").strip()
    token_type = payload.get(CLAIM_TYP)

    if not user_id:
        raise unauthorized("Invalid access token.")
    if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
        raise unauthorized("Invalid token type.")

    email = payload.get(CLAIM_EMAIL)
    return Identity(user_id=user_id, email=str(email) if email else None)


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def extract_access_token(request: Request, authorization: str | None) -> str | None:
    """Token from the Authorization header, falling back to the cookie."""
    token = _extract_bearer_token(authorization)
    if token:
        return token

    cookie_name = (
        get_auth_settings().jwt_cookie_name or ""
    ).strip() or DEFAULT_ACCESS_TOKEN_COOKIE
    return request.cookies.get(cookie_name)
