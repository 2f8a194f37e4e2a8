"""
Name: Access Token Tests

Responsibilities:
  - Issue and decode HS256 access tokens
  - Reject expired, tampered or incomplete tokens with 401
  - Extract tokens from the Authorization header or the cookie
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest

from electoral.crosscutting.error_responses import AppHTTPException, ErrorCode
from electoral.identity.session import Identity
from electoral.identity.tokens import (
    JWT_ALGORITHM,
    AuthSettings,
    create_access_token,
    decode_access_token,
    extract_access_token,
)

pytestmark = pytest.mark.unit

_SETTINGS = AuthSettings(
    jwt_secret="test-secret", jwt_access_ttl_minutes=30, jwt_cookie_name="access_token"
)


def test_round_trip_preserves_subject_and_email():
    token, expires_in = create_access_token(
        Identity(user_id="admin-1", email="admin@cohssa.test"), settings=_SETTINGS
    )

    identity = decode_access_token(token, settings=_SETTINGS)

    assert expires_in == 30 * 60
    assert identity == Identity(user_id="admin-1", email="admin@cohssa.test")


def test_token_does_not_carry_roles():
    token, _ = create_access_token(Identity(user_id="admin-1"), settings=_SETTINGS)
    payload = jwt.decode(token, "test-secret", algorithms=[JWT_ALGORITHM])
    assert "role" not in payload
    assert "roles" not in payload


def test_wrong_secret_is_unauthorized():
    token, _ = create_access_token(Identity(user_id="admin-1"), settings=_SETTINGS)
    other = AuthSettings("other-secret", 30, "access_token")

    with pytest.raises(AppHTTPException) as exc_info:
        decode_access_token(token, settings=other)

    assert exc_info.value.status_code == 401
    assert exc_info.value.code is ErrorCode.UNAUTHORIZED


def test_expired_token_is_unauthorized():
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {
            "sub": "admin-1",
            "iat": int(past.timestamp()),
            "exp": int((past + timedelta(minutes=5)).timestamp()),
        },
        "test-secret",
        algorithm=JWT_ALGORITHM,
    )

    with pytest.raises(AppHTTPException) as exc_info:
        decode_access_token(token, settings=_SETTINGS)

    assert exc_info.value.status_code == 401
    assert "expired" in exc_info.value.detail


def test_missing_subject_is_unauthorized():
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode(
        {"exp": int(exp.timestamp())}, "test-secret", algorithm=JWT_ALGORITHM
    )
    with pytest.raises(AppHTTPException):
        decode_access_token(token, settings=_SETTINGS)


def test_non_access_token_type_is_unauthorized():
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode(
        {"sub": "admin-1", "exp": int(exp.timestamp()), "typ": "refresh"},
        "test-secret",
        algorithm=JWT_ALGORITHM,
    )
    with pytest.raises(AppHTTPException):
        decode_access_token(token, settings=_SETTINGS)


def test_extract_prefers_bearer_header_over_cookie():
    request = SimpleNamespace(cookies={"access_token": "from-cookie"})

    assert extract_access_token(request, "Bearer from-header") == "from-header"
    assert extract_access_token(request, None) == "from-cookie"
    assert extract_access_token(request, "Basic abc") == "from-cookie"


def test_extract_without_any_token():
    assert extract_access_token(SimpleNamespace(cookies={}), None) is None
