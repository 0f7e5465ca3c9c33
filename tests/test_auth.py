"""Tests for admin credential checks and session tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME
from empadas.errors import InternalError, UnauthorizedError
from empadas.services import ADMIN_ROLE, ANON_ROLE, AdminAuth


@pytest.fixture()
def auth(config) -> AdminAuth:
    return AdminAuth(config)


def test_login_returns_admin_token(auth, config):
    token = auth.login(ADMIN_USERNAME, ADMIN_PASSWORD)

    payload = jwt.decode(token, config.JWT_SECRET, algorithms=["HS256"])
    assert payload["role"] == "admin"
    assert auth.role_for_token(token) == ADMIN_ROLE


def test_token_expires_after_seven_days(config):
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    token = AdminAuth(config, clock=lambda: now).issue_token()

    payload = jwt.decode(token, config.JWT_SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert payload["exp"] == int((now + timedelta(days=7)).timestamp())


@pytest.mark.parametrize(
    "username,password",
    [(ADMIN_USERNAME, "wrong"), ("intruso", ADMIN_PASSWORD), ("", "")],
)
def test_login_mismatch_is_unauthorized(auth, username, password):
    with pytest.raises(UnauthorizedError):
        auth.login(username, password)


def test_login_lists_missing_env(config):
    config.JWT_SECRET = None
    config.ADMIN_PASSWORD = ""

    with pytest.raises(InternalError) as excinfo:
        AdminAuth(config).login(ADMIN_USERNAME, ADMIN_PASSWORD)

    assert "JWT_SECRET" in excinfo.value.message
    assert "ADMIN_PASSWORD" in excinfo.value.message
    assert "ADMIN_USERNAME" not in excinfo.value.message


def test_expired_token_is_anonymous(config):
    past = datetime.now(timezone.utc) - timedelta(days=8)
    token = AdminAuth(config, clock=lambda: past).issue_token()

    assert AdminAuth(config).role_for_token(token) == ANON_ROLE


def test_tampered_and_foreign_tokens_are_anonymous(auth, config):
    header, payload, signature = auth.issue_token().split(".")
    forged = f"{header}.{payload}.{'A' * len(signature)}"
    other_secret = jwt.encode({"role": "admin"}, "other-secret", algorithm="HS256")
    wrong_role = jwt.encode({"role": "viewer"}, config.JWT_SECRET, algorithm="HS256")

    assert auth.role_for_token(forged) == ANON_ROLE
    assert auth.role_for_token(other_secret) == ANON_ROLE
    assert auth.role_for_token(wrong_role) == ANON_ROLE
    assert auth.role_for_token(None) == ANON_ROLE
    assert auth.role_for_token("not-a-jwt") == ANON_ROLE
