# tests/services/test_authorization.py
"""Tests for the bearer-token authorization guard."""

from __future__ import annotations

import time
import uuid

import pytest
from jose import jwt

from secureshare.core.errors import Unauthorized
from tests.helpers import TEST_SECRET


def test_valid_bearer_resolves_user(guard, token_service, alice) -> None:
    token = token_service.issue(alice.id)
    assert guard.authenticate(f"Bearer {token}") == alice


def test_scheme_is_case_insensitive(guard, token_service, alice) -> None:
    token = token_service.issue(alice.id)
    assert guard.authenticate(f"bEaReR {token}") == alice


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        "Bearer",
        "Bearer ",
        "Token abc",
        "Basic YWxpY2U6cGFzc3dvcmQ=",
        "Bearer a b",
        "Bearer  double-space",
    ],
)
def test_malformed_headers_rejected(guard, header) -> None:
    with pytest.raises(Unauthorized):
        guard.authenticate(header)


def test_invalid_token_rejected(guard) -> None:
    with pytest.raises(Unauthorized):
        guard.authenticate("Bearer not.a.token")


def test_expired_token_rejected(guard, alice) -> None:
    now = int(time.time())
    token = jwt.encode({"sub": str(alice.id), "iat": now - 7200, "exp": now - 3600}, TEST_SECRET)
    with pytest.raises(Unauthorized):
        guard.authenticate(f"Bearer {token}")


def test_token_for_missing_user_rejected(guard, token_service) -> None:
    token = token_service.issue(uuid.uuid4())
    with pytest.raises(Unauthorized):
        guard.authenticate(f"Bearer {token}")


def test_malformed_subject_rejected(guard) -> None:
    now = int(time.time())
    token = jwt.encode({"sub": "alice", "iat": now, "exp": now + 60}, TEST_SECRET)
    with pytest.raises(Unauthorized):
        guard.authenticate(f"Bearer {token}")
