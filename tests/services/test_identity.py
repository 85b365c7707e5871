# tests/services/test_identity.py
"""Tests for registration, login and public key lookup."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from secureshare.core.errors import DuplicateIdentity, InvalidCredentials, InvalidInput, NotFound
from secureshare.entities import PublicKeyInfo
from secureshare.services import IdentityService
from tests.helpers import TEST_BCRYPT_ROUNDS


class TestRegister:
    def test_register_then_login_resolves_same_user(self, identity, token_service) -> None:
        user = identity.register("alice", "password123", "pubkeyA")

        token = identity.login("alice", "password123")

        assert token_service.verify(token) == user.id

    def test_password_is_hashed_not_stored(self, identity, store) -> None:
        identity.register("alice", "password123", "pubkeyA")

        stored = store.get_user_by_username("alice")
        assert stored.password_hash != "password123"
        assert stored.password_hash.startswith("$2b$")
        assert "password123" not in repr(stored)

    def test_optional_signing_key_is_kept(self, alice) -> None:
        assert alice.public_key_sign == "signkeyA"

    @pytest.mark.parametrize(
        ("username", "password", "public_key"),
        [("", "password123", "pk"), ("alice", "", "pk"), ("alice", "password123", "")],
    )
    def test_empty_fields_rejected(self, identity, store, username, password, public_key) -> None:
        with pytest.raises(InvalidInput):
            identity.register(username, password, public_key)
        assert store.list_users() == []

    def test_duplicate_username_rejected(self, identity, alice) -> None:
        with pytest.raises(DuplicateIdentity):
            identity.register("alice", "differentpass", "pubkeyZ")

    def test_store_is_final_arbiter_without_precheck(self, store, token_service) -> None:
        service = IdentityService(
            store, token_service, bcrypt_rounds=TEST_BCRYPT_ROUNDS, precheck_duplicates=False
        )
        service.register("alice", "password123", "pubkeyA")

        with pytest.raises(DuplicateIdentity):
            service.register("alice", "password123", "pubkeyA")

    def test_concurrent_registration_single_winner(self, identity, store) -> None:
        attempts = 6
        barrier = threading.Barrier(attempts)

        def attempt(i: int) -> str:
            barrier.wait()
            try:
                identity.register("racer", f"password-{i}", f"pubkey-{i}")
            except DuplicateIdentity:
                return "duplicate"
            return "created"

        with ThreadPoolExecutor(max_workers=attempts) as pool:
            outcomes = list(pool.map(attempt, range(attempts)))

        assert outcomes.count("created") == 1
        assert outcomes.count("duplicate") == attempts - 1
        assert [u.username for u in store.list_users()] == ["racer"]

    def test_password_over_72_bytes_rejected(self, identity, store) -> None:
        with pytest.raises(InvalidInput):
            identity.register("alice", "a" * 72 + "secret", "pubkeyA")
        # Multi-byte characters count by their encoded size.
        with pytest.raises(InvalidInput):
            identity.register("alice", "\u00e9" * 37, "pubkeyA")

        assert store.list_users() == []

    def test_password_of_exactly_72_bytes_accepted(self, identity) -> None:
        password = "a" * 72
        identity.register("alice", password, "pubkeyA")
        assert identity.login("alice", password)


class TestLogin:
    def test_wrong_password_and_unknown_user_are_indistinguishable(self, identity, alice) -> None:
        with pytest.raises(InvalidCredentials) as wrong_password:
            identity.login("alice", "not-the-password")
        with pytest.raises(InvalidCredentials) as unknown_user:
            identity.login("mallory", "password123")

        assert type(wrong_password.value) is type(unknown_user.value)
        assert wrong_password.value.to_response() == unknown_user.value.to_response()
        assert str(wrong_password.value) == str(unknown_user.value)

    def test_password_extended_past_72_bytes_does_not_match(self, identity) -> None:
        prefix = "a" * 71
        identity.register("carol", prefix + "x", "pubkeyC")

        with pytest.raises(InvalidCredentials):
            identity.login("carol", prefix + "x" + "WRONG")

    def test_login_is_case_sensitive_on_username(self, identity, alice) -> None:
        with pytest.raises(InvalidCredentials):
            identity.login("Alice", "password123")


class TestPublicKeys:
    def test_get_public_key(self, identity, alice) -> None:
        info = identity.get_public_key("alice")
        assert info == PublicKeyInfo(username="alice", public_key="pubkeyA", public_key_sign="signkeyA")

    def test_get_public_key_unknown_user(self, identity) -> None:
        with pytest.raises(NotFound):
            identity.get_public_key("nobody")

    def test_list_users_is_public_projection(self, identity, alice, bob) -> None:
        listed = identity.list_users()

        assert [info.username for info in listed] == ["alice", "bob"]
        assert all(isinstance(info, PublicKeyInfo) for info in listed)
        assert not any(hasattr(info, "password_hash") for info in listed)

    def test_list_users_empty(self, identity) -> None:
        assert identity.list_users() == []
