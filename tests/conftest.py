# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from secureshare.container import AppContainer, build_container
from secureshare.core.settings import Settings
from secureshare.core.tokens import TokenService
from secureshare.db.session import build_engine, build_sessionmaker, create_tables
from secureshare.entities import User
from secureshare.main import create_app
from secureshare.repositories import InMemoryStore, SqlStore, Store
from secureshare.services import AuthorizationGuard, IdentityService, TransferService
from tests.helpers import TEST_BCRYPT_ROUNDS, TEST_SECRET, make_settings


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


def _sql_store(tmp_path) -> SqlStore:
    settings = make_settings(tmp_path, STORE_BACKEND="sql")
    engine = build_engine(settings)
    create_tables(engine)
    return SqlStore(build_sessionmaker(engine))


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest, tmp_path) -> Iterator[Store]:
    """Every store-level property runs against both backends."""
    backend: Store = InMemoryStore() if request.param == "memory" else _sql_store(tmp_path)
    try:
        yield backend
    finally:
        backend.close()


@pytest.fixture()
def token_service() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture()
def identity(store: Store, token_service: TokenService) -> IdentityService:
    return IdentityService(store, token_service, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture()
def transfers(store: Store) -> TransferService:
    return TransferService(store)


@pytest.fixture()
def guard(store: Store, token_service: TokenService) -> AuthorizationGuard:
    return AuthorizationGuard(token_service, store)


@pytest.fixture()
def alice(identity: IdentityService) -> User:
    return identity.register("alice", "password123", "pubkeyA", "signkeyA")


@pytest.fixture()
def bob(identity: IdentityService) -> User:
    return identity.register("bob", "hunter2hunter2", "pubkeyB")


@pytest.fixture()
def container(test_settings: Settings, store: Store) -> AppContainer:
    return build_container(test_settings, store=store)


@pytest.fixture()
def app(container: AppContainer) -> FastAPI:
    return create_app(container=container)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client
