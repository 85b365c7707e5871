"""Explicit wiring of stores and services for one application instance."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from secureshare.core.settings import Settings
from secureshare.core.tokens import TokenService
from secureshare.db.session import build_engine, build_sessionmaker, create_tables
from secureshare.repositories import InMemoryStore, SqlStore, Store
from secureshare.services import (
    AuthorizationGuard,
    IdentityService,
    ObjectStorage,
    TransferService,
    build_object_storage,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Components shared by every request of one application."""

    settings: Settings
    store: Store
    tokens: TokenService
    identity: IdentityService
    transfers: TransferService
    guard: AuthorizationGuard
    object_storage: ObjectStorage | None = None

    def close(self) -> None:
        self.store.close()


def build_store(settings: Settings) -> Store:
    """Create the configured store backend."""
    if settings.store_backend == "sql":
        engine = build_engine(settings)
        create_tables(engine)
        logger.info("Using relational store (%s)", engine.dialect.name)
        return SqlStore(build_sessionmaker(engine))
    logger.info("Using in-memory store")
    return InMemoryStore()


def build_container(
    settings: Settings,
    *,
    store: Store | None = None,
    object_storage: ObjectStorage | None = None,
) -> AppContainer:
    """Build every component from ``settings``.

    Raises:
        ConfigurationError: the token secret is empty.
    """
    tokens = TokenService(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(minutes=settings.access_token_expire_minutes),
    )
    store = store if store is not None else build_store(settings)
    if object_storage is None:
        object_storage = build_object_storage(settings)
    return AppContainer(
        settings=settings,
        store=store,
        tokens=tokens,
        identity=IdentityService(store, tokens, bcrypt_rounds=settings.bcrypt_rounds),
        transfers=TransferService(store),
        guard=AuthorizationGuard(tokens, store),
        object_storage=object_storage,
    )
