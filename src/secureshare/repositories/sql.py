"""Relational store backed by SQLAlchemy."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from secureshare.core.deadline import Deadline
from secureshare.core.errors import DuplicateIdentity, NotFound, StorageUnavailable
from secureshare.entities import Transfer, User
from secureshare.models import TransferRow, UserRow
from secureshare.repositories.base import Store

logger = logging.getLogger(__name__)

__all__ = ["SqlStore"]


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        public_key=row.public_key,
        public_key_sign=row.public_key_sign,
        created_at=_as_utc(row.created_at),
    )


def _to_transfer(row: TransferRow) -> Transfer:
    return Transfer(
        id=row.id,
        source_user_id=row.source_user_id,
        dest_user_id=row.dest_user_id,
        link_to_enc_file=row.link_to_enc_file,
        skb=row.skb,
        sig=row.sig,
        created_at=_as_utc(row.created_at),
    )


class SqlStore(Store):
    """Store over a relational database.

    Every write touches exactly one row, so isolation is left to the
    engine's single-statement atomicity. Username uniqueness is enforced by
    the ``uq_users_username`` constraint.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self, deadline: Deadline | None, operation: str) -> Iterator[Session]:
        if deadline is not None:
            deadline.check(operation)
        session = self._session_factory()
        try:
            if deadline is not None and session.get_bind().dialect.name == "postgresql":
                timeout_ms = max(1, int(deadline.remaining() * 1000))
                session.execute(text(f"SET LOCAL statement_timeout = {timeout_ms}"))
            yield session
        except IntegrityError:
            session.rollback()
            raise
        except SQLAlchemyError as err:
            session.rollback()
            logger.error("Storage failure during %s", operation, exc_info=True)
            raise StorageUnavailable(f"{operation} failed") from err
        finally:
            session.close()

    # --- UserStore ---

    def create_user(self, user: User, *, deadline: Deadline | None = None) -> User:
        try:
            with self._session(deadline, "create_user") as session:
                session.add(
                    UserRow(
                        id=user.id,
                        username=user.username,
                        password_hash=user.password_hash,
                        public_key=user.public_key,
                        public_key_sign=user.public_key_sign,
                        created_at=user.created_at,
                    )
                )
                session.commit()
        except IntegrityError as err:
            raise DuplicateIdentity(f"user '{user.username}' already exists") from err
        return user

    def get_user_by_username(self, username: str, *, deadline: Deadline | None = None) -> User:
        with self._session(deadline, "get_user_by_username") as session:
            row = session.scalars(select(UserRow).where(UserRow.username == username)).first()
            if row is None:
                raise NotFound(f"user '{username}' not found")
            return _to_user(row)

    def get_user_by_id(self, user_id: uuid.UUID, *, deadline: Deadline | None = None) -> User:
        with self._session(deadline, "get_user_by_id") as session:
            row = session.get(UserRow, user_id)
            if row is None:
                raise NotFound(f"user with id '{user_id}' not found")
            return _to_user(row)

    def list_users(self, *, deadline: Deadline | None = None) -> list[User]:
        with self._session(deadline, "list_users") as session:
            rows = session.scalars(select(UserRow).order_by(UserRow.username.asc())).all()
            return [_to_user(row) for row in rows]

    # --- TransferStore ---

    def create_transfer(self, transfer: Transfer, *, deadline: Deadline | None = None) -> Transfer:
        try:
            with self._session(deadline, "create_transfer") as session:
                session.add(
                    TransferRow(
                        id=transfer.id,
                        source_user_id=transfer.source_user_id,
                        dest_user_id=transfer.dest_user_id,
                        link_to_enc_file=transfer.link_to_enc_file,
                        skb=transfer.skb,
                        sig=transfer.sig,
                        created_at=transfer.created_at,
                    )
                )
                session.commit()
        except IntegrityError as err:
            logger.error("Transfer %s violated a constraint", transfer.id, exc_info=True)
            raise StorageUnavailable("create_transfer failed") from err
        return transfer

    def get_transfers_by_dest_user(
        self, dest_user_id: uuid.UUID, *, deadline: Deadline | None = None
    ) -> list[Transfer]:
        with self._session(deadline, "get_transfers_by_dest_user") as session:
            rows = session.scalars(
                select(TransferRow)
                .where(TransferRow.dest_user_id == dest_user_id)
                .order_by(TransferRow.created_at.desc())
            ).all()
            return [_to_transfer(row) for row in rows]

    def close(self) -> None:
        bind = self._session_factory.kw.get("bind")
        if bind is not None:
            bind.dispose()
