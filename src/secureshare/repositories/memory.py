"""In-process store guarded by a reader/writer lock."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from secureshare.core.deadline import Deadline, remaining_or_none
from secureshare.core.errors import DuplicateIdentity, NotFound, StorageTimeout
from secureshare.core.rwlock import LockTimeout, ReadWriteLock
from secureshare.entities import Transfer, User
from secureshare.repositories.base import Store

__all__ = ["InMemoryStore"]


class InMemoryStore(Store):
    """Dictionary-backed store.

    Reads run concurrently; create operations hold the write lock, so a
    record is either fully indexed or not present at all.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._users_by_id: dict[uuid.UUID, User] = {}
        self._users_by_username: dict[str, User] = {}
        self._transfers_by_dest: dict[uuid.UUID, list[Transfer]] = {}

    @contextmanager
    def _reading(self, deadline: Deadline | None, operation: str) -> Iterator[None]:
        if deadline is not None:
            deadline.check(operation)
        try:
            self._lock.acquire_read(remaining_or_none(deadline))
        except LockTimeout as err:
            raise StorageTimeout(f"deadline expired before {operation}") from err
        try:
            yield
        finally:
            self._lock.release_read()

    @contextmanager
    def _writing(self, deadline: Deadline | None, operation: str) -> Iterator[None]:
        if deadline is not None:
            deadline.check(operation)
        try:
            self._lock.acquire_write(remaining_or_none(deadline))
        except LockTimeout as err:
            raise StorageTimeout(f"deadline expired before {operation}") from err
        try:
            yield
        finally:
            self._lock.release_write()

    # --- UserStore ---

    def create_user(self, user: User, *, deadline: Deadline | None = None) -> User:
        with self._writing(deadline, "create_user"):
            if user.username in self._users_by_username:
                raise DuplicateIdentity(f"user '{user.username}' already exists")
            self._users_by_id[user.id] = user
            self._users_by_username[user.username] = user
        return user

    def get_user_by_username(self, username: str, *, deadline: Deadline | None = None) -> User:
        with self._reading(deadline, "get_user_by_username"):
            user = self._users_by_username.get(username)
        if user is None:
            raise NotFound(f"user '{username}' not found")
        return user

    def get_user_by_id(self, user_id: uuid.UUID, *, deadline: Deadline | None = None) -> User:
        with self._reading(deadline, "get_user_by_id"):
            user = self._users_by_id.get(user_id)
        if user is None:
            raise NotFound(f"user with id '{user_id}' not found")
        return user

    def list_users(self, *, deadline: Deadline | None = None) -> list[User]:
        with self._reading(deadline, "list_users"):
            users = list(self._users_by_username.values())
        return sorted(users, key=lambda u: u.username)

    # --- TransferStore ---

    def create_transfer(self, transfer: Transfer, *, deadline: Deadline | None = None) -> Transfer:
        with self._writing(deadline, "create_transfer"):
            self._transfers_by_dest.setdefault(transfer.dest_user_id, []).append(transfer)
        return transfer

    def get_transfers_by_dest_user(
        self, dest_user_id: uuid.UUID, *, deadline: Deadline | None = None
    ) -> list[Transfer]:
        with self._reading(deadline, "get_transfers_by_dest_user"):
            transfers = list(self._transfers_by_dest.get(dest_user_id, ()))
        # Stable sort over reversed insertion order: ties list the later insert first.
        return sorted(reversed(transfers), key=lambda t: t.created_at, reverse=True)
