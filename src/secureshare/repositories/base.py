"""Storage capabilities implemented by every backend.

Both backends must be interchangeable: the same calls produce the same
results and the same error types.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from secureshare.core.deadline import Deadline
from secureshare.entities import Transfer, User

__all__ = ["Store", "TransferStore", "UserStore"]


class UserStore(ABC):
    """Owns User records and is the final arbiter of username uniqueness."""

    @abstractmethod
    def create_user(self, user: User, *, deadline: Deadline | None = None) -> User:
        """Insert ``user``.

        Raises:
            DuplicateIdentity: the username is already taken.
            StorageUnavailable: the backing store failed or the deadline expired.
        """

    @abstractmethod
    def get_user_by_username(self, username: str, *, deadline: Deadline | None = None) -> User:
        """Return the user named ``username`` or raise ``NotFound``."""

    @abstractmethod
    def get_user_by_id(self, user_id: uuid.UUID, *, deadline: Deadline | None = None) -> User:
        """Return the user with ``user_id`` or raise ``NotFound``."""

    @abstractmethod
    def list_users(self, *, deadline: Deadline | None = None) -> list[User]:
        """Return every user ordered by username ascending."""


class TransferStore(ABC):
    """Owns Transfer records. There is no update or delete."""

    @abstractmethod
    def create_transfer(self, transfer: Transfer, *, deadline: Deadline | None = None) -> Transfer:
        """Insert ``transfer``; both user ids are assumed valid."""

    @abstractmethod
    def get_transfers_by_dest_user(
        self, dest_user_id: uuid.UUID, *, deadline: Deadline | None = None
    ) -> list[Transfer]:
        """Return transfers addressed to ``dest_user_id``, most recent first."""


class Store(UserStore, TransferStore, ABC):
    """Aggregate capability used to wire services."""

    def close(self) -> None:
        """Release backend resources."""
