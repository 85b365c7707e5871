"""Domain records exchanged between stores, services and the API layer."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class User:
    """Registered identity. ``password_hash`` never leaves the server."""

    username: str
    password_hash: str = field(repr=False)
    public_key: str
    public_key_sign: str | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Transfer:
    """Immutable metadata for one encrypted payload sent between two users."""

    source_user_id: uuid.UUID
    dest_user_id: uuid.UUID
    link_to_enc_file: str
    skb: str
    sig: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class PublicKeyInfo:
    """Public projection of a user: what other clients may see."""

    username: str
    public_key: str
    public_key_sign: str | None = None

    @classmethod
    def from_user(cls, user: User) -> PublicKeyInfo:
        return cls(
            username=user.username,
            public_key=user.public_key,
            public_key_sign=user.public_key_sign,
        )


@dataclass(frozen=True)
class TransferView:
    """A transfer with both endpoints resolved to usernames."""

    transfer: Transfer
    source_username: str
    dest_username: str
