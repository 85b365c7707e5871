"""User-related Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from secureshare.core.security import MAX_PASSWORD_BYTES
from secureshare.entities import PublicKeyInfo, User


class CamelModel(BaseModel):
    """Accepts and emits the camelCase field names used on the wire."""

    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(CamelModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=1, description="Unique, case-sensitive handle")
    password: str = Field(
        ...,
        min_length=8,
        max_length=MAX_PASSWORD_BYTES,
        description="Plaintext password, hashed server-side; at most 72 UTF-8 bytes",
    )
    public_key: str = Field(..., alias="publicKey", min_length=1, description="Opaque public key")
    public_key_sign: str | None = Field(
        None, alias="publicKeySign", description="Optional opaque signing public key"
    )


class RegisterResponse(CamelModel):
    """Registered user without any credential material."""

    id: uuid.UUID
    username: str
    public_key: str = Field(..., alias="publicKey")
    public_key_sign: str | None = Field(None, alias="publicKeySign")
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_user(cls, user: User) -> RegisterResponse:
        return cls(
            id=user.id,
            username=user.username,
            public_key=user.public_key,
            public_key_sign=user.public_key_sign,
            created_at=user.created_at,
        )


class LoginRequest(CamelModel):
    """Schema for login submissions."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    """Session token returned after a successful login."""

    token: str = Field(..., description="Signed bearer token, valid for 24 hours")


class PublicKeyResponse(CamelModel):
    """Public key material of one user."""

    username: str
    public_key: str = Field(..., alias="publicKey")
    public_key_sign: str | None = Field(None, alias="publicKeySign")

    @classmethod
    def from_info(cls, info: PublicKeyInfo) -> PublicKeyResponse:
        return cls(
            username=info.username,
            public_key=info.public_key,
            public_key_sign=info.public_key_sign,
        )
