"""Error hierarchy shared by stores, services and the HTTP boundary.

Stores raise typed failures, services translate domain failures and let
infrastructure failures through unchanged, and the API layer renders every
error as ``{"error": {"code", "message"}}`` with the class's HTTP status.
"""

from __future__ import annotations

from typing import Any


class SecureShareError(Exception):
    """Base exception for all SecureShare failures."""

    code = "INTERNAL_ERROR"
    http_status = 500
    public_message: str | None = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or self.code

    def to_response(self) -> dict[str, Any]:
        """Return the REST error envelope for this error."""
        return {
            "error": {
                "code": self.code,
                "message": self.public_message or self.message,
            }
        }


class InvalidInput(SecureShareError):
    """Request fields are missing or malformed."""

    code = "INVALID_INPUT"
    http_status = 400


class DuplicateIdentity(SecureShareError):
    """A user with this username already exists."""

    code = "DUPLICATE_IDENTITY"
    http_status = 409


class NotFound(SecureShareError):
    """Requested entity does not exist."""

    code = "NOT_FOUND"
    http_status = 404


class AuthenticationError(SecureShareError):
    """Base for authentication failures; never exposes which check failed."""

    http_status = 401


class InvalidCredentials(AuthenticationError):
    """Unknown username or wrong password."""

    code = "INVALID_CREDENTIALS"
    public_message = "invalid credentials"


class Unauthorized(AuthenticationError):
    """Request is not authenticated."""

    code = "UNAUTHORIZED"
    public_message = "unauthorized"


class InvalidToken(Unauthorized):
    """Token is malformed, unsigned, expired or uses an unexpected algorithm."""


class MalformedSubject(InvalidToken):
    """Token subject is not a well-formed user identifier."""


class StorageUnavailable(SecureShareError):
    """Backing store failed; the caller may retry."""

    code = "STORAGE_UNAVAILABLE"
    http_status = 503
    public_message = "storage temporarily unavailable"


class StorageTimeout(StorageUnavailable):
    """Operation deadline expired before the store could complete it."""

    code = "STORAGE_TIMEOUT"


class ConfigurationError(SecureShareError):
    """Server is misconfigured; fatal at startup."""

    code = "CONFIGURATION_ERROR"
    public_message = "server misconfigured"


class ObjectStorageError(SecureShareError):
    """Object storage could not issue a pre-signed URL."""

    code = "OBJECT_STORAGE_ERROR"
    http_status = 502
