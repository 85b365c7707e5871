"""Signed, time-limited bearer tokens binding a session to a user id."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from secureshare.core.errors import ConfigurationError, InvalidToken, MalformedSubject
from secureshare.core.settings import HMAC_ALGORITHMS

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)

_DECODE_OPTIONS = {
    "verify_signature": True,
    # Expiry is checked against the injected clock after decoding.
    "verify_exp": False,
    "verify_iat": True,
    "require_exp": True,
    "require_iat": True,
    "require_sub": True,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issue and verify HMAC-signed JWTs.

    The signing secret is fixed for the lifetime of the instance. Validity is
    purely a function of the signature and the embedded expiry; there is no
    revocation list.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ConfigurationError("token signing secret must not be empty")
        if algorithm not in HMAC_ALGORITHMS:
            raise ConfigurationError(f"unsupported token algorithm {algorithm!r}")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime
        self._clock = clock

    def issue(self, user_id: uuid.UUID) -> str:
        """Return a signed token asserting ``sub = user_id``."""
        now = self._clock()
        claims = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetime).timestamp()),
        }
        token: str = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return token

    def verify(self, token: str) -> uuid.UUID:
        """Validate ``token`` and return the user id it was issued for.

        Raises:
            InvalidToken: malformed, badly signed, expired, or signed with an
                algorithm outside the HMAC family.
            MalformedSubject: the subject claim is not a UUID.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as err:
            raise InvalidToken("token header could not be parsed") from err

        algorithm = header.get("alg")
        if algorithm not in HMAC_ALGORITHMS:
            logger.warning("Rejected token signed with unexpected algorithm %r", algorithm)
            raise InvalidToken(f"unexpected signing algorithm {algorithm!r}")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=list(HMAC_ALGORITHMS),
                options=_DECODE_OPTIONS,
            )
        except JWTError as err:
            raise InvalidToken(str(err)) from err

        expires_at = claims.get("exp")
        if not isinstance(expires_at, int) or isinstance(expires_at, bool):
            raise InvalidToken("expiry claim is not an integer timestamp")
        if expires_at <= int(self._clock().timestamp()):
            raise InvalidToken("token has expired")

        subject = claims.get("sub")
        try:
            return uuid.UUID(subject)
        except (TypeError, ValueError, AttributeError) as err:
            raise MalformedSubject("token subject is not a valid user id") from err
