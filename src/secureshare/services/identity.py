"""Registration, login and public key lookup."""

from __future__ import annotations

import logging
import secrets

from secureshare.core import security
from secureshare.core.deadline import Deadline
from secureshare.core.errors import DuplicateIdentity, InvalidCredentials, InvalidInput, NotFound
from secureshare.core.tokens import TokenService
from secureshare.entities import PublicKeyInfo, User
from secureshare.repositories.base import UserStore

logger = logging.getLogger(__name__)


class IdentityService:
    """Orchestrates credential issuance and verification."""

    def __init__(
        self,
        users: UserStore,
        tokens: TokenService,
        *,
        bcrypt_rounds: int = 12,
        precheck_duplicates: bool = True,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._bcrypt_rounds = bcrypt_rounds
        self._precheck_duplicates = precheck_duplicates
        # Compared against when the username is unknown so a failed lookup
        # costs the same bcrypt work as a wrong password.
        self._dummy_hash = security.hash_password(secrets.token_urlsafe(16), rounds=bcrypt_rounds)

    def register(
        self,
        username: str,
        password: str,
        public_key: str,
        public_key_sign: str | None = None,
        *,
        deadline: Deadline | None = None,
    ) -> User:
        """Create a new user.

        The username pre-check only gives a fast answer; the store's uniqueness
        enforcement decides concurrent registrations of the same name.

        Raises:
            InvalidInput: a required field is empty or the password is too long.
            DuplicateIdentity: the username is taken.
            StorageUnavailable: the store failed.
        """
        if not username or not password or not public_key:
            raise InvalidInput("username, password and publicKey are required")
        if security.password_too_long(password):
            raise InvalidInput(f"password must be at most {security.MAX_PASSWORD_BYTES} bytes")

        if self._precheck_duplicates:
            try:
                self._users.get_user_by_username(username, deadline=deadline)
            except NotFound:
                pass
            else:
                logger.info("Registration rejected: username already taken")
                raise DuplicateIdentity(f"user '{username}' already exists")

        user = User(
            username=username,
            password_hash=security.hash_password(password, rounds=self._bcrypt_rounds),
            public_key=public_key,
            public_key_sign=public_key_sign or None,
        )
        created = self._users.create_user(user, deadline=deadline)
        logger.info("Registered user %s", created.id)
        return created

    def login(self, username: str, password: str, *, deadline: Deadline | None = None) -> str:
        """Return a session token for valid credentials.

        Unknown usernames and wrong passwords raise the same
        ``InvalidCredentials`` error.
        """
        try:
            user = self._users.get_user_by_username(username, deadline=deadline)
        except NotFound:
            security.verify_password(password, self._dummy_hash)
            logger.info("Login failed")
            raise InvalidCredentials("invalid credentials") from None

        if not security.verify_password(password, user.password_hash):
            logger.info("Login failed")
            raise InvalidCredentials("invalid credentials")

        return self._tokens.issue(user.id)

    def get_public_key(self, username: str, *, deadline: Deadline | None = None) -> PublicKeyInfo:
        """Return the public key material of ``username`` or raise ``NotFound``."""
        user = self._users.get_user_by_username(username, deadline=deadline)
        return PublicKeyInfo.from_user(user)

    def list_users(self, *, deadline: Deadline | None = None) -> list[PublicKeyInfo]:
        """Return the public projection of every user, ordered by username."""
        return [PublicKeyInfo.from_user(u) for u in self._users.list_users(deadline=deadline)]
