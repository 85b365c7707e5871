"""Bearer-token authentication for protected requests."""

from __future__ import annotations

import logging

from secureshare.core.deadline import Deadline
from secureshare.core.errors import InvalidToken, NotFound, Unauthorized
from secureshare.core.tokens import TokenService
from secureshare.entities import User
from secureshare.repositories.base import UserStore

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    """Turns an ``Authorization`` header value into a live ``User``.

    Every failure raises ``Unauthorized``; the message is for logs only and is
    never sent to clients.
    """

    def __init__(self, tokens: TokenService, users: UserStore) -> None:
        self._tokens = tokens
        self._users = users

    def authenticate(self, authorization: str | None, *, deadline: Deadline | None = None) -> User:
        if not authorization:
            raise Unauthorized("authorization header missing")

        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
            raise Unauthorized("authorization header is not 'Bearer <token>'")

        try:
            user_id = self._tokens.verify(parts[1])
        except InvalidToken as err:
            logger.info("Rejected bearer token: %s", err.message)
            raise Unauthorized("invalid token") from err

        # Sessions must not outlive the account they were issued for.
        try:
            return self._users.get_user_by_id(user_id, deadline=deadline)
        except NotFound as err:
            logger.info("Rejected bearer token for unknown user %s", user_id)
            raise Unauthorized("token subject no longer exists") from err
