"""Shared API dependencies for authentication and service access."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request

from secureshare.container import AppContainer
from secureshare.core.deadline import Deadline
from secureshare.entities import User


def get_container(request: Request) -> AppContainer:
    """Return the container the application was built with."""
    container: AppContainer = request.app.state.container
    return container


ContainerDep = Annotated[AppContainer, Depends(get_container)]


def get_deadline(container: ContainerDep) -> Deadline:
    """Start the per-request store deadline."""
    return Deadline.after(container.settings.request_timeout_seconds)


DeadlineDep = Annotated[Deadline, Depends(get_deadline)]


def get_current_user(
    container: ContainerDep,
    deadline: DeadlineDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the authenticated user from the ``Authorization`` header.

    Raises:
        Unauthorized: missing or malformed header, invalid or expired token,
            or the token's user no longer exists.
    """
    return container.guard.authenticate(authorization, deadline=deadline)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
