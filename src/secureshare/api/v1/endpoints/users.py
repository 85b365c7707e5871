"""User registration, login and public key endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from secureshare.api.v1.dependencies import ContainerDep, CurrentUserDep, DeadlineDep
from secureshare.schemas.user import (
    LoginRequest,
    LoginResponse,
    PublicKeyResponse,
    RegisterRequest,
    RegisterResponse,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "/register",
    summary="Register a new user",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
)
def register_user(
    payload: RegisterRequest,
    container: ContainerDep,
    deadline: DeadlineDep,
) -> RegisterResponse:
    """Create an account holding the client's public key material."""
    user = container.identity.register(
        payload.username,
        payload.password,
        payload.public_key,
        payload.public_key_sign,
        deadline=deadline,
    )
    return RegisterResponse.from_user(user)


@router.post(
    "/login",
    summary="Exchange credentials for a session token",
    response_model=LoginResponse,
)
def login_user(
    payload: LoginRequest,
    container: ContainerDep,
    deadline: DeadlineDep,
) -> LoginResponse:
    token = container.identity.login(payload.username, payload.password, deadline=deadline)
    return LoginResponse(token=token)


@router.get("", summary="List all users", response_model=list[PublicKeyResponse])
def list_users(
    current_user: CurrentUserDep,
    container: ContainerDep,
    deadline: DeadlineDep,
) -> list[PublicKeyResponse]:
    """Return every user's public key material, ordered by username."""
    return [
        PublicKeyResponse.from_info(info)
        for info in container.identity.list_users(deadline=deadline)
    ]


@router.get(
    "/{username}/key",
    summary="Fetch a user's public key",
    response_model=PublicKeyResponse,
)
def get_user_key(
    username: str,
    current_user: CurrentUserDep,
    container: ContainerDep,
    deadline: DeadlineDep,
) -> PublicKeyResponse:
    info = container.identity.get_public_key(username, deadline=deadline)
    return PublicKeyResponse.from_info(info)
