"""Shared helpers for building settings and calling the API in tests."""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from secureshare.core.settings import Settings

TEST_SECRET = "test-secret-key-not-for-production"
TEST_BCRYPT_ROUNDS = 4


def make_settings(tmp_path: Path | None = None, **overrides: object) -> Settings:
    values: dict[str, object] = {
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": TEST_BCRYPT_ROUNDS,
        "STORE_BACKEND": "memory",
        "LOG_LEVEL": "DEBUG",
    }
    if tmp_path is not None:
        values["DATABASE_URL"] = f"sqlite:///{tmp_path / 'secureshare.db'}"
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


def register(client: TestClient, username: str, password: str = "password123", **extra: str):
    payload = {"username": username, "password": password, "publicKey": f"pubkey-{username}"}
    payload.update(extra)
    return client.post("/v1/users/register", json=payload)


def login_headers(client: TestClient, username: str, password: str = "password123") -> dict[str, str]:
    response = client.post("/v1/users/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
