"""Application settings and configuration.

Settings are loaded from environment variables (or an ``.env`` file) with
sensible defaults. A ``Settings`` instance is handed to ``create_app`` and
from there to every component; nothing reads configuration globally.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application metadata
    app_name: str = Field(default="SecureShare", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Session tokens
    secret_key: str = Field(default="", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Password hashing cost; server-side only
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # Storage
    store_backend: Literal["memory", "sql"] = Field(default="memory", alias="STORE_BACKEND")
    database_url: str = Field(default="sqlite:///./secureshare.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    request_timeout_seconds: float = Field(default=10.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS")

    # Object storage for ciphertext blobs
    aws_bucket_name: str | None = Field(default=None, alias="AWS_BUCKET_NAME")
    aws_region: str | None = Field(default=None, alias="AWS_REGION")
    upload_url_ttl_seconds: int = Field(default=15 * 60, alias="UPLOAD_URL_TTL_SECONDS")
    download_url_ttl_seconds: int = Field(default=5 * 60, alias="DOWNLOAD_URL_TTL_SECONDS")

    # CORS configuration for the web frontend
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Accept", "Authorization", "Content-Type"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only symmetric HMAC signing is supported."""
        if v not in HMAC_ALGORITHMS:
            raise ValueError(f"JWT algorithm must be one of {', '.join(HMAC_ALGORITHMS)}")
        return v

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL.

        Hosting providers hand out ``postgres://``/``postgresql://`` URLs; the
        engine is built with the psycopg 3 driver.
        """
        url = self.database_url
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                return "postgresql+psycopg://" + url[len(prefix):]
        return url

    @property
    def object_storage_enabled(self) -> bool:
        return bool(self.aws_bucket_name)
