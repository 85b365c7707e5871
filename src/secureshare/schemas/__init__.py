"""Request and response schemas."""

from .transfer import DownloadUrlResponse, TransferCreate, TransferMetadata, UploadUrlResponse
from .user import (
    LoginRequest,
    LoginResponse,
    PublicKeyResponse,
    RegisterRequest,
    RegisterResponse,
)

__all__ = [
    "DownloadUrlResponse",
    "LoginRequest",
    "LoginResponse",
    "PublicKeyResponse",
    "RegisterRequest",
    "RegisterResponse",
    "TransferCreate",
    "TransferMetadata",
    "UploadUrlResponse",
]
