"""Business logic services for the SecureShare application."""

from .authorization import AuthorizationGuard
from .identity import IdentityService
from .object_storage import ObjectStorage, S3ObjectStorage, build_object_storage
from .transfers import NewTransfer, TransferService

__all__ = [
    "AuthorizationGuard",
    "IdentityService",
    "NewTransfer",
    "ObjectStorage",
    "S3ObjectStorage",
    "TransferService",
    "build_object_storage",
]
