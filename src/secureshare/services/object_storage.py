"""Pre-signed URLs for ciphertext blobs in object storage.

The S3 implementation loads boto3 lazily; install it with the ``storage``
extra. When no bucket is configured the presign endpoints answer 503.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Protocol

from secureshare.core.errors import InvalidInput, ObjectStorageError
from secureshare.core.settings import Settings

logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """Contract for issuing time-limited upload/download URLs."""

    def presign_upload(self, key: str, ttl_seconds: int) -> str: ...

    def presign_download(self, key: str, ttl_seconds: int) -> str: ...


def upload_key_for(user_id: uuid.UUID) -> str:
    """Return a fresh object key under the uploader's prefix."""
    return f"uploads/{user_id}/{uuid.uuid4()}"


class S3ObjectStorage:
    """``ObjectStorage`` backed by an S3 bucket."""

    def __init__(self, bucket: str, client: Any) -> None:
        self.bucket = bucket
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> S3ObjectStorage:
        import boto3

        client = boto3.client("s3", region_name=settings.aws_region)
        return cls(settings.aws_bucket_name or "", client)

    def _presign(self, operation: str, key: str, ttl_seconds: int) -> str:
        if not key:
            raise InvalidInput("object key must not be empty")
        try:
            url: str = self._client.generate_presigned_url(
                operation,
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=ttl_seconds,
            )
        except Exception as err:  # botocore raises several unrelated types
            logger.error("Failed to presign %s for %s", operation, key, exc_info=True)
            raise ObjectStorageError("could not generate pre-signed URL") from err
        return url

    def presign_upload(self, key: str, ttl_seconds: int) -> str:
        return self._presign("put_object", key, ttl_seconds)

    def presign_download(self, key: str, ttl_seconds: int) -> str:
        return self._presign("get_object", key, ttl_seconds)


def build_object_storage(settings: Settings) -> ObjectStorage | None:
    """Return the configured object storage, or ``None`` when disabled."""
    if not settings.object_storage_enabled:
        logger.info("Object storage not configured; presign endpoints disabled")
        return None
    return S3ObjectStorage.from_settings(settings)
