"""Transfer metadata and object storage URL endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from secureshare.api.v1.dependencies import ContainerDep, CurrentUserDep, DeadlineDep
from secureshare.core.errors import InvalidInput, StorageUnavailable
from secureshare.schemas.transfer import (
    DownloadUrlResponse,
    TransferCreate,
    TransferMetadata,
    UploadUrlResponse,
)
from secureshare.services.object_storage import ObjectStorage, upload_key_for

router = APIRouter(prefix="/transfers", tags=["transfers"])


def _require_object_storage(container: ContainerDep) -> ObjectStorage:
    if container.object_storage is None:
        raise StorageUnavailable("object storage is not configured")
    return container.object_storage


@router.post(
    "",
    summary="Record a new transfer",
    status_code=status.HTTP_201_CREATED,
    response_model=TransferMetadata,
)
def create_transfer(
    payload: TransferCreate,
    current_user: CurrentUserDep,
    container: ContainerDep,
    deadline: DeadlineDep,
) -> TransferMetadata:
    """Store metadata for a payload the caller already uploaded."""
    view = container.transfers.create_transfer(
        current_user, payload.to_new_transfer(), deadline=deadline
    )
    return TransferMetadata.from_view(view)


@router.get("", summary="List received transfers", response_model=list[TransferMetadata])
def list_transfers(
    current_user: CurrentUserDep,
    container: ContainerDep,
    deadline: DeadlineDep,
) -> list[TransferMetadata]:
    views = container.transfers.list_pending(current_user, deadline=deadline)
    return [TransferMetadata.from_view(view) for view in views]


@router.post("/upload-url", summary="Get a pre-signed upload URL", response_model=UploadUrlResponse)
def get_upload_url(current_user: CurrentUserDep, container: ContainerDep) -> UploadUrlResponse:
    """Issue an upload URL for a fresh object key under the caller's prefix."""
    storage = _require_object_storage(container)
    key = upload_key_for(current_user.id)
    url = storage.presign_upload(key, container.settings.upload_url_ttl_seconds)
    return UploadUrlResponse(upload_url=url, link_to_enc_file=key)


@router.get(
    "/download-url",
    summary="Get a pre-signed download URL",
    response_model=DownloadUrlResponse,
)
def get_download_url(
    current_user: CurrentUserDep,
    container: ContainerDep,
    file_key: Annotated[str | None, Query(alias="fileKey")] = None,
) -> DownloadUrlResponse:
    if not file_key:
        raise InvalidInput("query parameter 'fileKey' is required")
    storage = _require_object_storage(container)
    url = storage.presign_download(file_key, container.settings.download_url_ttl_seconds)
    return DownloadUrlResponse(download_url=url)
