"""Transfer-related Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from secureshare.entities import TransferView
from secureshare.schemas.user import CamelModel
from secureshare.services.transfers import NewTransfer


class TransferCreate(CamelModel):
    """Request body for ``POST /transfers``; every field is opaque to the server."""

    dest_user: str = Field(..., alias="destUser", min_length=1)
    link_to_enc_file: str = Field(..., alias="linkToEncFile", min_length=1)
    skb: str = Field(..., min_length=1, description="Wrapped symmetric key")
    sig: str = Field(..., min_length=1, description="Sender signature")

    def to_new_transfer(self) -> NewTransfer:
        return NewTransfer(
            dest_username=self.dest_user,
            link_to_enc_file=self.link_to_enc_file,
            skb=self.skb,
            sig=self.sig,
        )


class TransferMetadata(CamelModel):
    """Transfer as seen by clients: endpoints are usernames, not ids."""

    transfer_id: uuid.UUID = Field(..., alias="transferId")
    source_user: str = Field(..., alias="sourceUser")
    dest_user: str = Field(..., alias="destUser")
    link_to_enc_file: str = Field(..., alias="linkToEncFile")
    skb: str
    sig: str
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_view(cls, view: TransferView) -> TransferMetadata:
        t = view.transfer
        return cls(
            transfer_id=t.id,
            source_user=view.source_username,
            dest_user=view.dest_username,
            link_to_enc_file=t.link_to_enc_file,
            skb=t.skb,
            sig=t.sig,
            created_at=t.created_at,
        )


class UploadUrlResponse(CamelModel):
    """Pre-signed upload URL and the key to send back as ``linkToEncFile``."""

    upload_url: str = Field(..., alias="uploadUrl")
    link_to_enc_file: str = Field(..., alias="linkToEncFile")


class DownloadUrlResponse(CamelModel):
    """Pre-signed download URL."""

    download_url: str = Field(..., alias="downloadUrl")
