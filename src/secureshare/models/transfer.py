"""SQLAlchemy model for transfer metadata."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from secureshare.db.session import Base


class TransferRow(Base):
    """Append-only record linking a sender, a recipient and a ciphertext locator."""

    __tablename__ = "transfers"
    __table_args__ = (Index("ix_transfers_dest_created", "dest_user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    source_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    dest_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    link_to_enc_file: Mapped[str] = mapped_column(Text, nullable=False)
    skb: Mapped[str] = mapped_column(Text, nullable=False)
    sig: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
