"""Transfer creation and listing."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from secureshare.core.deadline import Deadline
from secureshare.core.errors import InvalidInput, NotFound, StorageUnavailable
from secureshare.entities import Transfer, TransferView, User
from secureshare.repositories.base import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewTransfer:
    """Caller-supplied fields of a transfer; all stored verbatim."""

    dest_username: str
    link_to_enc_file: str
    skb: str
    sig: str


class TransferService:
    """Records transfer metadata and lists what a user has received."""

    def __init__(self, store: Store) -> None:
        self._store = store

    def create_transfer(
        self,
        source: User,
        request: NewTransfer,
        *,
        deadline: Deadline | None = None,
    ) -> TransferView:
        """Persist a transfer from ``source`` to ``request.dest_username``.

        Raises:
            InvalidInput: a field is empty.
            NotFound: the destination user does not exist; nothing is written.
        """
        if not (request.dest_username and request.link_to_enc_file and request.skb and request.sig):
            raise InvalidInput("destUser, linkToEncFile, skb and sig are required")

        try:
            dest = self._store.get_user_by_username(request.dest_username, deadline=deadline)
        except NotFound:
            raise NotFound("destination user not found") from None

        transfer = Transfer(
            source_user_id=source.id,
            dest_user_id=dest.id,
            link_to_enc_file=request.link_to_enc_file,
            skb=request.skb,
            sig=request.sig,
        )
        stored = self._store.create_transfer(transfer, deadline=deadline)
        logger.info("Transfer %s created for recipient %s", stored.id, dest.id)
        return TransferView(stored, source_username=source.username, dest_username=dest.username)

    def list_pending(self, dest: User, *, deadline: Deadline | None = None) -> list[TransferView]:
        """Return transfers addressed to ``dest``, most recent first.

        A transfer whose sender cannot be resolved, because the user is gone or
        the lookup failed in storage, is logged and left out instead of failing
        the whole listing. Failures listing the transfers themselves propagate.
        """
        views: list[TransferView] = []
        senders: dict[uuid.UUID, User] = {}
        for transfer in self._store.get_transfers_by_dest_user(dest.id, deadline=deadline):
            sender = senders.get(transfer.source_user_id)
            if sender is None:
                try:
                    sender = self._store.get_user_by_id(transfer.source_user_id, deadline=deadline)
                except (NotFound, StorageUnavailable) as err:
                    logger.warning(
                        "Skipping transfer %s: sender %s could not be resolved (%s)",
                        transfer.id,
                        transfer.source_user_id,
                        err.code,
                    )
                    continue
                senders[sender.id] = sender
            views.append(
                TransferView(
                    transfer,
                    source_username=sender.username,
                    dest_username=dest.username,
                )
            )
        return views
