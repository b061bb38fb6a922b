"""Builds star gift invoices for the configured receivers."""

from __future__ import annotations

import random
from typing import Iterable, Protocol, Sequence, TypeVar

from giftbuyer.models import (
    Channel,
    GiftRequire,
    InputPeer,
    InputPeerChannel,
    InputPeerSelf,
    InputPeerUser,
    InvoiceStarGift,
    User,
)

_T = TypeVar("_T")

_CHANNEL_ID_OFFSET = 1_000_000_000_000


class InvoiceError(Exception):
    """An invoice could not be created."""


class _PeerCache(Protocol):
    def get_user(self, key: str) -> User: ...

    def get_channel(self, key: str) -> Channel: ...


def convert_channel_id(channel_id: int) -> int:
    """Turn a supergroup-style id such as -100XXXXXXXXXX into a bare channel id."""
    if channel_id < -_CHANNEL_ID_OFFSET:
        return -channel_id - _CHANNEL_ID_OFFSET
    return channel_id


def _pick(items: Sequence[_T], default: _T) -> _T:
    return random.choice(items) if items else default


class InvoiceCreator:
    """Creates invoices addressed to self, a user or a channel at random."""

    def __init__(
        self,
        user_receiver: Iterable[str],
        channel_receiver: Iterable[str],
        id_cache: _PeerCache,
    ) -> None:
        self.user_receiver = list(user_receiver)
        self.channel_receiver = list(channel_receiver)
        self.id_cache = id_cache

    def create_invoice(self, gift: GiftRequire) -> InvoiceStarGift:
        """Create an invoice for ``gift`` using one of its receiver types.

        Receiver types: 0 is the current account, 1 a user, 2 a channel.
        """
        receiver_type = _pick(gift.receiver_type, 0)
        peer: InputPeer
        if receiver_type == 0:
            peer = InputPeerSelf()
        elif receiver_type == 1:
            peer = self._user_peer()
        elif receiver_type == 2:
            peer = self._channel_peer()
        else:
            raise InvoiceError(f"unexpected receiver type: {receiver_type}")
        return InvoiceStarGift(peer=peer, gift_id=gift.gift.id, hide_name=gift.hide)

    def _user_peer(self) -> InputPeerUser:
        name = _pick(self.user_receiver, "")
        try:
            user = self.id_cache.get_user(name)
        except LookupError:
            raise InvoiceError(
                "cannot create invoice without user access hash: "
                f"user {name} not accessible: session hasn't met this user. "
                "See logs for solutions."
            ) from None
        return InputPeerUser(user_id=user.id, access_hash=user.access_hash)

    def _channel_peer(self) -> InputPeerChannel:
        name = _pick(self.channel_receiver, "")
        try:
            channel = self.id_cache.get_channel(name)
        except LookupError:
            raise InvoiceError(
                "cannot create invoice without channel access hash: channel not found"
            ) from None
        return InputPeerChannel(
            channel_id=convert_channel_id(channel.id), access_hash=channel.access_hash
        )