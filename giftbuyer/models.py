"""Data types shared by the gift buying services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class StarGift:
    """A star gift offered for sale, priced in stars."""

    id: int
    stars: int


@dataclass(frozen=True)
class User:
    """A user account that can receive gifts."""

    id: int
    access_hash: int = 0
    first_name: str = ""
    last_name: str = ""
    username: str = ""


@dataclass(frozen=True)
class Channel:
    """A channel that can receive gifts."""

    id: int
    access_hash: int = 0
    title: str = ""
    username: str = ""


@dataclass(frozen=True)
class ResolvedPeer:
    """The users and chats returned when a username is resolved."""

    users: tuple[User, ...] = ()
    chats: tuple[object, ...] = ()


@dataclass
class GiftRequire:
    """A gift together with how many to buy and where to send them."""

    gift: StarGift
    count_for_buy: int
    receiver_type: list[int] = field(default_factory=list)
    hide: bool = False


@dataclass(frozen=True)
class GiftResult:
    """The outcome of one purchase attempt."""

    gift_id: int
    success: bool
    error: BaseException | None = None


@dataclass
class GiftSummary:
    """Running totals of requested and bought copies of one gift."""

    gift_id: int
    requested: int
    success: int = 0


@dataclass(frozen=True)
class InputPeerSelf:
    """The current account as the receiver."""


@dataclass(frozen=True)
class InputPeerUser:
    """A user receiver addressed by id and access hash."""

    user_id: int
    access_hash: int


@dataclass(frozen=True)
class InputPeerChannel:
    """A channel receiver addressed by id and access hash."""

    channel_id: int
    access_hash: int


InputPeer = Union[InputPeerSelf, InputPeerUser, InputPeerChannel]


@dataclass(frozen=True)
class InvoiceStarGift:
    """An invoice for sending a star gift to a peer."""

    peer: InputPeer
    gift_id: int
    hide_name: bool = False
    message: str = ""


@dataclass(frozen=True)
class PaymentFormStars:
    """A payment form that is paid in stars."""

    form_id: int


@dataclass(frozen=True)
class PaymentFormStarGift:
    """A payment form issued for a star gift."""

    form_id: int


@dataclass(frozen=True)
class PaymentForm:
    """A regular payment form, which cannot pay for star gifts."""

    form_id: int