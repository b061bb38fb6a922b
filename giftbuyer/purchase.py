"""Pays for star gifts after checking the star balance."""

from __future__ import annotations

import threading
from typing import Protocol

from giftbuyer.models import (
    GiftRequire,
    InvoiceStarGift,
    PaymentForm,
    PaymentFormStarGift,
    PaymentFormStars,
    StarGift,
)


class PurchaseError(Exception):
    """A gift purchase failed."""


class _PaymentProcessor(Protocol):
    def create_payment_form(
        self, cancel: threading.Event, gift: GiftRequire
    ) -> tuple[object, InvoiceStarGift]: ...


class _PurchaseApi(Protocol):
    def get_stars_balance(self) -> int: ...

    def send_stars_form(
        self, cancel: threading.Event, form_id: int, invoice: InvoiceStarGift
    ) -> object: ...


class PurchaseProcessor:
    """Buys a gift through a stars payment form."""

    def __init__(self, api: _PurchaseApi | None, payment_processor: _PaymentProcessor) -> None:
        self.api = api
        self.payment_processor = payment_processor

    def purchase_gift(self, cancel: threading.Event, gift: GiftRequire) -> None:
        """Buy one copy of ``gift``; raise PurchaseError on failure."""
        if not self._has_balance_for(gift.gift):
            raise PurchaseError("insufficient balance to buy gift")

        try:
            form, invoice = self.payment_processor.create_payment_form(cancel, gift)
        except Exception as exc:
            raise PurchaseError(f"failed to send stars form: {exc}") from exc

        if isinstance(form, (PaymentFormStars, PaymentFormStarGift)):
            self._send_stars_form(cancel, invoice, form.form_id)
        elif isinstance(form, PaymentForm):
            raise PurchaseError("regular payment form not supported for star gifts")
        else:
            raise PurchaseError(f"unexpected payment form type: {type(form).__name__}")

    def _send_stars_form(
        self, cancel: threading.Event, invoice: InvoiceStarGift, form_id: int
    ) -> None:
        try:
            self.api.send_stars_form(cancel, form_id, invoice)  # type: ignore[union-attr]
        except Exception as exc:
            raise PurchaseError(f"failed to send payment: {exc}") from exc

    def _has_balance_for(self, gift: StarGift) -> bool:
        if self.api is None:
            return False
        try:
            balance = self.api.get_stars_balance()
        except Exception:
            return False
        return balance >= gift.stars