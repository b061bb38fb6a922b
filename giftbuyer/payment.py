"""Obtains payment forms for star gift invoices."""

from __future__ import annotations

import threading
import time
from typing import Protocol, Union

from giftbuyer.models import (
    GiftRequire,
    InvoiceStarGift,
    PaymentForm,
    PaymentFormStarGift,
    PaymentFormStars,
)

AnyPaymentForm = Union[PaymentFormStars, PaymentFormStarGift, PaymentForm]


class PaymentError(Exception):
    """A payment form could not be obtained."""


class _InvoiceCreator(Protocol):
    def create_invoice(self, gift: GiftRequire) -> InvoiceStarGift: ...


class _RateLimiter(Protocol):
    def acquire(self, cancel: threading.Event) -> None: ...


class _PaymentApi(Protocol):
    def get_payment_form(
        self, cancel: threading.Event, invoice: InvoiceStarGift
    ) -> AnyPaymentForm: ...


class PaymentProcessor:
    """Creates an invoice and requests its payment form under a rate limit."""

    def __init__(
        self,
        api: _PaymentApi | None,
        invoice_creator: _InvoiceCreator,
        rate_limiter: _RateLimiter,
    ) -> None:
        self.api = api
        self.invoice_creator = invoice_creator
        self.rate_limiter = rate_limiter
        self._request_counter = 0
        self._counter_lock = threading.Lock()

    def _jitter(self) -> float:
        with self._counter_lock:
            self._request_counter += 1
            return (self._request_counter % 100) / 1000

    def create_payment_form(
        self, cancel: threading.Event, gift: GiftRequire
    ) -> tuple[AnyPaymentForm, InvoiceStarGift]:
        """Return the payment form and the invoice it was issued for."""
        time.sleep(self._jitter())

        try:
            invoice = self.invoice_creator.create_invoice(gift)
        except Exception as exc:
            raise PaymentError(f"failed to create invoice: {exc}") from exc

        try:
            self.rate_limiter.acquire(cancel)
        except Exception as exc:
            raise PaymentError(f"failed to wait for rate limit: {exc}") from exc

        try:
            form = self.api.get_payment_form(cancel, invoice)  # type: ignore[union-attr]
        except Exception as exc:
            raise PaymentError(f"failed to get payment form: {exc}") from exc
        return form, invoice