"""
Checkout — simulated order submission.

No payment is taken: a validated order is handed to an OrderSink and
the session cart is reset.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from kungfu import Result, Ok, Error

from storefront._errors import ValidationError
from storefront._types import Sku
from storefront.cart import (
    DEFAULT_POLICY,
    CartStore,
    ProductLookup,
    ShippingPolicy,
    Totals,
    compute_totals,
)
from storefront.catalog import ProductCache
from storefront.shipping import ServiceLevel, ShippingSelection, validate_postal_code

logger = logging.getLogger(__name__)

DEFAULT_SHIPPING_METHOD = "Standard"


@dataclass(frozen=True, slots=True)
class OrderReceipt:
    order_id: str
    email: str
    postal_code: str
    lines: Mapping[Sku, int]
    service: ServiceLevel | None
    totals: Totals

    @property
    def shipping_method(self) -> str:
        return self.service.label if self.service is not None else DEFAULT_SHIPPING_METHOD


class OrderSink(Protocol):
    """Where confirmed orders go."""

    def submit(self, receipt: OrderReceipt) -> None: ...


class LoggingOrderSink:
    def submit(self, receipt: OrderReceipt) -> None:
        logger.info(
            "Order %s: %s items to %s (%s) via %s, total %s",
            receipt.order_id,
            sum(receipt.lines.values()),
            receipt.postal_code,
            receipt.email,
            receipt.shipping_method,
            receipt.totals.total,
        )


class Checkout:
    """
    Validates and submits the session cart.

    Prices come from `lookup`, which defaults to the catalog mirror;
    pass the same lookup the shopper's totals use so the receipt matches.

    Example:
        checkout = Checkout(cart, catalog, selection)

        match checkout.submit("ana@example.com", "01310100"):
            case Ok(receipt):
                show(f"Total: {receipt.totals.total}")
            case Error(e):
                alert(str(e))
    """

    def __init__(
        self,
        cart: CartStore,
        catalog: ProductCache,
        selection: ShippingSelection,
        sink: OrderSink | None = None,
        policy: ShippingPolicy = DEFAULT_POLICY,
        lookup: ProductLookup | None = None,
    ) -> None:
        self._cart = cart
        self._lookup = lookup or catalog.get_product_by_sku
        self._selection = selection
        self._sink = sink or LoggingOrderSink()
        self._policy = policy

    def _validate(self, email: str, postal_code: str) -> Result[str, ValidationError]:
        if self._cart.is_empty:
            return Error(ValidationError("cart", "Your cart is empty"))
        if not email.strip():
            return Error(ValidationError("email", "Please enter your e-mail"))
        checked = validate_postal_code(postal_code.strip())
        if isinstance(checked, Error):
            return checked
        if self._selection.selected is None and self._selection.quote is None:
            return Error(ValidationError("shipping", "Please calculate shipping"))
        return checked

    def submit(self, email: str, postal_code: str) -> Result[OrderReceipt, ValidationError]:
        checked = self._validate(email, postal_code)
        if isinstance(checked, Error):
            logger.info("Checkout rejected: %s", checked.error)
            return checked

        lines = self._cart.lines()
        totals = compute_totals(
            lines,
            self._lookup,
            self._selection.selected,
            self._selection.quote,
            self._policy,
        )
        receipt = OrderReceipt(
            order_id=uuid.uuid4().hex,
            email=email.strip(),
            postal_code=checked.value,
            lines=lines,
            service=self._selection.selected,
            totals=totals,
        )
        self._sink.submit(receipt)

        self._cart.clear()
        self._selection.clear()
        return Ok(receipt)


__all__ = (
    "DEFAULT_SHIPPING_METHOD",
    "OrderReceipt",
    "OrderSink",
    "LoggingOrderSink",
    "Checkout",
)
