"""
ShippingSelection — the quote on display and the chosen service level.

The quote is tied to the cart weight it was requested for. Any cart
change that moves the weight makes it stale; a response that arrives
after such a change is discarded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from kungfu import Result, Ok, Error

from storefront._errors import RemoteWriteError, ValidationError
from storefront._observable import Observable
from storefront.shipping._client import ShippingQuoteClient, validate_postal_code
from storefront.shipping._types import ServiceLevel, ShippingQuote

logger = logging.getLogger(__name__)


class ShippingSelection(Observable):
    """
    Holds at most one quote and at most one selected level.

    A level can only be selected while a quote is present; a new quote
    or a failed request resets the selection.
    """

    def __init__(self) -> None:
        super().__init__()
        self._quote: ShippingQuote | None = None
        self._selected: ServiceLevel | None = None
        self._pending_weight: int | None = None

    @property
    def quote(self) -> ShippingQuote | None:
        return self._quote

    @property
    def selected(self) -> ServiceLevel | None:
        return self._selected

    @property
    def loading(self) -> bool:
        return self._pending_weight is not None

    def selected_rate(self) -> Decimal | None:
        if self._quote is None or self._selected is None:
            return None
        return self._quote.rate(self._selected)

    def apply_quote(self, quote: ShippingQuote) -> None:
        self._quote = quote
        self._selected = None
        self._notify()

    def select(self, level: ServiceLevel) -> Result[ServiceLevel, ValidationError]:
        if self._quote is None:
            return Error(ValidationError("shipping", "Calculate shipping before choosing a service"))
        self._selected = level
        self._notify()
        return Ok(level)

    def fail(self) -> None:
        self._quote = None
        self._selected = None
        self._notify()

    def clear(self) -> None:
        self._pending_weight = None
        self.fail()

    def invalidate_if_stale(self, weight: int) -> bool:
        """Drop the quote if it was computed for a different weight."""
        if self._quote is None or self._quote.weight == weight:
            return False
        logger.debug("Dropping quote for %dg, cart is now %dg", self._quote.weight, weight)
        self.fail()
        return True

    async def refresh(
        self,
        client: ShippingQuoteClient,
        postal_code: str,
        item_count: int,
        current_weight: Callable[[], int],
    ) -> Result[ShippingQuote, ValidationError | RemoteWriteError]:
        """
        Request a quote and apply it if the cart still weighs the same.

        A stale response leaves the selection as it is and returns
        a ValidationError. A malformed postal code is rejected before
        any state changes.
        """
        invalid = validate_postal_code(postal_code)
        if isinstance(invalid, Error):
            return invalid

        weight = current_weight()
        self._pending_weight = weight
        self._notify()

        result = await client.quote(postal_code, item_count)

        if self._pending_weight != weight or current_weight() != weight:
            logger.info("Discarding quote for %dg: cart changed while loading", weight)
            if self._pending_weight == weight:
                self._pending_weight = None
                self._notify()
            return Error(ValidationError("shipping", "Cart changed, calculate shipping again"))

        self._pending_weight = None
        match result:
            case Ok(quote):
                self.apply_quote(quote)
            case Error(RemoteWriteError()):
                self.fail()
            case Error(_):
                self._notify()
        return result


__all__ = ("ShippingSelection",)
