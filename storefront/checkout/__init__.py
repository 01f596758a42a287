"""
Checkout — order validation and submission.
"""

from __future__ import annotations

from storefront.checkout._checkout import (
    DEFAULT_SHIPPING_METHOD,
    OrderReceipt,
    OrderSink,
    LoggingOrderSink,
    Checkout,
)

__all__ = (
    "DEFAULT_SHIPPING_METHOD",
    "OrderReceipt",
    "OrderSink",
    "LoggingOrderSink",
    "Checkout",
)
