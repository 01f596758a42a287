"""
Cart — the session cart and its pricing.

    from storefront import cart

    store = cart.CartStore(catalog)
    store.add("SKU-1")
    totals = cart.compute_totals(store.lines(), catalog.get_product_by_sku, None, None)
"""

from __future__ import annotations

from storefront.cart._store import CartStore
from storefront.cart._pricing import (
    ProductLookup,
    ShippingPolicy,
    DEFAULT_POLICY,
    Totals,
    subtotal_of,
    compute_totals,
    shipping_resolved,
)

__all__ = (
    "CartStore",
    "ProductLookup",
    "ShippingPolicy",
    "DEFAULT_POLICY",
    "Totals",
    "subtotal_of",
    "compute_totals",
    "shipping_resolved",
)
