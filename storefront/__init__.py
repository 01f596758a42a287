"""
storefront — cart, pricing and inventory core for a single-page shop.

    from storefront import catalog   # Products, persistence, ProductCache
    from storefront import cart      # CartStore and totals
    from storefront import shipping  # Carrier quotes and selection
    from storefront import carousel  # Banner and related products scroller
    from storefront import admin     # Inventory editor workflow
    from storefront import checkout  # Simulated order submission
"""

from storefront import cache
from storefront import catalog
from storefront import cart
from storefront import shipping
from storefront import carousel
from storefront import admin
from storefront import checkout
from storefront._errors import ValidationError, RemoteWriteError, NotFoundError
from storefront._storefront import Storefront
from storefront._types import (
    ProductId,
    Sku,
    Clock,
    MonotonicClock,
)
from storefront.notices import Notice, Notices

__version__ = "0.1.0"

__all__ = (
    "cache",
    "catalog",
    "cart",
    "shipping",
    "carousel",
    "admin",
    "checkout",
    "Storefront",
    "ValidationError",
    "RemoteWriteError",
    "NotFoundError",
    "ProductId",
    "Sku",
    "Clock",
    "MonotonicClock",
    "Notice",
    "Notices",
)
