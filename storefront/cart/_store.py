"""
CartStore — sku → quantity, bounded by known stock.

    cart = CartStore(catalog, notices)
    cart.add("SKU-1")
    cart.decrement("SKU-1")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from storefront._observable import Observable
from storefront._types import Sku
from storefront.catalog import Product, ProductCache
from storefront.notices import Notices

logger = logging.getLogger(__name__)


class CartStore(Observable):
    """
    Session cart.

    The stock bound is checked on every increment: a line never grows
    past the stock known to the catalog at the time of the add.
    """

    def __init__(self, catalog: ProductCache, notices: Notices | None = None) -> None:
        super().__init__()
        self._catalog = catalog
        self._notices = notices
        self._lines: dict[Sku, int] = {}

    def _notice(self, message: str) -> None:
        if self._notices is not None:
            self._notices.show(message)

    def _find(self, sku: Sku, fallback: Iterable[Product]) -> Product | None:
        product = self._catalog.get_product_by_sku(sku)
        if product is not None:
            return product
        return next((p for p in fallback if p.sku == sku), None)

    # ───────────────────────────────────────────────────────────────────────
    # Mutations
    # ───────────────────────────────────────────────────────────────────────

    def add(self, sku: Sku, fallback: Iterable[Product] = ()) -> bool:
        """
        Add one unit of `sku`.

        `fallback` is the last loaded listing, consulted when the catalog
        mirror does not know the sku yet.
        """
        product = self._find(sku, fallback)
        if product is None:
            logger.debug("add(%s): unknown product", sku)
            return False

        current = self._lines.get(sku, 0)
        if current >= product.stock:
            self._notice(f"Insufficient stock for {sku}")
            return False

        self._lines[sku] = current + 1
        self._notice(f"{sku} added to cart")
        self._notify()
        return True

    def decrement(self, sku: Sku) -> None:
        current = self._lines.get(sku)
        if current is None:
            return
        if current > 1:
            self._lines[sku] = current - 1
        else:
            del self._lines[sku]
        self._notify()

    def remove_line(self, sku: Sku) -> None:
        if self._lines.pop(sku, None) is not None:
            self._notify()

    def clear(self) -> None:
        if not self._lines:
            return
        self._lines.clear()
        self._notice("Cart cleared")
        self._notify()

    # ───────────────────────────────────────────────────────────────────────
    # Read side
    # ───────────────────────────────────────────────────────────────────────

    def quantity(self, sku: Sku) -> int:
        return self._lines.get(sku, 0)

    def lines(self) -> Mapping[Sku, int]:
        """Read-only snapshot."""
        return MappingProxyType(dict(self._lines))

    @property
    def item_count(self) -> int:
        return sum(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, sku: object) -> bool:
        return sku in self._lines

    def __iter__(self) -> Iterator[Sku]:
        return iter(dict(self._lines))


__all__ = ("CartStore",)
