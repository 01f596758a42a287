"""
Storefront — one shopper session.

Wires the stores together:

    ProductCache ──lookup──→ CartStore ──weight change──→ ShippingSelection
         │                      │                              │
         └──────────────→ compute_totals ←─────────────────────┘
                                │
                             Checkout
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from kungfu import LazyCoroResult, Result, Ok, Error

from storefront._errors import RemoteWriteError, ValidationError
from storefront._observable import Observable
from storefront._types import Clock, Sku
from storefront.cart import DEFAULT_POLICY, CartStore, ShippingPolicy, Totals, compute_totals, shipping_resolved
from storefront.catalog import (
    Listing,
    Product,
    ProductCache,
    filter_by_categories,
    related_products,
)
from storefront.carousel import RelatedScroller
from storefront.checkout import Checkout, OrderReceipt, OrderSink
from storefront.config import Settings
from storefront.notices import DEFAULT_NOTICE_MS, Notices
from storefront.shipping import (
    FetchJson,
    ServiceLevel,
    ShippingQuote,
    ShippingQuoteClient,
    ShippingSelection,
    normalize_postal_code,
    parcel_for,
)

logger = logging.getLogger(__name__)


class Storefront(Observable):
    """
    Session facade: browsing, cart, shipping and checkout.

    Example:
        shop = Storefront(catalog, client)
        await shop.load()

        shop.add_to_cart("SKU-1")
        await shop.fetch_quote("01310-100")
        shop.select_shipping(ServiceLevel.STANDARD)
        shop.totals.total
    """

    def __init__(
        self,
        catalog: ProductCache,
        client: ShippingQuoteClient,
        *,
        clock: Clock | None = None,
        notice_ms: float = DEFAULT_NOTICE_MS,
        policy: ShippingPolicy = DEFAULT_POLICY,
        sink: OrderSink | None = None,
    ) -> None:
        super().__init__()
        self.catalog = catalog
        self.client = client
        self.policy = policy
        self.notices = Notices(clock, notice_ms)
        self.cart = CartStore(catalog, self.notices)
        self.selection = ShippingSelection()
        self.checkout_service = Checkout(
            self.cart, catalog, self.selection, sink, policy, lookup=self._lookup
        )

        self._listing: Listing = ()
        self._categories: frozenset[str] = frozenset()
        self._selected_product: Product | None = None
        self._related: RelatedScroller[Product] | None = None
        self._unsubscribe = self.cart.subscribe(self._on_cart_change)

    @classmethod
    def from_settings(
        cls,
        catalog: ProductCache,
        settings: Settings,
        *,
        clock: Clock | None = None,
        sink: OrderSink | None = None,
        fetch_json: FetchJson | None = None,
    ) -> Storefront:
        return cls(
            catalog,
            ShippingQuoteClient.from_settings(settings, fetch_json),
            clock=clock,
            notice_ms=settings.notice_ms,
            policy=ShippingPolicy(free_threshold=settings.free_shipping_threshold),
            sink=sink,
        )

    def close(self) -> None:
        self._unsubscribe()

    # ───────────────────────────────────────────────────────────────────────
    # Browsing
    # ───────────────────────────────────────────────────────────────────────

    def load(self) -> LazyCoroResult[Listing, RemoteWriteError]:
        async def execute() -> Result[Listing, RemoteWriteError]:
            result = await self.catalog.get_products()
            match result:
                case Ok(listing):
                    self._listing = listing
                    if self._selected_product is not None:
                        self._open(self._selected_product)
                    self._notify()
                case Error(e):
                    logger.error("Loading products failed: %s", e)
            return result

        return LazyCoroResult(execute)

    @property
    def products(self) -> Listing:
        return self._listing

    @property
    def selected_categories(self) -> frozenset[str]:
        return self._categories

    @property
    def visible_products(self) -> Listing:
        return filter_by_categories(self._listing, self._categories)

    def toggle_category(self, category: str) -> None:
        self._categories = self._categories ^ {category}
        self._notify()

    def clear_categories(self) -> None:
        if self._categories:
            self._categories = frozenset()
            self._notify()

    def _open(self, product: Product) -> RelatedScroller[Product]:
        scroller = RelatedScroller(related_products(self._listing, product))
        self._selected_product = product
        self._related = scroller
        return scroller

    def open_product(self, product: Product) -> RelatedScroller[Product]:
        scroller = self._open(product)
        self._notify()
        return scroller

    def close_product(self) -> None:
        self._selected_product = None
        self._related = None
        self._notify()

    @property
    def selected_product(self) -> Product | None:
        return self._selected_product

    @property
    def related(self) -> RelatedScroller[Product] | None:
        return self._related

    # ───────────────────────────────────────────────────────────────────────
    # Cart
    # ───────────────────────────────────────────────────────────────────────

    def _lookup(self, sku: Sku) -> Product | None:
        product = self.catalog.get_product_by_sku(sku)
        if product is not None:
            return product
        return next((p for p in self._listing if p.sku == sku), None)

    def _on_cart_change(self) -> None:
        self.selection.invalidate_if_stale(self.parcel_weight)

    @property
    def parcel_weight(self) -> int:
        return parcel_for(self.cart.item_count).weight

    def add_to_cart(self, sku: Sku) -> bool:
        return self.cart.add(sku, self._listing)

    def decrement(self, sku: Sku) -> None:
        self.cart.decrement(sku)

    def remove_line(self, sku: Sku) -> None:
        self.cart.remove_line(sku)

    def clear_cart(self) -> None:
        self.cart.clear()

    def cart_products(self) -> Iterable[tuple[Product, int]]:
        """Cart lines with their products; lines for unknown skus are skipped."""
        for sku, quantity in self.cart.lines().items():
            product = self._lookup(sku)
            if product is not None:
                yield product, quantity

    @property
    def totals(self) -> Totals:
        return compute_totals(
            self.cart.lines(),
            self._lookup,
            self.selection.selected,
            self.selection.quote,
            self.policy,
        )

    @property
    def shipping_resolved(self) -> bool:
        return shipping_resolved(
            self.totals.subtotal,
            self.selection.selected,
            self.selection.quote,
            self.policy,
        )

    # ───────────────────────────────────────────────────────────────────────
    # Shipping & checkout
    # ───────────────────────────────────────────────────────────────────────

    async def fetch_quote(self, postal_code: str) -> Result[ShippingQuote, ValidationError | RemoteWriteError]:
        result = await self.selection.refresh(
            self.client,
            normalize_postal_code(postal_code),
            self.cart.item_count,
            lambda: self.parcel_weight,
        )
        if isinstance(result, Error):
            self.notices.show(str(result.error))
        return result

    def select_shipping(self, level: ServiceLevel) -> Result[ServiceLevel, ValidationError]:
        result = self.selection.select(level)
        if isinstance(result, Error):
            self.notices.show(str(result.error))
        return result

    def shipping_price(self, level: ServiceLevel) -> Decimal | None:
        """Price shown next to a quoted service, after discount and floor."""
        quote = self.selection.quote
        if quote is None:
            return None
        return self.policy.charge(level, quote.rate(level))

    def checkout(self, email: str, postal_code: str) -> Result[OrderReceipt, ValidationError]:
        result = self.checkout_service.submit(email, normalize_postal_code(postal_code))
        match result:
            case Ok(receipt):
                self.notices.show(f"Order placed. Total: {receipt.totals.total:.2f}")
            case Error(e):
                self.notices.show(str(e))
        return result


__all__ = ("Storefront",)
