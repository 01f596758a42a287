"""
ProductCache — read-through listings plus a local product mirror.

Reads:
    listings   tier → miss → ProductService.select_*() → refresh mirror
    by sku/id  mirror only (synchronous, no network)

Writes:
    remote write → Ok  → patch mirror → invalidate listings
                 → Err → mirror untouched, RemoteWriteError
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from kungfu import LazyCoroResult, Result, Ok, Error
from combinators import lift as L

from storefront._errors import RemoteWriteError
from storefront._observable import Observable
from storefront._types import ProductId, Sku
from storefront import cache as C
from storefront.catalog._types import (
    Listing,
    ListingView,
    Product,
    ProductDraft,
    ProductService,
)

logger = logging.getLogger(__name__)


def _remote_error(operation: str) -> Callable[[Exception], RemoteWriteError]:
    def convert(e: Exception) -> RemoteWriteError:
        if isinstance(e, RemoteWriteError):
            return e
        return RemoteWriteError(operation, str(e) or type(e).__name__)

    return convert


class ProductCache(Observable):
    """
    Single source of truth for product records in a session.

    Listing reads are memoized under a generation-stamped key, so
    invalidate_cache() is synchronous: bumping the generation makes
    every memoized listing unreachable.

    Example:
        catalog = ProductCache(MemoryProductService())

        match await catalog.get_products():
            case Ok(products):
                ...
            case Error(e):
                notify(str(e))

        product = catalog.get_product_by_sku("SKU-1")
    """

    def __init__(
        self,
        service: ProductService,
        tier: C.Tier[Listing] | None = None,
    ) -> None:
        super().__init__()
        self._service = service
        self._mirror: dict[ProductId, Product] = {}
        self._by_sku: dict[Sku, ProductId] = {}
        self._generation = 0
        self._listings = (
            C.cache(self._listing_key, self._fetch_listing)
            .tier(tier if tier is not None else C.LocalTier[Listing](max_size=4))
            .build()
        )

    # ───────────────────────────────────────────────────────────────────────
    # Listings
    # ───────────────────────────────────────────────────────────────────────

    def _listing_key(self, view: ListingView) -> str:
        return f"products:{view.value}:{self._generation}"

    def _fetch_listing(self, view: ListingView) -> LazyCoroResult[Listing, RemoteWriteError]:
        select = self._service.select_active if view is ListingView.ACTIVE else self._service.select_all

        async def fetch() -> Listing:
            generation = self._generation
            rows = tuple(await select())
            logger.info("Fetched %d products (%s)", len(rows), view.value)
            # A write confirmed while the read was in flight has already
            # patched the mirror with newer rows.
            if self._generation == generation:
                self._replace_mirror(rows)
            else:
                logger.debug("Keeping mirror: listing read predates generation %d", self._generation)
            return rows

        return L.catching_async(fetch, on_error=_remote_error(f"select_{view.value}"))

    def _listing(self, view: ListingView) -> LazyCoroResult[Listing, RemoteWriteError]:
        return self._listings.get(view)

    def get_products(self) -> LazyCoroResult[Listing, RemoteWriteError]:
        """Active products, for the storefront view."""
        return self._listing(ListingView.ACTIVE)

    def get_admin_products(self) -> LazyCoroResult[Listing, RemoteWriteError]:
        """All products regardless of the active flag."""
        return self._listing(ListingView.ALL)

    def invalidate_cache(self) -> None:
        self._generation += 1
        logger.debug("Listing cache invalidated (generation %d)", self._generation)

    # ───────────────────────────────────────────────────────────────────────
    # Mirror
    # ───────────────────────────────────────────────────────────────────────

    def _replace_mirror(self, rows: Listing) -> None:
        self._mirror = {p.id: p for p in rows}
        self._by_sku = {p.sku: p.id for p in rows}
        self._notify()

    def get_product_by_sku(self, sku: Sku) -> Product | None:
        product_id = self._by_sku.get(sku)
        return None if product_id is None else self._mirror.get(product_id)

    def get_product(self, product_id: ProductId) -> Product | None:
        return self._mirror.get(product_id)

    def products(self) -> Listing:
        """Mirror snapshot."""
        return tuple(self._mirror.values())

    def update_local_product(self, product: Product) -> None:
        previous = self._mirror.get(product.id)
        if previous is not None and previous.sku != product.sku:
            self._by_sku.pop(previous.sku, None)
        self._mirror[product.id] = product
        self._by_sku[product.sku] = product.id
        self._notify()

    def remove_local_product(self, product_id: ProductId) -> bool:
        product = self._mirror.pop(product_id, None)
        if product is None:
            return False
        if self._by_sku.get(product.sku) == product_id:
            del self._by_sku[product.sku]
        self._notify()
        return True

    # ───────────────────────────────────────────────────────────────────────
    # Write path
    # ───────────────────────────────────────────────────────────────────────

    def _write(
        self,
        operation: str,
        call: Callable[[], Awaitable[Product]],
    ) -> LazyCoroResult[Product, RemoteWriteError]:
        remote = L.catching_async(call, on_error=_remote_error(operation))

        async def execute() -> Result[Product, RemoteWriteError]:
            match await remote:
                case Ok(product):
                    self.update_local_product(product)
                    self.invalidate_cache()
                    logger.info("%s %s (%s) confirmed", operation, product.sku, product.id)
                    return Ok(product)
                case Error(e):
                    logger.error("%s failed: %s", operation, e)
                    return Error(e)

        return LazyCoroResult(execute)

    def create(self, draft: ProductDraft) -> LazyCoroResult[Product, RemoteWriteError]:
        return self._write("insert", lambda: self._service.insert(draft))

    def update(self, product_id: ProductId, draft: ProductDraft) -> LazyCoroResult[Product, RemoteWriteError]:
        return self._write("update", lambda: self._service.update(product_id, draft))

    def set_stock(self, product_id: ProductId, stock: int) -> LazyCoroResult[Product, RemoteWriteError]:
        return self._write("update_stock", lambda: self._service.update_stock(product_id, stock))

    def delete(self, product_id: ProductId) -> LazyCoroResult[ProductId, RemoteWriteError]:
        remote = L.catching_async(
            lambda: self._service.delete(product_id),
            on_error=_remote_error("delete"),
        )

        async def execute() -> Result[ProductId, RemoteWriteError]:
            match await remote:
                case Ok(_):
                    self.remove_local_product(product_id)
                    self.invalidate_cache()
                    logger.info("delete %s confirmed", product_id)
                    return Ok(product_id)
                case Error(e):
                    logger.error("delete failed: %s", e)
                    return Error(e)

        return LazyCoroResult(execute)


__all__ = ("ProductCache",)
