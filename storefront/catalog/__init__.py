"""
Catalog — products, persistence services and the ProductCache.

    from storefront import catalog

    service = catalog.MemoryProductService()
    products = catalog.ProductCache(service)
    listing = await products.get_products()
"""

from __future__ import annotations

from storefront.catalog._types import (
    Product,
    ProductDraft,
    ListingView,
    Listing,
    ProductService,
)
from storefront.catalog._memory import MemoryProductService
from storefront.catalog._sqlalchemy import (
    ProductTable,
    SQLAlchemyProductService,
    create_database,
)
from storefront.catalog._cache import ProductCache
from storefront.catalog._browse import filter_by_categories, related_products

__all__ = (
    "Product",
    "ProductDraft",
    "ListingView",
    "Listing",
    "ProductService",
    "MemoryProductService",
    "ProductTable",
    "SQLAlchemyProductService",
    "create_database",
    "ProductCache",
    "filter_by_categories",
    "related_products",
)
