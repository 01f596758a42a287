"""
Browse helpers — category filter and related products.
"""

from __future__ import annotations

from collections.abc import Iterable

from storefront.catalog._types import Listing, Product


def filter_by_categories(products: Iterable[Product], selected: Iterable[str]) -> Listing:
    """Products in any selected category; everything when none is selected."""
    wanted = set(selected)
    if not wanted:
        return tuple(products)
    return tuple(p for p in products if p.category is not None and p.category in wanted)


def related_products(products: Iterable[Product], selected: Product, limit: int = 6) -> Listing:
    """First `limit` products other than the one on display."""
    related: list[Product] = []
    for p in products:
        if p.id == selected.id:
            continue
        related.append(p)
        if len(related) == limit:
            break
    return tuple(related)


__all__ = ("filter_by_categories", "related_products")
