"""
Cache — read-through memoization with stackable tiers.

    from storefront import cache as C

    listings = C.cache(key_fn, fetch_fn).tier(C.LocalTier(max_size=4)).build()
    result = await listings.get(view)
"""

from __future__ import annotations

from storefront.cache._types import (
    Tier,
    LocalTier,
)
from storefront.cache._builder import cache, Cache, CacheExecutor

__all__ = (
    "Tier",
    "LocalTier",
    "cache",
    "Cache",
    "CacheExecutor",
)
