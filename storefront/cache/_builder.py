"""
Read-through cache builder — fluent API.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from kungfu import LazyCoroResult, Result, Ok, Error

from storefront.cache._types import Tier

logger = logging.getLogger(__name__)

type KeyFn[K] = Callable[[K], str]


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class Cache[K, T, E]:
    """
    Fluent read-through cache builder.

    Type parameters:
        K: Key input type
        T: Value type
        E: Error type from fetch

    Example:
        listings = (
            cache(listing_key, fetch_listing)
            .tier(LocalTier(max_size=4))
            .build()
        )
    """

    _key_fn: KeyFn[K]
    _fetch: Callable[[K], LazyCoroResult[T, E]]
    _tiers: tuple[Tier[T], ...]

    def tier(self, t: Tier[T]) -> Cache[K, T, E]:
        """Add a tier. Tiers are checked in insertion order."""
        return Cache(
            _key_fn=self._key_fn,
            _fetch=self._fetch,
            _tiers=(*self._tiers, t),
        )

    def build(self) -> CacheExecutor[K, T, E]:
        return CacheExecutor(
            key_fn=self._key_fn,
            tiers=self._tiers,
            fetch=self._fetch,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Executor
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class CacheExecutor[K, T, E]:
    key_fn: KeyFn[K]
    tiers: tuple[Tier[T], ...]
    fetch: Callable[[K], LazyCoroResult[T, E]]

    def get(self, key: K) -> LazyCoroResult[T, E]:
        """
        Read through the tiers, then the fetch.

        The key is computed when the read runs. A successful fetch
        populates every tier; a failed fetch populates nothing.
        """
        tiers = self.tiers
        fetch_fn = self.fetch

        async def execute() -> Result[T, E]:
            cache_key = self.key_fn(key)
            for t in tiers:
                try:
                    value = await t.get(cache_key)
                except Exception:
                    logger.warning("Tier %s failed to read %s", t.name, cache_key, exc_info=True)
                    continue
                if value is not None:
                    logger.debug("Cache hit %s in %s", cache_key, t.name)
                    return Ok(value)

            logger.debug("Cache miss %s", cache_key)
            match await fetch_fn(key):
                case Ok(value):
                    for t in tiers:
                        try:
                            await t.set(cache_key, value)
                        except Exception:
                            logger.warning("Tier %s failed to store %s", t.name, cache_key, exc_info=True)
                    return Ok(value)
                case Error(e):
                    return Error(e)

        return LazyCoroResult(execute)


def cache[K, T, E](
    key: KeyFn[K],
    fetch: Callable[[K], LazyCoroResult[T, E]],
) -> Cache[K, T, E]:
    """
    Create a read-through cache builder.

    Example:
        from storefront import cache as C

        def fetch_listing(view: ListingView) -> LazyCoroResult[Listing, RemoteWriteError]:
            return L.catching_async(...)

        listings = (
            C.cache(lambda view: f"products:{view.value}", fetch_listing)
            .tier(C.LocalTier(max_size=4))
            .build()
        )

        result = await listings.get(ListingView.ACTIVE)
    """
    return Cache(_key_fn=key, _fetch=fetch, _tiers=())


__all__ = ("Cache", "CacheExecutor", "cache")
