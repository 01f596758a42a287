"""
Cache tier types.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Protocol

from storefront._types import Clock, MonotonicClock

# ═══════════════════════════════════════════════════════════════════════════════
# Tier Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class Tier[T](Protocol):
    """
    Memoization tier for listing reads.

    Implement this for a shared backend (Redis, browser storage, ...).

    Example:
        class RedisTier[T]:
            def __init__(self, client: Redis, ttl: int | None = None):
                self.client = client
                self.ttl = ttl

            @property
            def name(self) -> str:
                return "redis"

            async def get(self, key: str) -> T | None:
                data = await self.client.get(key)
                return pickle.loads(data) if data else None

            async def set(self, key: str, value: T) -> None:
                await self.client.set(key, pickle.dumps(value), ex=self.ttl)
    """

    @property
    def name(self) -> str:
        """Tier name for logs."""
        ...

    async def get(self, key: str) -> T | None:
        """Get value. Returns None on miss."""
        ...

    async def set(self, key: str, value: T) -> None:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Local Tier: In-Memory LRU with optional TTL
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class _Entry[T]:
    value: T
    expires_at: float | None


class LocalTier[T]:
    """
    In-memory LRU tier.

    Entries older than ttl_ms read as misses.

    Example:
        tier = LocalTier[tuple[Product, ...]](max_size=8, ttl_ms=60_000)
    """

    def __init__(
        self,
        max_size: int = 16,
        ttl_ms: float | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._max_size = max_size
        self._ttl_ms = ttl_ms
        self._clock = clock or MonotonicClock()
        self._entries: OrderedDict[str, _Entry[T]] = OrderedDict()

    @property
    def name(self) -> str:
        return "local"

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> T | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and self._clock.now() >= entry.expires_at:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return entry.value

    async def set(self, key: str, value: T) -> None:
        if key in self._entries:
            del self._entries[key]
        elif len(self._entries) >= self._max_size:
            self._entries.popitem(last=False)

        expires_at = None if self._ttl_ms is None else self._clock.now() + self._ttl_ms
        self._entries[key] = _Entry(value, expires_at)


__all__ = (
    "Tier",
    "LocalTier",
)
