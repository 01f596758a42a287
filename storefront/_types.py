"""
Core types for storefront.

Shared aliases and the clock protocol.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol

# ═══════════════════════════════════════════════════════════════════════════════
# Identity
# ═══════════════════════════════════════════════════════════════════════════════

type ProductId = str
"""Opaque identifier assigned by the persistence service."""

type Sku = str
"""User-facing product key, unique per product."""

# ═══════════════════════════════════════════════════════════════════════════════
# Change Notifications
# ═══════════════════════════════════════════════════════════════════════════════

type Listener = Callable[[], None]
type Unsubscribe = Callable[[], None]

# ═══════════════════════════════════════════════════════════════════════════════
# Clock
# ═══════════════════════════════════════════════════════════════════════════════


class Clock(Protocol):
    """Monotonic time source in milliseconds."""

    def now(self) -> float: ...


class MonotonicClock:
    """Wall clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Type aliases
    "ProductId",
    "Sku",
    "Listener",
    "Unsubscribe",
    # Time
    "Clock",
    "MonotonicClock",
)
