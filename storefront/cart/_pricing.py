"""
Pricing — cart totals as a pure function of cart lines and shipping choice.

    totals = compute_totals(cart.lines(), catalog.get_product_by_sku,
                            selection.selected, selection.quote)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from storefront._types import Sku
from storefront.catalog import Product
from storefront.shipping import ServiceLevel, ShippingQuote

type ProductLookup = Callable[[Sku], Product | None]

ZERO = Decimal("0")


def _default_floors() -> dict[ServiceLevel, Decimal]:
    return {ServiceLevel.STANDARD: Decimal("15"), ServiceLevel.EXPRESS: Decimal("28")}


@dataclass(frozen=True, slots=True)
class ShippingPolicy:
    """
    Shipping price rules.

    A selected service costs its quoted rate minus `discount`, never
    less than the service floor. Without a selection nothing is charged.
    """

    free_threshold: Decimal = Decimal("130")
    discount: Decimal = Decimal("4")
    floors: Mapping[ServiceLevel, Decimal] = field(default_factory=_default_floors)

    def charge(self, level: ServiceLevel, rate: Decimal) -> Decimal:
        return max(self.floors[level], rate - self.discount)


DEFAULT_POLICY = ShippingPolicy()


@dataclass(frozen=True, slots=True)
class Totals:
    subtotal: Decimal
    shipping: Decimal
    taxes: Decimal
    total: Decimal
    free_shipping_remaining: Decimal
    free_shipping_progress: float


def subtotal_of(lines: Mapping[Sku, int], lookup: ProductLookup) -> Decimal:
    """Σ price × quantity; lines whose product is unknown are skipped."""
    subtotal = ZERO
    for sku, quantity in lines.items():
        product = lookup(sku)
        if product is None:
            continue
        subtotal += product.price * quantity
    return subtotal


def compute_totals(
    lines: Mapping[Sku, int],
    lookup: ProductLookup,
    selected: ServiceLevel | None,
    quote: ShippingQuote | None,
    policy: ShippingPolicy = DEFAULT_POLICY,
) -> Totals:
    subtotal = subtotal_of(lines, lookup)

    if selected is not None and quote is not None:
        shipping = policy.charge(selected, quote.rate(selected))
    else:
        # free above the threshold, and not charged below it until a quote is selected
        shipping = ZERO

    taxes = ZERO
    remaining = max(ZERO, policy.free_threshold - subtotal)
    if policy.free_threshold <= 0:
        progress = 1.0
    else:
        progress = min(1.0, float(subtotal / policy.free_threshold))

    return Totals(
        subtotal=subtotal,
        shipping=shipping,
        taxes=taxes,
        total=subtotal + shipping + taxes,
        free_shipping_remaining=remaining,
        free_shipping_progress=progress,
    )


def shipping_resolved(
    subtotal: Decimal,
    selected: ServiceLevel | None,
    quote: ShippingQuote | None,
    policy: ShippingPolicy = DEFAULT_POLICY,
) -> bool:
    """True when the shipping line is known: a quoted service is chosen or shipping is free."""
    if selected is not None and quote is not None:
        return True
    return subtotal >= policy.free_threshold


__all__ = (
    "ProductLookup",
    "ShippingPolicy",
    "DEFAULT_POLICY",
    "Totals",
    "subtotal_of",
    "compute_totals",
    "shipping_resolved",
)
