"""
Shipping types.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ServiceLevel(Enum):
    """Carrier service levels offered by the quote provider."""

    STANDARD = "standard"
    EXPRESS = "express"

    @property
    def label(self) -> str:
        return "PAC" if self is ServiceLevel.STANDARD else "SEDEX"


@dataclass(frozen=True, slots=True)
class Parcel:
    """Box sent to the provider. Dimensions in centimetres, weight in grams."""

    weight: int
    height: int = 20
    width: int = 20
    length: int = 20


GRAMS_PER_ITEM = 350
"""Fixed per-item weight; products carry no weight field."""


def parcel_for(item_count: int) -> Parcel:
    return Parcel(weight=item_count * GRAMS_PER_ITEM)


@dataclass(frozen=True, slots=True)
class ServiceQuote:
    rate: Decimal
    lead_time_days: int | None


@dataclass(frozen=True, slots=True)
class ShippingQuote:
    """Rates for one destination and parcel weight."""

    destination: str
    weight: int
    standard: ServiceQuote
    express: ServiceQuote

    def service(self, level: ServiceLevel) -> ServiceQuote:
        return self.standard if level is ServiceLevel.STANDARD else self.express

    def rate(self, level: ServiceLevel) -> Decimal:
        return self.service(level).rate


__all__ = (
    "ServiceLevel",
    "Parcel",
    "GRAMS_PER_ITEM",
    "parcel_for",
    "ServiceQuote",
    "ShippingQuote",
)
