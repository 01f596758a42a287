"""
Shipping — carrier quotes and the selected service level.

    from storefront import shipping

    client = shipping.ShippingQuoteClient.from_settings(settings)
    selection = shipping.ShippingSelection()
    await selection.refresh(client, "01310100", item_count=2, current_weight=lambda: 700)
    selection.select(shipping.ServiceLevel.EXPRESS)
"""

from __future__ import annotations

from storefront.shipping._types import (
    ServiceLevel,
    Parcel,
    GRAMS_PER_ITEM,
    parcel_for,
    ServiceQuote,
    ShippingQuote,
)
from storefront.shipping._client import (
    POSTAL_CODE_LENGTH,
    FetchJson,
    normalize_postal_code,
    validate_postal_code,
    parse_quote,
    aiohttp_fetch_json,
    ShippingQuoteClient,
)
from storefront.shipping._selection import ShippingSelection

__all__ = (
    "ServiceLevel",
    "Parcel",
    "GRAMS_PER_ITEM",
    "parcel_for",
    "ServiceQuote",
    "ShippingQuote",
    "POSTAL_CODE_LENGTH",
    "FetchJson",
    "normalize_postal_code",
    "validate_postal_code",
    "parse_quote",
    "aiohttp_fetch_json",
    "ShippingQuoteClient",
    "ShippingSelection",
)
