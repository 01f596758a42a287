"""
ShippingQuoteClient — carrier rates for a destination postal code.

    client = ShippingQuoteClient.from_settings(settings)
    result = await client.quote("01310100", item_count=3)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from decimal import Decimal, InvalidOperation
from typing import Any

import aiohttp
from kungfu import LazyCoroResult, Result, Ok, Error
from combinators import lift as L

from storefront._errors import RemoteWriteError, ValidationError
from storefront.config import Settings
from storefront.shipping._types import Parcel, ServiceQuote, ShippingQuote, parcel_for

logger = logging.getLogger(__name__)

POSTAL_CODE_LENGTH = 8

type FetchJson = Callable[[str], Awaitable[Any]]

# ═══════════════════════════════════════════════════════════════════════════════
# Postal Codes
# ═══════════════════════════════════════════════════════════════════════════════


def normalize_postal_code(raw: str) -> str:
    """Strip non-digits and cap at 8 characters, as typed into the field."""
    return re.sub(r"\D", "", raw)[:POSTAL_CODE_LENGTH]


def validate_postal_code(code: str) -> Result[str, ValidationError]:
    if len(code) != POSTAL_CODE_LENGTH or not code.isdigit():
        return Error(ValidationError("postal_code", "Postal code must have exactly 8 digits"))
    return Ok(code)


# ═══════════════════════════════════════════════════════════════════════════════
# Response Parsing
# ═══════════════════════════════════════════════════════════════════════════════


def _parse_rate(value: object) -> Decimal:
    text = str(value).strip()
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        rate = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"invalid rate {value!r}") from e
    if not rate.is_finite() or rate < 0:
        raise ValueError(f"invalid rate {value!r}")
    return rate


def _parse_days(value: object) -> int | None:
    digits = re.sub(r"\D", "", str(value or ""))
    return int(digits) if digits else None


def parse_quote(data: Any, destination: str, weight: int) -> ShippingQuote:
    """
    Build a quote from the provider payload.

    Raises ValueError/KeyError/TypeError on a malformed payload.
    """
    if not isinstance(data, dict):
        raise TypeError(f"expected JSON object, got {type(data).__name__}")
    return ShippingQuote(
        destination=destination,
        weight=weight,
        standard=ServiceQuote(_parse_rate(data["valorpac"]), _parse_days(data.get("prazopac"))),
        express=ServiceQuote(_parse_rate(data["valorsedex"]), _parse_days(data.get("prazosedex"))),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Transport
# ═══════════════════════════════════════════════════════════════════════════════


def aiohttp_fetch_json(timeout: float) -> FetchJson:
    async def fetch(url: str) -> Any:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
                resp.raise_for_status()
                return await resp.json(content_type=None)

    return fetch


# ═══════════════════════════════════════════════════════════════════════════════
# Client
# ═══════════════════════════════════════════════════════════════════════════════


class ShippingQuoteClient:
    """
    Quote provider client.

    The provider is best-effort: failures are reported, never retried.
    """

    def __init__(
        self,
        origin_postal_code: str,
        base_url: str,
        key: str,
        fetch_json: FetchJson | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._origin = origin_postal_code
        self._base_url = base_url.rstrip("/")
        self._key = key
        self._fetch_json = fetch_json or aiohttp_fetch_json(timeout)

    @classmethod
    def from_settings(cls, settings: Settings, fetch_json: FetchJson | None = None) -> ShippingQuoteClient:
        return cls(
            origin_postal_code=settings.origin_postal_code,
            base_url=settings.quote_url,
            key=settings.quote_key,
            fetch_json=fetch_json,
            timeout=settings.quote_timeout,
        )

    def url_for(self, destination: str, parcel: Parcel) -> str:
        return (
            f"{self._base_url}/{self._origin}/{destination}/{parcel.weight}"
            f"/{parcel.height}/{parcel.width}/{parcel.length}/{self._key}"
        )

    async def _fetch(
        self,
        destination: str,
        item_count: int,
    ) -> Result[ShippingQuote, RemoteWriteError]:
        parcel = parcel_for(item_count)
        url = self.url_for(destination, parcel)

        async def fetch() -> ShippingQuote:
            data = await self._fetch_json(url)
            return parse_quote(data, destination, parcel.weight)

        result = await L.catching_async(
            fetch,
            on_error=lambda e: RemoteWriteError("shipping_quote", str(e) or type(e).__name__),
        )
        match result:
            case Ok(quote):
                logger.info("Quoted %s (%dg): %s / %s", destination, parcel.weight,
                            quote.standard.rate, quote.express.rate)
            case Error(e):
                logger.warning("Shipping quote for %s failed: %s", destination, e)
        return result

    def quote(
        self,
        postal_code: str,
        item_count: int,
    ) -> LazyCoroResult[ShippingQuote, ValidationError | RemoteWriteError]:
        """
        Fetch a quote for the cart's parcel.

        A malformed postal code fails without touching the network.
        """

        async def execute() -> Result[ShippingQuote, ValidationError | RemoteWriteError]:
            match validate_postal_code(postal_code):
                case Error(e):
                    return Error(e)
                case Ok(destination):
                    return await self._fetch(destination, item_count)

        return LazyCoroResult(execute)


__all__ = (
    "POSTAL_CODE_LENGTH",
    "FetchJson",
    "normalize_postal_code",
    "validate_postal_code",
    "parse_quote",
    "aiohttp_fetch_json",
    "ShippingQuoteClient",
)
