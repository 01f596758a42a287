"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from decimal import Decimal
from typing import Any

from storefront.admin import AdminSession
from storefront.catalog import ProductDraft


# Seed data
DRAFTS = (
    ProductDraft("GRD-01", "Aluminium grinder", Decimal("45.00"), stock=3, category="grinder"),
    ProductDraft("BNG-01", "Glass bong", Decimal("120.00"), stock=1, category="bong"),
    ProductDraft("PAP-01", "Rolling papers", Decimal("5.50"), stock=10, category="papers"),
    ProductDraft("VAP-01", "Vaporizer", Decimal("300.00"), stock=0, category="vaporizer"),
)


# Fake quote provider
class FakeQuotes:
    """Answers like the real provider; grows with the parcel weight."""

    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self, url: str) -> Any:
        await asyncio.sleep(0.01)
        self.calls += 1
        weight = int(url.rstrip("/").split("/")[-5])
        return {
            "valorpac": f"{18 + weight / 1000:.2f}".replace(".", ","),
            "prazopac": "7",
            "valorsedex": f"{29 + weight / 500:.2f}".replace(".", ","),
            "prazosedex": "2",
        }


# Fake identity service
class DemoAuthenticator:
    async def authenticate(self, credential: str) -> AdminSession | None:
        await asyncio.sleep(0.01)
        return AdminSession("demo-admin") if credential == "demo-token" else None


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    asyncio.run(main())
