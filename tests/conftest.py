"""Shared fixtures: a controllable clock, seeded catalogs and a fake quote transport."""
from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest

from storefront.admin import AdminSession
from storefront.catalog import MemoryProductService, Product, ProductCache
from storefront.shipping import ShippingQuoteClient


class FakeClock:
    """Clock advanced by hand, in milliseconds."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        self._now += ms


class FakeTransport:
    """Records requested URLs and answers with a canned payload or exception."""

    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = payload if payload is not None else {
            "valorpac": "25,00",
            "prazopac": "7",
            "valorsedex": "30,00",
            "prazosedex": "2",
        }
        self.error = error
        self.urls: list[str] = []
        self.before_reply = None

    async def __call__(self, url: str) -> Any:
        self.urls.append(url)
        if self.before_reply is not None:
            self.before_reply()
        if self.error is not None:
            raise self.error
        return self.payload


class FailingProductService(MemoryProductService):
    """Memory service whose writes fail, for remote-write error paths."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = True

    async def insert(self, draft):
        if self.fail_writes:
            raise ConnectionError("database unavailable")
        return await super().insert(draft)

    async def update(self, product_id, draft):
        if self.fail_writes:
            raise ConnectionError("database unavailable")
        return await super().update(product_id, draft)

    async def update_stock(self, product_id, stock):
        if self.fail_writes:
            raise ConnectionError("database unavailable")
        return await super().update_stock(product_id, stock)

    async def delete(self, product_id):
        if self.fail_writes:
            raise ConnectionError("database unavailable")
        return await super().delete(product_id)


class StaticAuthenticator:
    def __init__(self, valid: str = "valid-token") -> None:
        self.valid = valid

    async def authenticate(self, credential: str) -> AdminSession | None:
        return AdminSession("admin@example.com") if credential == self.valid else None


def make_products() -> list[Product]:
    return [
        Product("p1", "GRD-01", "Grinder", Decimal("45.00"), stock=3, category="grinder"),
        Product("p2", "BNG-01", "Glass bong", Decimal("120.00"), stock=1, category="bong"),
        Product("p3", "PAP-01", "Rolling papers", Decimal("5.50"), stock=10, category="papers"),
        Product("p4", "VAP-01", "Vaporizer", Decimal("300.00"), stock=0, category="vaporizer"),
        Product("p5", "OLD-01", "Retired tray", Decimal("20.00"), stock=5, active=False),
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def products() -> list[Product]:
    return make_products()


@pytest.fixture
def service(products: list[Product]) -> MemoryProductService:
    service = MemoryProductService()
    service.seed(products)
    return service


@pytest.fixture
def failing_service(products: list[Product]) -> FailingProductService:
    service = FailingProductService()
    service.seed(products)
    return service


@pytest.fixture
async def catalog(service: MemoryProductService) -> ProductCache:
    catalog = ProductCache(service)
    (await catalog.get_admin_products()).unwrap()
    return catalog


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> ShippingQuoteClient:
    return ShippingQuoteClient(
        origin_postal_code="01001000",
        base_url="https://quotes.example.com/ws/json-frete/",
        key="teste",
        fetch_json=transport,
    )


@pytest.fixture
def authenticator() -> StaticAuthenticator:
    return StaticAuthenticator()
