"""
Catalog types — products and the persistence contract.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Protocol

from storefront._types import ProductId, Sku

# ═══════════════════════════════════════════════════════════════════════════════
# Product
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ProductDraft:
    """Writable product fields, as submitted by the admin form."""

    sku: Sku
    title: str
    price: Decimal
    description: str = ""
    image_url: str = ""
    stock: int = 0
    active: bool = True
    category: str | None = None


@dataclass(frozen=True, slots=True)
class Product:
    id: ProductId
    sku: Sku
    title: str
    price: Decimal
    description: str = ""
    image_url: str = ""
    stock: int = 0
    active: bool = True
    category: str | None = None

    @classmethod
    def from_draft(cls, product_id: ProductId, draft: ProductDraft) -> Product:
        return cls(
            id=product_id,
            sku=draft.sku,
            title=draft.title,
            price=draft.price,
            description=draft.description,
            image_url=draft.image_url,
            stock=draft.stock,
            active=draft.active,
            category=draft.category,
        )

    def to_draft(self) -> ProductDraft:
        return ProductDraft(
            sku=self.sku,
            title=self.title,
            price=self.price,
            description=self.description,
            image_url=self.image_url,
            stock=self.stock,
            active=self.active,
            category=self.category,
        )

    def with_stock(self, stock: int) -> Product:
        return replace(self, stock=stock)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class ListingView(Enum):
    """Which slice of the catalog a listing read returns."""

    ACTIVE = "active"
    ALL = "all"


type Listing = tuple[Product, ...]

# ═══════════════════════════════════════════════════════════════════════════════
# Persistence Service Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class ProductService(Protocol):
    """
    Remote product table.

    Every method may raise a provider-specific exception; callers lift
    failures into RemoteWriteError and never retry automatically.

    Example (HTTP backend):
        class RestProductService:
            def __init__(self, session: aiohttp.ClientSession, base_url: str):
                self.session = session
                self.base_url = base_url

            async def insert(self, draft: ProductDraft) -> Product:
                async with self.session.post(self.base_url, json=encode(draft)) as resp:
                    resp.raise_for_status()
                    return decode(await resp.json())

            # ... other methods
    """

    async def insert(self, draft: ProductDraft) -> Product:
        """Insert one row and return it as stored."""
        ...

    async def update(self, product_id: ProductId, draft: ProductDraft) -> Product:
        """Update one row by id and return it as stored."""
        ...

    async def update_stock(self, product_id: ProductId, stock: int) -> Product:
        """Update only the stock column and return the row."""
        ...

    async def delete(self, product_id: ProductId) -> None:
        ...

    async def select_active(self) -> list[Product]:
        ...

    async def select_all(self) -> list[Product]:
        ...


__all__ = (
    "Product",
    "ProductDraft",
    "ListingView",
    "Listing",
    "ProductService",
)
