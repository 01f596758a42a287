"""
In-process product service.
"""

from __future__ import annotations

import uuid
from dataclasses import replace

from storefront._errors import NotFoundError, ValidationError
from storefront._types import ProductId
from storefront.catalog._types import Product, ProductDraft


class MemoryProductService:
    """
    Dict-backed ProductService.

    Enforces sku uniqueness the way the remote table does.

    Example:
        service = MemoryProductService()
        service.seed([Product("p1", "SKU-1", "Grinder", Decimal("45.00"), stock=3)])
    """

    def __init__(self) -> None:
        self._rows: dict[ProductId, Product] = {}

    def seed(self, products: list[Product]) -> None:
        self._rows = {p.id: p for p in products}

    def _check_sku(self, draft: ProductDraft, product_id: ProductId | None = None) -> None:
        for row in self._rows.values():
            if row.sku == draft.sku and row.id != product_id:
                raise ValidationError("sku", f"duplicate sku {draft.sku}")

    def _require(self, product_id: ProductId) -> Product:
        row = self._rows.get(product_id)
        if row is None:
            raise NotFoundError("Product", product_id)
        return row

    async def insert(self, draft: ProductDraft) -> Product:
        self._check_sku(draft)
        product = Product.from_draft(uuid.uuid4().hex, draft)
        self._rows[product.id] = product
        return product

    async def update(self, product_id: ProductId, draft: ProductDraft) -> Product:
        self._require(product_id)
        self._check_sku(draft, product_id)
        product = Product.from_draft(product_id, draft)
        self._rows[product_id] = product
        return product

    async def update_stock(self, product_id: ProductId, stock: int) -> Product:
        product = replace(self._require(product_id), stock=stock)
        self._rows[product_id] = product
        return product

    async def delete(self, product_id: ProductId) -> None:
        self._require(product_id)
        del self._rows[product_id]

    async def select_active(self) -> list[Product]:
        return [p for p in self._rows.values() if p.active]

    async def select_all(self) -> list[Product]:
        return list(self._rows.values())


__all__ = ("MemoryProductService",)
