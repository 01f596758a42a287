"""
ProductForm — raw admin form input and its parsing into a ProductDraft.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation

from kungfu import Result, Ok, Error

from storefront._errors import ValidationError
from storefront.catalog import Product, ProductDraft


def parse_stock_value(raw: str, field: str = "stock") -> Result[int, ValidationError]:
    """Integer ≥ 0."""
    text = raw.strip()
    try:
        value = int(text)
    except ValueError:
        return Error(ValidationError(field, "Stock must be a whole number greater than or equal to 0"))
    if value < 0:
        return Error(ValidationError(field, "Stock must be a whole number greater than or equal to 0"))
    return Ok(value)


def _parse_price(raw: str) -> Result[Decimal, ValidationError]:
    try:
        price = Decimal(raw.strip().replace(",", "."))
    except InvalidOperation:
        return Error(ValidationError("price", "Price must be a number"))
    if not price.is_finite() or price < 0:
        return Error(ValidationError("price", "Price must be zero or more"))
    return Ok(price)


@dataclass(frozen=True, slots=True)
class ProductForm:
    """Form fields as typed. Everything is text except the active toggle."""

    sku: str = ""
    title: str = ""
    price: str = ""
    description: str = ""
    image_url: str = ""
    stock: str = ""
    active: bool = True
    category: str = ""

    @classmethod
    def from_product(cls, product: Product) -> ProductForm:
        return cls(
            sku=product.sku,
            title=product.title,
            price=str(product.price),
            description=product.description,
            image_url=product.image_url,
            stock=str(product.stock),
            active=product.active,
            category=product.category or "",
        )

    def with_(self, **changes: object) -> ProductForm:
        return replace(self, **changes)

    def parse(self) -> Result[ProductDraft, ValidationError]:
        sku = self.sku.strip()
        title = self.title.strip()
        if not sku or not title or not self.price.strip():
            return Error(ValidationError("form", "Fill in the required fields: SKU, title and price"))

        price = _parse_price(self.price)
        if isinstance(price, Error):
            return price

        stock: Result[int, ValidationError] = Ok(0)
        if self.stock.strip():
            stock = parse_stock_value(self.stock)
            if isinstance(stock, Error):
                return stock

        return Ok(
            ProductDraft(
                sku=sku,
                title=title,
                price=price.value,
                description=self.description,
                image_url=self.image_url,
                stock=stock.value,
                active=self.active,
                category=self.category.strip() or None,
            )
        )


__all__ = ("ProductForm", "parse_stock_value")
