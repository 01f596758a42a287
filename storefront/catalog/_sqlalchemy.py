"""
SQLAlchemy integration — product table and ProductService implementation.

Usage:
    session_factory, engine = await create_database("sqlite+aiosqlite:///shop.db")
    service = SQLAlchemyProductService(session_factory)
    catalog = ProductCache(service)
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String, Text, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from storefront._errors import NotFoundError
from storefront._types import ProductId
from storefront.catalog._types import Product, ProductDraft

# ═══════════════════════════════════════════════════════════════════════════════
# Table
# ═══════════════════════════════════════════════════════════════════════════════


class Base(DeclarativeBase):
    pass


class ProductTable(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    sku: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)

    def to_product(self) -> Product:
        return Product(
            id=self.id,
            sku=self.sku,
            title=self.title,
            price=Decimal(self.price),
            description=self.description,
            image_url=self.image_url,
            stock=self.stock,
            active=self.active,
            category=self.category,
        )

    def apply(self, draft: ProductDraft) -> None:
        self.sku = draft.sku
        self.title = draft.title
        self.price = draft.price
        self.description = draft.description
        self.image_url = draft.image_url
        self.stock = draft.stock
        self.active = draft.active
        self.category = draft.category


# ═══════════════════════════════════════════════════════════════════════════════
# Service
# ═══════════════════════════════════════════════════════════════════════════════


class SQLAlchemyProductService:
    """
    ProductService over an async SQLAlchemy session factory.

    Each call runs in its own session and commits before returning, so
    the returned row is the stored one.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _load(self, session: AsyncSession, product_id: ProductId) -> ProductTable:
        row = await session.get(ProductTable, product_id)
        if row is None:
            raise NotFoundError("Product", product_id)
        return row

    async def insert(self, draft: ProductDraft) -> Product:
        async with self._session_factory() as session:
            row = ProductTable(id=uuid.uuid4().hex)
            row.apply(draft)
            session.add(row)
            await session.commit()
            return row.to_product()

    async def update(self, product_id: ProductId, draft: ProductDraft) -> Product:
        async with self._session_factory() as session:
            row = await self._load(session, product_id)
            row.apply(draft)
            await session.commit()
            return row.to_product()

    async def update_stock(self, product_id: ProductId, stock: int) -> Product:
        async with self._session_factory() as session:
            row = await self._load(session, product_id)
            row.stock = stock
            await session.commit()
            return row.to_product()

    async def delete(self, product_id: ProductId) -> None:
        async with self._session_factory() as session:
            row = await self._load(session, product_id)
            await session.delete(row)
            await session.commit()

    async def select_active(self) -> list[Product]:
        async with self._session_factory() as session:
            rows = await session.scalars(
                select(ProductTable).where(ProductTable.active.is_(True)).order_by(ProductTable.sku)
            )
            return [row.to_product() for row in rows]

    async def select_all(self) -> list[Product]:
        async with self._session_factory() as session:
            rows = await session.scalars(select(ProductTable).order_by(ProductTable.sku))
            return [row.to_product() for row in rows]


# ═══════════════════════════════════════════════════════════════════════════════
# Database Setup
# ═══════════════════════════════════════════════════════════════════════════════


async def create_database(
    url: str = "sqlite+aiosqlite:///:memory:",
) -> tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """Create tables and return (session_factory, engine)."""
    engine = create_async_engine(url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    return async_sessionmaker(engine, expire_on_commit=False), engine


__all__ = (
    "Base",
    "ProductTable",
    "SQLAlchemyProductService",
    "create_database",
)
