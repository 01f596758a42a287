"""
AdminWorkflow — inventory editor state machine.

    Idle ──start_add / start_edit──→ Editing ──save Ok / cancel──→ Idle
      │                                 └─ save Error → Editing (form kept)
      └──start_bulk_stock──→ BulkStock ──update_stock Ok / cancel──→ Idle

Every write goes through ProductCache: remote write, mirror patch,
invalidation, then a full reload of the admin listing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum

from kungfu import LazyCoroResult, Result, Ok, Error

from storefront._errors import RemoteWriteError, ValidationError
from storefront._observable import Observable
from storefront._types import ProductId
from storefront.admin._auth import AdminGate
from storefront.admin._form import ProductForm, parse_stock_value
from storefront.catalog import Listing, Product, ProductCache

logger = logging.getLogger(__name__)

_FORM_FIELDS = frozenset(f.name for f in fields(ProductForm))

# ═══════════════════════════════════════════════════════════════════════════════
# Modes
# ═══════════════════════════════════════════════════════════════════════════════


class NewProduct(Enum):
    NEW = "new"


NEW = NewProduct.NEW
"""Editing target for a product that does not exist yet."""


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Editing:
    target: ProductId | NewProduct
    form: ProductForm


@dataclass(frozen=True, slots=True)
class BulkStock:
    pass


type Mode = Idle | Editing | BulkStock

type AdminError = ValidationError | RemoteWriteError

# ═══════════════════════════════════════════════════════════════════════════════
# Workflow
# ═══════════════════════════════════════════════════════════════════════════════


class AdminWorkflow(Observable):
    """
    Admin inventory editor.

    Only one mode is active at a time, so `adding` and `editing_id`
    can never both be set. Failed writes keep the current mode and
    form so the admin can retry.

    Example:
        workflow = AdminWorkflow(catalog, gate)
        workflow.start_add()
        workflow.update_form(sku="SKU-9", title="Grinder", price="49.90")

        match await workflow.save():
            case Ok(product):
                ...
            case Error(e):
                alert(str(e))
    """

    def __init__(self, catalog: ProductCache, gate: AdminGate) -> None:
        super().__init__()
        self._catalog = catalog
        self._gate = gate
        self._mode: Mode = Idle()
        self._products: Listing = ()

    # ───────────────────────────────────────────────────────────────────────
    # State
    # ───────────────────────────────────────────────────────────────────────

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def adding(self) -> bool:
        return isinstance(self._mode, Editing) and self._mode.target is NEW

    @property
    def editing_id(self) -> ProductId | None:
        match self._mode:
            case Editing(target=str() as product_id):
                return product_id
            case _:
                return None

    @property
    def form(self) -> ProductForm | None:
        return self._mode.form if isinstance(self._mode, Editing) else None

    @property
    def products(self) -> Listing:
        """Admin listing as of the last reload."""
        return self._products

    def _set_mode(self, mode: Mode) -> None:
        self._mode = mode
        self._notify()

    def _enter(self, mode: Mode) -> Result[Mode, ValidationError]:
        auth = self._gate.require()
        if isinstance(auth, Error):
            return auth
        if not isinstance(self._mode, Idle):
            return Error(ValidationError("mode", "Finish or cancel the open form first"))
        self._set_mode(mode)
        return Ok(mode)

    # ───────────────────────────────────────────────────────────────────────
    # Transitions
    # ───────────────────────────────────────────────────────────────────────

    def start_add(self) -> Result[Mode, ValidationError]:
        return self._enter(Editing(NEW, ProductForm()))

    def start_edit(self, product: Product) -> Result[Mode, ValidationError]:
        return self._enter(Editing(product.id, ProductForm.from_product(product)))

    def start_bulk_stock(self) -> Result[Mode, ValidationError]:
        return self._enter(BulkStock())

    def update_form(self, **changes: object) -> Result[ProductForm, ValidationError]:
        if not isinstance(self._mode, Editing):
            return Error(ValidationError("mode", "No form is open"))
        unknown = sorted(set(changes) - _FORM_FIELDS)
        if unknown:
            return Error(ValidationError("form", f"Unknown field: {', '.join(unknown)}"))
        form = self._mode.form.with_(**changes)
        self._set_mode(Editing(self._mode.target, form))
        return Ok(form)

    def cancel(self) -> LazyCoroResult[Listing, RemoteWriteError]:
        """Return to Idle. The returned reload is lazy: await it to refresh the listing."""
        if not isinstance(self._mode, Idle):
            self._set_mode(Idle())
        return self.reload()

    # ───────────────────────────────────────────────────────────────────────
    # Writes
    # ───────────────────────────────────────────────────────────────────────

    def reload(self) -> LazyCoroResult[Listing, RemoteWriteError]:
        async def execute() -> Result[Listing, RemoteWriteError]:
            self._catalog.invalidate_cache()
            result = await self._catalog.get_admin_products()
            match result:
                case Ok(listing):
                    self._products = listing
                    self._notify()
                case Error(e):
                    logger.error("Admin reload failed: %s", e)
            return result

        return LazyCoroResult(execute)

    async def _finish(self) -> None:
        self._set_mode(Idle())
        # the write already succeeded; a failed reload only leaves the listing stale
        await self.reload()

    def save(self) -> LazyCoroResult[Product, AdminError]:
        async def execute() -> Result[Product, AdminError]:
            auth = self._gate.require()
            if isinstance(auth, Error):
                return auth
            mode = self._mode
            if not isinstance(mode, Editing):
                return Error(ValidationError("mode", "No form is open"))

            draft = mode.form.parse()
            if isinstance(draft, Error):
                return draft

            if mode.target is NEW:
                result = await self._catalog.create(draft.value)
            else:
                result = await self._catalog.update(mode.target, draft.value)

            match result:
                case Ok(product):
                    await self._finish()
                    return Ok(product)
                case Error(e):
                    return Error(e)

        return LazyCoroResult(execute)

    def update_stock(self, product_id: ProductId, raw_value: str) -> LazyCoroResult[Product, AdminError]:
        async def execute() -> Result[Product, AdminError]:
            auth = self._gate.require()
            if isinstance(auth, Error):
                return auth
            if not isinstance(self._mode, BulkStock):
                return Error(ValidationError("mode", "Open the stock manager first"))

            stock = parse_stock_value(raw_value)
            if isinstance(stock, Error):
                return stock

            match await self._catalog.set_stock(product_id, stock.value):
                case Ok(product):
                    logger.info("Stock of %s set to %d", product.sku, product.stock)
                    await self._finish()
                    return Ok(product)
                case Error(e):
                    return Error(e)

        return LazyCoroResult(execute)

    def delete(self, product_id: ProductId) -> LazyCoroResult[ProductId, AdminError]:
        async def execute() -> Result[ProductId, AdminError]:
            auth = self._gate.require()
            if isinstance(auth, Error):
                return auth
            if self.editing_id == product_id:
                return Error(ValidationError("mode", "Close the form before deleting this product"))

            match await self._catalog.delete(product_id):
                case Ok(deleted):
                    await self.reload()
                    return Ok(deleted)
                case Error(e):
                    return Error(e)

        return LazyCoroResult(execute)


__all__ = (
    "NewProduct",
    "NEW",
    "Idle",
    "Editing",
    "BulkStock",
    "Mode",
    "AdminError",
    "AdminWorkflow",
)
