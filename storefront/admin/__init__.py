"""
Admin — authenticated inventory editing.

    from storefront import admin

    gate = admin.AdminGate(my_authenticator)
    await gate.login(token)
    workflow = admin.AdminWorkflow(catalog, gate)
"""

from __future__ import annotations

from storefront.admin._auth import AdminSession, Authenticator, AdminGate
from storefront.admin._form import ProductForm, parse_stock_value
from storefront.admin._workflow import (
    NewProduct,
    NEW,
    Idle,
    Editing,
    BulkStock,
    Mode,
    AdminError,
    AdminWorkflow,
)

__all__ = (
    "AdminSession",
    "Authenticator",
    "AdminGate",
    "ProductForm",
    "parse_stock_value",
    "NewProduct",
    "NEW",
    "Idle",
    "Editing",
    "BulkStock",
    "Mode",
    "AdminError",
    "AdminWorkflow",
)
