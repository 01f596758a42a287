"""
Tests for the admin gate, form parsing and AdminWorkflow.
"""
from __future__ import annotations

from decimal import Decimal

import pytest
from kungfu import Error, Ok

from storefront import RemoteWriteError, ValidationError
from storefront.admin import (
    NEW,
    AdminGate,
    AdminWorkflow,
    BulkStock,
    Editing,
    Idle,
    ProductForm,
    parse_stock_value,
)
from storefront.catalog import ProductCache


class UnreachableAuthenticator:
    async def authenticate(self, credential):
        raise ConnectionError("identity service unreachable")


@pytest.fixture
async def gate(authenticator):
    gate = AdminGate(authenticator)
    (await gate.login("valid-token")).unwrap()
    return gate


@pytest.fixture
def workflow(catalog, gate):
    return AdminWorkflow(catalog, gate)


class TestGate:
    async def test_rejects_bad_credential(self, authenticator):
        gate = AdminGate(authenticator)

        result = await gate.login("wrong")

        assert isinstance(result, Error)
        assert not gate.authenticated

    async def test_empty_credential_skips_authenticator(self, authenticator):
        gate = AdminGate(authenticator)

        result = await gate.login("")

        assert isinstance(result.error, ValidationError)

    async def test_authenticator_failure_is_remote_error(self):
        gate = AdminGate(UnreachableAuthenticator())

        result = await gate.login("valid-token")

        assert isinstance(result, Error)
        assert isinstance(result.error, RemoteWriteError)
        assert result.error.operation == "authenticate"
        assert "unreachable" in str(result.error)
        assert not gate.authenticated

    async def test_logout(self, gate):
        gate.logout()

        assert gate.session is None
        assert isinstance(gate.require(), Error)

    async def test_workflow_requires_login(self, catalog, authenticator):
        workflow = AdminWorkflow(catalog, AdminGate(authenticator))

        assert isinstance(workflow.start_add(), Error)
        assert isinstance(workflow.mode, Idle)


class TestForm:
    def test_parse_valid_form(self):
        form = ProductForm(sku=" GRD-09 ", title="Grinder", price="49,90", stock="", category="")

        draft = form.parse().unwrap()

        assert draft.sku == "GRD-09"
        assert draft.price == Decimal("49.90")
        assert draft.stock == 0
        assert draft.category is None

    @pytest.mark.parametrize(
        "changes",
        [
            {"sku": ""},
            {"title": "  "},
            {"price": ""},
            {"price": "abc"},
            {"price": "-1"},
            {"stock": "2.5"},
            {"stock": "-3"},
        ],
    )
    def test_invalid_form(self, changes):
        form = ProductForm(sku="A", title="B", price="1").with_(**changes)

        assert isinstance(form.parse(), Error)

    def test_round_trip_from_product(self, products):
        form = ProductForm.from_product(products[0])

        assert form.parse().unwrap() == products[0].to_draft()

    @pytest.mark.parametrize(("raw", "ok"), [("0", True), ("12", True), ("", False), ("x", False), ("-1", False)])
    def test_parse_stock_value(self, raw, ok):
        assert isinstance(parse_stock_value(raw), Ok) is ok


class TestModes:
    async def test_only_one_mode_at_a_time(self, workflow, products):
        assert isinstance(workflow.start_add(), Ok)
        assert workflow.adding
        assert workflow.editing_id is None

        assert isinstance(workflow.start_edit(products[0]), Error)
        assert isinstance(workflow.start_bulk_stock(), Error)
        assert workflow.adding

    async def test_start_edit_prefills_form(self, workflow, products):
        workflow.start_edit(products[1])

        assert workflow.editing_id == "p2"
        assert not workflow.adding
        assert workflow.form.sku == "BNG-01"

    async def test_update_form_rejects_unknown_field(self, workflow, products):
        workflow.start_edit(products[1])
        before = workflow.form

        result = workflow.update_form(title="Bong", bogus="x")

        assert isinstance(result, Error)
        assert result.error.field == "form"
        assert "bogus" in str(result.error)
        assert workflow.form == before

    async def test_update_form_applies_known_fields(self, workflow, products):
        workflow.start_edit(products[1])

        form = workflow.update_form(title="Bong", stock="4").unwrap()

        assert form.title == "Bong"
        assert workflow.form.stock == "4"

    async def test_cancel_returns_to_idle_and_reloads(self, workflow):
        workflow.start_bulk_stock()

        listing = (await workflow.cancel()).unwrap()

        assert isinstance(workflow.mode, Idle)
        assert len(listing) == 5
        assert workflow.products == listing


class TestSave:
    async def test_add_product(self, workflow, catalog):
        workflow.start_add()
        workflow.update_form(sku="NEW-01", title="Tray", price="19.90", stock="4", category="tray")

        product = (await workflow.save()).unwrap()

        assert isinstance(workflow.mode, Idle)
        assert catalog.get_product_by_sku("NEW-01") == product
        assert product in workflow.products

    async def test_edit_product(self, workflow, catalog, products):
        workflow.start_edit(products[0])
        workflow.update_form(price="50.00")

        (await workflow.save()).unwrap()

        assert catalog.get_product("p1").price == Decimal("50.00")

    async def test_invalid_form_keeps_mode(self, workflow):
        workflow.start_add()
        workflow.update_form(sku="NEW-01")

        result = await workflow.save()

        assert isinstance(result.error, ValidationError)
        assert isinstance(workflow.mode, Editing)
        assert workflow.mode.target is NEW

    async def test_failed_write_keeps_mode_and_mirror(self, failing_service, gate, products):
        catalog = ProductCache(failing_service)
        (await catalog.get_admin_products()).unwrap()
        workflow = AdminWorkflow(catalog, gate)
        workflow.start_edit(products[0])
        workflow.update_form(title="Renamed")

        result = await workflow.save()

        assert isinstance(result.error, RemoteWriteError)
        assert workflow.editing_id == "p1"
        assert workflow.form.title == "Renamed"
        assert catalog.get_product("p1").title == "Grinder"

        failing_service.fail_writes = False
        (await workflow.save()).unwrap()
        assert catalog.get_product("p1").title == "Renamed"

    async def test_save_outside_editing(self, workflow):
        result = await workflow.save()

        assert isinstance(result.error, ValidationError)


class TestStock:
    async def test_update_stock(self, workflow, catalog):
        workflow.start_bulk_stock()

        product = (await workflow.update_stock("p1", "8")).unwrap()

        assert product.stock == 8
        assert catalog.get_product_by_sku("GRD-01").stock == 8
        assert isinstance(workflow.mode, Idle)

    async def test_update_stock_rejects_bad_value(self, workflow, catalog):
        workflow.start_bulk_stock()

        result = await workflow.update_stock("p1", "-2")

        assert isinstance(result.error, ValidationError)
        assert isinstance(workflow.mode, BulkStock)
        assert catalog.get_product("p1").stock == 3

    async def test_update_stock_requires_bulk_mode(self, workflow):
        result = await workflow.update_stock("p1", "5")

        assert isinstance(result, Error)


class TestDelete:
    async def test_delete(self, workflow, catalog):
        deleted = (await workflow.delete("p3")).unwrap()

        assert deleted == "p3"
        assert catalog.get_product("p3") is None
        assert all(p.id != "p3" for p in workflow.products)

    async def test_cannot_delete_product_being_edited(self, workflow, products):
        workflow.start_edit(products[2])

        result = await workflow.delete("p3")

        assert isinstance(result.error, ValidationError)
