"""
Tests for CartStore.

Tests:
- Stock bound on every increment
- Fallback lookup when the mirror does not know a sku
- decrement / remove_line / clear
- Notices and change notifications
"""
from __future__ import annotations

from decimal import Decimal

import pytest

from storefront.cart import CartStore
from storefront.catalog import MemoryProductService, Product, ProductCache
from storefront.notices import Notices


class TestAdd:
    def test_add_increments_quantity(self, catalog):
        cart = CartStore(catalog)

        assert cart.add("GRD-01")
        assert cart.add("GRD-01")

        assert cart.quantity("GRD-01") == 2
        assert cart.item_count == 2

    def test_add_never_exceeds_stock(self, catalog):
        cart = CartStore(catalog)

        results = [cart.add("GRD-01") for _ in range(5)]

        assert results == [True, True, True, False, False]
        assert cart.quantity("GRD-01") == 3

    def test_add_out_of_stock_product_is_rejected(self, catalog):
        cart = CartStore(catalog)

        assert not cart.add("VAP-01")
        assert "VAP-01" not in cart
        assert cart.is_empty

    def test_add_unknown_sku_is_noop(self, catalog):
        cart = CartStore(catalog)
        calls: list[int] = []
        cart.subscribe(lambda: calls.append(1))

        assert not cart.add("NOPE")
        assert cart.is_empty
        assert calls == []

    def test_add_uses_fallback_listing_on_mirror_miss(self):
        catalog = ProductCache(MemoryProductService())
        cart = CartStore(catalog)
        listing = [Product("x1", "NEW-01", "Fresh", Decimal("10"), stock=1)]

        assert cart.add("NEW-01", listing)
        assert not cart.add("NEW-01", listing)
        assert cart.quantity("NEW-01") == 1

    def test_stock_bound_follows_mirror_patch(self, catalog):
        cart = CartStore(catalog)
        cart.add("GRD-01")

        catalog.update_local_product(catalog.get_product_by_sku("GRD-01").with_stock(1))

        assert not cart.add("GRD-01")
        assert cart.quantity("GRD-01") == 1


class TestRemoval:
    def test_decrement_then_add_round_trips(self, catalog):
        cart = CartStore(catalog)
        cart.add("PAP-01")
        cart.add("PAP-01")

        cart.decrement("PAP-01")
        cart.add("PAP-01")

        assert cart.quantity("PAP-01") == 2

    def test_decrement_at_one_removes_line(self, catalog):
        cart = CartStore(catalog)
        cart.add("PAP-01")

        cart.decrement("PAP-01")
        assert "PAP-01" not in cart

        cart.add("PAP-01")
        assert cart.quantity("PAP-01") == 1

    def test_decrement_unknown_is_noop(self, catalog):
        cart = CartStore(catalog)
        cart.decrement("NOPE")
        assert cart.is_empty

    def test_remove_line_drops_whole_quantity(self, catalog):
        cart = CartStore(catalog)
        cart.add("PAP-01")
        cart.add("PAP-01")
        cart.add("GRD-01")

        cart.remove_line("PAP-01")

        assert dict(cart.lines()) == {"GRD-01": 1}
        assert len(cart) == 1

    def test_clear_empties_cart(self, catalog):
        cart = CartStore(catalog)
        cart.add("PAP-01")
        cart.add("GRD-01")

        cart.clear()

        assert cart.is_empty
        assert cart.item_count == 0


class TestNotices:
    def test_add_and_clear_messages(self, catalog, clock):
        notices = Notices(clock)
        cart = CartStore(catalog, notices)

        cart.add("BNG-01")
        assert notices.current == "BNG-01 added to cart"

        cart.add("BNG-01")
        assert notices.current == "Insufficient stock for BNG-01"

        cart.clear()
        assert notices.current == "Cart cleared"

    def test_clear_on_empty_cart_shows_nothing(self, catalog, clock):
        notices = Notices(clock)
        cart = CartStore(catalog, notices)

        cart.clear()

        assert notices.current == ""

    def test_notice_expires(self, catalog, clock):
        notices = Notices(clock, duration_ms=2000)
        cart = CartStore(catalog, notices)
        cart.add("GRD-01")

        clock.advance(1999)
        assert notices.current == "GRD-01 added to cart"
        clock.advance(1)
        assert notices.current == ""

    def test_reading_after_deadline_fires_nothing(self, clock):
        notices = Notices(clock, duration_ms=2000)
        notices.show("Saved")
        fired: list[str] = []
        notices.subscribe(lambda: fired.append(notices.current))

        clock.advance(2000)
        assert notices.current == ""
        assert notices.current == ""
        assert fired == []

    def test_expire_clears_once_past_deadline(self, clock):
        notices = Notices(clock, duration_ms=2000)
        notices.show("Saved")
        fired: list[str] = []
        notices.subscribe(lambda: fired.append(notices.current))

        clock.advance(1999)
        assert not notices.expire()
        clock.advance(1)
        assert notices.expire()
        assert not notices.expire()

        assert fired == [""]


class TestSnapshot:
    def test_lines_is_read_only_snapshot(self, catalog):
        cart = CartStore(catalog)
        cart.add("GRD-01")

        lines = cart.lines()
        cart.add("GRD-01")

        assert lines["GRD-01"] == 1
        with pytest.raises(TypeError):
            lines["GRD-01"] = 9  # type: ignore[index]
        assert cart.quantity("GRD-01") == 2

    def test_listeners_fire_on_effective_mutations(self, catalog):
        cart = CartStore(catalog)
        calls: list[int] = []
        unsubscribe = cart.subscribe(lambda: calls.append(cart.item_count))

        cart.add("GRD-01")
        cart.add("VAP-01")
        cart.decrement("GRD-01")
        unsubscribe()
        cart.add("GRD-01")

        assert calls == [1, 0]
