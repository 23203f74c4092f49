"""Testy koszyka uzytkownika."""

from decimal import Decimal

import pytest

from conftest import ALICE, BOB
from storefront.domain.errors import (
    CatalogUnavailable,
    InvalidArgument,
    ProductNotFound,
    ProductNotInCart,
    StorageFailure,
)
from storefront.services.cart_service import CartService


class TestGetOrCreate:
    def test_creates_cart_once(self, cart_service):
        first = cart_service.get_or_create_cart(ALICE)
        second = cart_service.get_or_create_cart(ALICE)
        assert first.id == second.id

    def test_carts_are_per_user(self, cart_service):
        assert cart_service.get_or_create_cart(ALICE).id != cart_service.get_or_create_cart(BOB).id

    def test_empty_cart_view(self, cart_service):
        view = cart_service.get_cart(ALICE)
        assert view["user_id"] == ALICE
        assert view["items"] == []
        assert view["total"] == Decimal("0.00")

    def test_unknown_user_is_storage_failure(self, cart_service):
        with pytest.raises(StorageFailure):
            cart_service.get_or_create_cart(404)

    def test_concurrent_creation_rereads_existing_cart(self, db, catalog, monkeypatch):
        service = CartService(db, catalog)
        existing = service.get_or_create_cart(ALICE)

        #przegrany wyscig: pierwszy odczyt pusty, insert trafia na konflikt
        calls = []
        original = service.repo.get_cart_by_user

        def racing_lookup(user_id):
            calls.append(user_id)
            if len(calls) == 1:
                return None
            return original(user_id)

        monkeypatch.setattr(service.repo, "get_cart_by_user", racing_lookup)

        cart = service.get_or_create_cart(ALICE)

        assert cart.id == existing.id
        assert len(calls) == 2


class TestAddProduct:
    def test_add_new_product(self, cart_service):
        view = cart_service.add_product(ALICE, 1, 2)

        assert len(view["items"]) == 1
        item = view["items"][0]
        assert item["product_id"] == 1
        assert item["quantity"] == 2
        assert item["price"] == Decimal("10.00")
        assert view["total"] == Decimal("20.00")

    def test_adding_again_merges_and_takes_newest_price(self, cart_service, catalog):
        cart_service.add_product(ALICE, 1, 2)
        catalog.prices[1] = Decimal("12.50")

        view = cart_service.add_product(ALICE, 1, 3)

        assert len(view["items"]) == 1
        assert view["items"][0]["quantity"] == 5
        assert view["items"][0]["price"] == Decimal("12.50")
        assert view["total"] == Decimal("62.50")

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, cart_service, catalog, quantity):
        with pytest.raises(InvalidArgument):
            cart_service.add_product(ALICE, 1, quantity)
        assert catalog.calls == []

    def test_unknown_product(self, cart_service):
        with pytest.raises(ProductNotFound):
            cart_service.add_product(ALICE, 999, 1)
        assert cart_service.get_cart(ALICE)["items"] == []

    def test_catalog_unavailable(self, cart_service, catalog):
        catalog.available = False
        with pytest.raises(CatalogUnavailable):
            cart_service.add_product(ALICE, 1, 1)

    def test_items_listed_in_insertion_order(self, cart_service):
        for product_id in (3, 1, 2):
            cart_service.add_product(ALICE, product_id, 1)

        assert [i.product_id for i in cart_service.list_items(ALICE)] == [3, 1, 2]

    def test_carts_do_not_share_items(self, cart_service):
        cart_service.add_product(ALICE, 1, 1)
        assert cart_service.list_items(BOB) == []


class TestUpdateAndRemove:
    def test_update_quantity(self, cart_service):
        cart_service.add_product(ALICE, 1, 2)

        view = cart_service.update_quantity(ALICE, 1, 7)

        assert view["items"][0]["quantity"] == 7
        assert view["items"][0]["price"] == Decimal("10.00")

    def test_update_missing_product(self, cart_service):
        with pytest.raises(ProductNotInCart):
            cart_service.update_quantity(ALICE, 1, 3)

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_non_positive_update_removes(self, cart_service, quantity):
        cart_service.add_product(ALICE, 1, 2)
        cart_service.add_product(ALICE, 2, 1)

        view = cart_service.update_quantity(ALICE, 1, quantity)

        assert [i["product_id"] for i in view["items"]] == [2]

    def test_non_positive_update_of_missing_product(self, cart_service):
        with pytest.raises(ProductNotInCart):
            cart_service.update_quantity(ALICE, 1, 0)

    def test_remove_product(self, cart_service):
        cart_service.add_product(ALICE, 1, 2)
        view = cart_service.remove_product(ALICE, 1)
        assert view["items"] == []

    def test_remove_never_added_product(self, cart_service):
        cart_service.add_product(ALICE, 2, 1)
        with pytest.raises(ProductNotInCart):
            cart_service.remove_product(ALICE, 1)
        assert len(cart_service.list_items(ALICE)) == 1

    def test_clear_cart(self, cart_service):
        cart_service.add_product(ALICE, 1, 1)
        cart_service.add_product(ALICE, 2, 1)

        cart_service.clear_cart(ALICE)

        assert cart_service.list_items(ALICE) == []

    def test_clear_empty_cart(self, cart_service):
        cart_service.clear_cart(ALICE)
        cart_service.clear_cart(ALICE)
        assert cart_service.list_items(ALICE) == []

    def test_mutations_take_cart_row_lock(self, cart_service, monkeypatch):
        cart_service.add_product(ALICE, 1, 1)
        locked = []
        original = cart_service.repo.lock_cart

        def recording_lock(cart_id):
            locked.append(cart_id)
            return original(cart_id)

        monkeypatch.setattr(cart_service.repo, "lock_cart", recording_lock)
        cart_id = cart_service.get_or_create_cart(ALICE).id

        cart_service.add_product(ALICE, 2, 1)
        cart_service.update_quantity(ALICE, 2, 3)
        cart_service.remove_product(ALICE, 2)
        cart_service.clear_cart(ALICE)

        assert locked == [cart_id] * 4
