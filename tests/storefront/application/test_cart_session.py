"""Tests for CartSession persistence behaviour."""

import json

import pytest
from storefront.cart.session import CartSession
from storefront.cart.storage.memory_adapter import InMemoryCartStorage
from storefront.cart.storage.port import CartStorage


class BrokenStorage(CartStorage):
    """Storage whose every call fails."""

    def __init__(self):
        self.save_attempts = 0

    def load(self):
        raise OSError("disk unavailable")

    def save(self, data):
        self.save_attempts += 1
        raise OSError("disk unavailable")


@pytest.fixture()
def storage():
    return InMemoryCartStorage(key="pizzaminos-cart")


def _add_pizza(session, variant="Large", price="₹359"):
    session.add_item(
        menu_item_id="margherita",
        name="Margherita",
        price=price,
        base_price="399",
        category="Pizza",
        variant=variant,
    )


class TestRehydration:
    def test_starts_empty_without_snapshot(self, storage):
        session = CartSession(storage)
        assert session.items == []
        assert session.total == 0
        assert storage.saves == 0

    def test_round_trip_through_storage(self, storage):
        first = CartSession(storage, session_id="sess-001")
        _add_pizza(first)
        _add_pizza(first)
        first.add_item(menu_item_id="coke", name="Coke", price="60", category="Drinks")

        second = CartSession(storage, session_id="sess-001")
        assert second.cart.line_snapshot() == first.cart.line_snapshot()
        assert second.total == first.total == 359 * 2 + 60

    def test_corrupt_snapshot_gives_empty_cart(self, storage):
        storage.save("{definitely not a cart")
        session = CartSession(storage)
        assert session.items == []

    def test_wrong_shape_gives_empty_cart(self, storage):
        storage.save(json.dumps({"items": [{"id": "x"}]}))
        assert CartSession(storage).items == []

    def test_invalid_line_gives_empty_cart(self, storage):
        storage.save(json.dumps([{"id": "x", "menuItemId": "x", "name": "", "price": "10", "quantity": 1}]))
        assert CartSession(storage).items == []

    def test_invalid_line_is_dropped_and_the_rest_kept(self, storage):
        storage.save(
            json.dumps(
                [
                    {"id": "x", "menuItemId": "x", "name": "", "price": "10", "quantity": 1},
                    {"id": "coke", "menuItemId": "coke", "name": "Coke", "price": "60", "quantity": 2},
                ]
            )
        )
        session = CartSession(storage)
        assert [item.line_id for item in session.items] == ["coke"]
        assert session.total == 120

    def test_long_price_text_survives_reload(self, storage):
        price = "₹" + "1" * 60
        line = {"id": "feast", "menuItemId": "feast", "name": "Feast", "price": price, "quantity": 1}
        storage.save(json.dumps([line]))
        assert CartSession(storage).items[0].price == price

    def test_deeply_nested_snapshot_gives_empty_cart(self, storage):
        storage.save("[" * 100000)
        session = CartSession(storage)
        assert session.items == []
        assert session.total == 0

    def test_failing_load_gives_empty_cart(self):
        assert CartSession(BrokenStorage()).items == []

    def test_open_flag_is_not_persisted(self, storage):
        first = CartSession(storage)
        _add_pizza(first)
        assert first.is_open is True
        assert CartSession(storage).is_open is False


class TestPersistenceOnMutation:
    def test_add_persists(self, storage):
        session = CartSession(storage)
        _add_pizza(session)
        payload = json.loads(storage.load())
        assert payload[0]["id"] == "margherita-Large"
        assert payload[0]["quantity"] == 1

    def test_update_quantity_persists(self, storage):
        session = CartSession(storage)
        _add_pizza(session)
        session.update_quantity("margherita-Large", 2)
        assert json.loads(storage.load())[0]["quantity"] == 3

    def test_update_below_zero_removes_and_persists(self, storage):
        session = CartSession(storage)
        _add_pizza(session)
        session.update_quantity("margherita-Large", 2)
        session.update_quantity("margherita-Large", -5)
        assert session.items == []
        assert json.loads(storage.load()) == []

    def test_remove_persists(self, storage):
        session = CartSession(storage)
        _add_pizza(session)
        session.remove_item("margherita-Large")
        assert json.loads(storage.load()) == []

    def test_no_op_operations_do_not_write(self, storage):
        session = CartSession(storage)
        _add_pizza(session)
        saves = storage.saves
        session.remove_item("nonexistent")
        session.update_quantity("nonexistent", 1)
        session.toggle_cart()
        assert storage.saves == saves

    def test_clear_twice_is_harmless(self, storage):
        session = CartSession(storage)
        _add_pizza(session)
        session.clear_cart()
        session.clear_cart()
        assert session.items == []
        assert json.loads(storage.load()) == []

    def test_failing_save_is_not_surfaced(self):
        broken = BrokenStorage()
        session = CartSession(broken)
        _add_pizza(session)
        assert session.total == 359
        assert broken.save_attempts == 1


class TestPricesAreCapturedAtAddTime:
    def test_re_adding_keeps_first_price(self, storage):
        session = CartSession(storage)
        _add_pizza(session, price="₹359")
        _add_pizza(session, price="₹299")
        assert len(session.items) == 1
        assert session.items[0].quantity == 2
        assert session.items[0].price == "₹359"
        assert session.total == 718


class TestCompleteCheckout:
    def test_empties_and_persists(self, storage):
        session = CartSession(storage)
        _add_pizza(session)
        session.complete_checkout()
        assert session.items == []
        assert json.loads(storage.load()) == []
