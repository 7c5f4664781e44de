"""
Tests for the Cart Store
"""
import threading
from decimal import Decimal

import pytest

from storefront.cart import CartState, CartStore, LineItem


class TestLineItem:
    """Tests for LineItem dataclass."""

    def test_total_price(self, product_1):
        """Total is unit price times quantity."""
        item = LineItem(product=product_1, quantity=3)

        assert item.total_price == Decimal("30.00")
        assert item.product_id == 1

    def test_to_dict(self, product_1):
        data = LineItem(product=product_1, quantity=2).to_dict()

        assert data["product_id"] == 1
        assert data["quantity"] == 2
        assert data["total_price"] == 20.0


class TestCartState:
    """Tests for derived cart values."""

    def test_empty_state(self):
        state = CartState()

        assert state.is_empty
        assert state.item_count == 0
        assert state.total_amount == 0

    def test_totals_are_folds(self, product_1, product_2):
        state = CartState(items=(LineItem(product_1, 2), LineItem(product_2, 1)))

        assert state.item_count == 3
        assert state.total_amount == Decimal("45.00")
        assert state.to_dict()["total_display"] == "$45.00"


class TestCartStore:
    """Tests for CartStore commands and queries."""

    def test_starts_empty(self, cart):
        assert cart.is_empty
        assert cart.item_count == 0
        assert cart.total_amount == 0

    def test_add_merges_into_existing_line(self, cart, product_1):
        """Adding the same product twice keeps one line (quantity 1 + 2 = 3)."""
        cart.add_item(product_1)
        cart.add_item(product_1, quantity=2)

        assert len(cart.items) == 1
        assert cart.quantity_of(product_1) == 3

    def test_add_preserves_insertion_order(self, cart, product_1, product_2, product_3):
        cart.add_item(product_2)
        cart.add_item(product_1)
        cart.add_item(product_3)
        cart.add_item(product_2)

        assert [item.product_id for item in cart.items] == [2, 1, 3]

    def test_add_non_positive_quantity_is_noop(self, cart, product_1):
        cart.add_item(product_1, quantity=0)
        cart.add_item(product_1, quantity=-3)

        assert cart.is_empty

    def test_add_has_no_upper_bound(self, cart, product_factory):
        product = product_factory(9, "1.00", stock=1)
        cart.add_item(product, quantity=500)

        assert cart.quantity_of(product) == 500

    def test_remove_item_removes_whole_line(self, cart, product_1, product_2):
        cart.add_item(product_1, quantity=5)
        cart.add_item(product_2)

        cart.remove_item(product_1)

        assert not cart.is_in_cart(product_1)
        assert cart.is_in_cart(product_2)

    def test_remove_absent_item_is_noop(self, cart, product_1, product_2):
        cart.add_item(product_1, quantity=2)
        before = cart.state

        cart.remove_item(product_2)

        assert cart.state == before

    def test_remove_single_unit_decrements(self, cart, product_1):
        cart.add_item(product_1, quantity=2)

        cart.remove_single_unit(product_1)

        assert cart.quantity_of(product_1) == 1

    def test_remove_single_unit_drops_last_unit(self, cart, product_1):
        cart.add_item(product_1)

        cart.remove_single_unit(product_1)

        assert not cart.is_in_cart(product_1)
        assert cart.is_empty

    def test_remove_single_unit_absent_is_noop(self, cart, product_1):
        cart.remove_single_unit(product_1)

        assert cart.is_empty

    def test_update_quantity_sets_absolute_value(self, cart, product_1):
        cart.add_item(product_1, quantity=4)

        cart.update_quantity(product_1, 2)

        assert cart.quantity_of(product_1) == 2

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_update_quantity_non_positive_removes(self, cart, product_1, quantity):
        """{P1: 1} -> update_quantity(P1, 0) leaves the cart empty."""
        cart.add_item(product_1)

        cart.update_quantity(product_1, quantity)

        assert cart.is_empty

    def test_update_quantity_adds_absent_product(self, cart, product_1):
        cart.update_quantity(product_1, 3)

        assert cart.quantity_of(product_1) == 3

    def test_update_quantity_absent_and_zero_is_noop(self, cart, product_1):
        cart.update_quantity(product_1, 0)

        assert cart.is_empty

    def test_clear(self, cart, product_1, product_2):
        cart.add_item(product_1)
        cart.add_item(product_2)

        cart.clear()

        assert cart.is_empty
        assert cart.item_count == 0

    def test_totals(self, cart, product_1, product_2):
        """Two units at $10.00 and one at $25.00 total $45.00."""
        cart.add_item(product_1, quantity=2)
        cart.add_item(product_2, quantity=1)

        assert cart.total_amount == Decimal("45.00")
        assert cart.item_count == 3
        assert cart.item_total(product_1) == Decimal("20.00")

    def test_queries_for_absent_product(self, cart, product_1):
        assert cart.quantity_of(product_1) == 0
        assert cart.item_total(product_1) == 0
        assert not cart.is_in_cart(product_1)

    def test_snapshot_is_detached(self, cart, product_1):
        """Handed-out snapshots don't change when the cart does."""
        cart.add_item(product_1)
        snapshot = cart.state

        cart.add_item(product_1, quantity=4)

        assert snapshot.item_count == 1
        assert cart.item_count == 5

    def test_invariants_hold_after_mixed_commands(self, cart, product_1, product_2, product_3):
        commands = [
            lambda: cart.add_item(product_1, 2),
            lambda: cart.add_item(product_2),
            lambda: cart.remove_single_unit(product_1),
            lambda: cart.update_quantity(product_3, 4),
            lambda: cart.add_item(product_1, 3),
            lambda: cart.update_quantity(product_2, -2),
            lambda: cart.remove_single_unit(product_3),
            lambda: cart.remove_item(product_2),
        ]
        for command in commands:
            command()
            ids = [item.product_id for item in cart.items]
            assert len(ids) == len(set(ids))
            assert all(item.quantity >= 1 for item in cart.items)
            assert cart.item_count == sum(item.quantity for item in cart.items)
            assert cart.total_amount == sum(item.product.price * item.quantity for item in cart.items)

        assert cart.quantity_of(product_1) == 4
        assert cart.quantity_of(product_3) == 3

    def test_summary(self, cart, product_1):
        cart.add_item(product_1, quantity=2)

        summary = cart.summary()

        assert summary["item_count"] == 2
        assert summary["total_amount"] == 20.0
        assert summary["is_empty"] is False
        assert summary["items"][0]["product_id"] == 1


class TestCartNotifications:
    """Tests for cart change notification."""

    def test_listener_receives_new_state(self, cart, product_1):
        received = []
        cart.subscribe(received.append)

        cart.add_item(product_1, quantity=2)

        assert len(received) == 1
        assert isinstance(received[0], CartState)
        assert received[0].item_count == 2

    def test_noop_commands_do_not_notify(self, cart, product_1):
        received = []
        cart.subscribe(received.append)

        cart.remove_item(product_1)
        cart.remove_single_unit(product_1)
        cart.update_quantity(product_1, 0)
        cart.add_item(product_1, quantity=0)
        cart.clear()

        assert received == []

    def test_update_to_same_quantity_does_not_notify(self, cart, product_1):
        cart.add_item(product_1, quantity=2)
        received = []
        cart.subscribe(received.append)

        cart.update_quantity(product_1, 2)

        assert received == []

    def test_unsubscribe(self, cart, product_1):
        received = []
        unsubscribe = cart.subscribe(received.append)
        unsubscribe()

        cart.add_item(product_1)

        assert received == []
        assert cart.listener_count == 0

    def test_separate_stores_are_independent(self, product_1):
        first, second = CartStore(), CartStore()

        first.add_item(product_1)

        assert second.is_empty


class TestCartConcurrency:
    """Tests for the cart under concurrent use."""

    THREADS = 8
    ADDS_PER_THREAD = 200

    def _run_concurrently(self, target):
        barrier = threading.Barrier(self.THREADS)

        def worker():
            barrier.wait()
            for _ in range(self.ADDS_PER_THREAD):
                target()

        threads = [threading.Thread(target=worker) for _ in range(self.THREADS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    def test_concurrent_adds_keep_one_line(self, cart, product_1):
        self._run_concurrently(lambda: cart.add_item(product_1))

        assert len(cart.items) == 1
        assert cart.item_count == self.THREADS * self.ADDS_PER_THREAD

    def test_listeners_end_on_latest_state(self, cart, product_1):
        """Whatever the thread interleaving, the last delivered snapshot is the final cart."""
        received = []
        cart.subscribe(received.append)

        self._run_concurrently(lambda: cart.add_item(product_1))

        assert received[-1].item_count == cart.item_count
        counts = [state.item_count for state in received]
        assert counts == sorted(counts)
