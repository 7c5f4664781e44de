"""
Tests for the Wishlist Store
"""
import threading

from storefront.wishlist import WishlistState


class TestWishlistStore:
    """Tests for WishlistStore commands and queries."""

    def test_toggle_adds_then_removes(self, wishlist, product_2):
        """Toggle on an empty wishlist favorites; a second toggle un-favorites."""
        assert wishlist.toggle_favorite(product_2) is True
        assert wishlist.is_favorite(product_2)
        assert wishlist.item_count == 1

        assert wishlist.toggle_favorite(product_2) is False
        assert not wishlist.is_favorite(product_2)
        assert wishlist.item_count == 0

    def test_double_toggle_restores_prior_state(self, wishlist, product_1, product_2, product_3):
        wishlist.add_to_favorites(product_1)
        wishlist.add_to_favorites(product_3)
        before = wishlist.state

        for product in (product_1, product_2):
            wishlist.toggle_favorite(product)
            wishlist.toggle_favorite(product)
            assert set(wishlist.state.items) == set(before.items)

    def test_add_is_idempotent(self, wishlist, product_1):
        wishlist.add_to_favorites(product_1)
        wishlist.add_to_favorites(product_1)

        assert wishlist.item_count == 1

    def test_remove_is_idempotent(self, wishlist, product_1):
        wishlist.remove_favorite(product_1)
        wishlist.add_to_favorites(product_1)
        wishlist.remove_favorite(product_1)
        wishlist.remove_favorite(product_1)

        assert wishlist.item_count == 0

    def test_remove_by_id(self, wishlist, product_1):
        wishlist.add_to_favorites(product_1)

        wishlist.remove_favorite_by_id(1)

        assert not wishlist.is_favorite(product_1)

    def test_insertion_order_preserved(self, wishlist, product_1, product_2, product_3):
        for product in (product_3, product_1, product_2):
            wishlist.add_to_favorites(product)

        assert [p.id for p in wishlist.items] == [3, 1, 2]

    def test_by_category(self, wishlist, product_1, product_2, product_3):
        wishlist.add_many([product_1, product_2, product_3])

        assert [p.id for p in wishlist.by_category("beauty")] == [1, 3]
        assert wishlist.count_by_category("fragrances") == 1
        assert wishlist.by_category("groceries") == []

    def test_add_many_skips_existing(self, wishlist, product_1, product_2):
        wishlist.add_to_favorites(product_1)

        wishlist.add_many([product_1, product_2, product_2])

        assert [p.id for p in wishlist.items] == [1, 2]

    def test_remove_many(self, wishlist, product_1, product_2, product_3):
        wishlist.add_many([product_1, product_2, product_3])

        wishlist.remove_many([1, 3, 99])

        assert [p.id for p in wishlist.items] == [2]

    def test_are_all_favorited(self, wishlist, product_1, product_2):
        wishlist.add_to_favorites(product_1)

        assert wishlist.are_all_favorited([product_1])
        assert not wishlist.are_all_favorited([product_1, product_2])

    def test_get(self, wishlist, product_1):
        wishlist.add_to_favorites(product_1)

        assert wishlist.get(1) == product_1
        assert wishlist.get(2) is None

    def test_clear(self, wishlist, product_1, product_2):
        wishlist.add_many([product_1, product_2])

        wishlist.clear()

        assert wishlist.item_count == 0

    def test_summary_lists_categories(self, wishlist, product_1, product_2, product_3):
        wishlist.add_many([product_1, product_2, product_3])

        summary = wishlist.summary()

        assert summary["item_count"] == 3
        assert summary["categories"] == ["beauty", "fragrances"]


class TestWishlistNotifications:
    """Tests for wishlist change notification."""

    def test_toggle_notifies_each_time(self, wishlist, product_1):
        received = []
        wishlist.subscribe(received.append)

        wishlist.toggle_favorite(product_1)
        wishlist.toggle_favorite(product_1)

        assert [state.item_count for state in received] == [1, 0]
        assert all(isinstance(state, WishlistState) for state in received)

    def test_noop_commands_do_not_notify(self, wishlist, product_1):
        wishlist.add_to_favorites(product_1)
        received = []
        wishlist.subscribe(received.append)

        wishlist.add_to_favorites(product_1)
        wishlist.remove_favorite_by_id(42)
        wishlist.add_many([product_1])
        wishlist.remove_many([42])

        assert received == []


class TestWishlistConcurrency:
    """Tests for the wishlist under concurrent use."""

    THREADS = 8

    def _run_concurrently(self, target, repeat):
        barrier = threading.Barrier(self.THREADS)

        def worker():
            barrier.wait()
            for _ in range(repeat):
                target()

        threads = [threading.Thread(target=worker) for _ in range(self.THREADS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    def test_concurrent_adds_keep_one_entry(self, wishlist, product_1):
        self._run_concurrently(lambda: wishlist.add_to_favorites(product_1), repeat=100)

        assert [p.id for p in wishlist.items] == [1]

    def test_concurrent_toggles_never_duplicate(self, wishlist, product_2):
        """An even number of toggles in total leaves the product un-favorited."""
        self._run_concurrently(lambda: wishlist.toggle_favorite(product_2), repeat=50)

        assert wishlist.item_count == 0
        assert not wishlist.is_favorite(product_2)
