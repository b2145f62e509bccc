"""
Unit Tests - Buying-Pattern Classification
"""
from datetime import date

import pytest

from src.analytics.models import Order, OrderItem
from src.analytics.patterns import classify_buying_patterns, products_by_category, purchase_history


def ids(products):
    return [p.id for p in products]


class TestBuyingPatterns:
    """Tests for classify_buying_patterns"""

    def test_classification(self, customer_orders, customer_items, products):
        patterns = classify_buying_patterns(customer_orders, customer_items, products)

        assert ids(patterns.always_buys) == [1]
        assert ids(patterns.sometimes_buys) == [2, 3]
        assert ids(patterns.stopped_buying) == [4]

    def test_no_orders(self, products):
        patterns = classify_buying_patterns([], [], products)

        assert patterns.always_buys == []
        assert patterns.sometimes_buys == []
        assert patterns.stopped_buying == []

    def test_two_orders_never_always_buys(self, customer_orders, products):
        two_orders = customer_orders[:2]
        line_items = [
            OrderItem(id=1, order_id=1, product_id=1, quantity=1),
            OrderItem(id=2, order_id=2, product_id=1, quantity=1),
        ]
        patterns = classify_buying_patterns(two_orders, line_items, products)

        assert patterns.always_buys == []
        assert ids(patterns.sometimes_buys) == [1]

    def test_counts_orders_not_lines(self, customer_orders, products):
        line_items = [
            OrderItem(id=1, order_id=1, product_id=2, quantity=1),
            OrderItem(id=2, order_id=1, product_id=2, quantity=5),
            OrderItem(id=3, order_id=1, product_id=2, quantity=2),
        ]
        patterns = classify_buying_patterns(customer_orders, line_items, products)

        assert ids(patterns.sometimes_buys) == [2]
        assert patterns.always_buys == []

    def test_only_latest_window_counts(self, customer_orders, products):
        orders = [Order(id=0, customer_id=1, order_date=date(2023, 12, 1))] + customer_orders
        line_items = [
            OrderItem(id=1, order_id=0, product_id=4, quantity=1),
            OrderItem(id=2, order_id=1, product_id=2, quantity=1),
        ]
        patterns = classify_buying_patterns(orders, line_items, products)

        assert 4 in ids(patterns.stopped_buying)
        assert ids(patterns.sometimes_buys) == [2]

    def test_window_size_parameter(self, customer_orders, customer_items, products):
        patterns = classify_buying_patterns(customer_orders, customer_items, products, window_size=2)

        # Window is orders 2 and 3; product 1 is in both
        assert ids(patterns.always_buys) == [1]
        assert ids(patterns.sometimes_buys) == [3]
        assert ids(patterns.stopped_buying) == [2, 4]

    def test_buckets_follow_catalog_order(self, customer_orders, customer_items, products):
        patterns = classify_buying_patterns(customer_orders, customer_items, list(reversed(products)))
        assert ids(patterns.sometimes_buys) == [3, 2]

    def test_invalid_window(self, customer_orders, products):
        with pytest.raises(ValueError):
            classify_buying_patterns(customer_orders, [], products, window_size=0)


class TestPurchaseHistory:
    """Tests for purchase_history"""

    def test_grid(self, customer_orders, customer_items, products):
        grid = purchase_history(customer_orders, customer_items, products)

        assert grid[1] == {"2024-01-01": 4, "2024-01-11": 2, "2024-01-21": 1}
        assert grid[3] == {"2024-01-21": 4}
        assert grid[4] == {}

    def test_skips_unknown_orders(self, orders, items, products):
        grid = purchase_history(orders, items, products)
        assert grid[99] == {"2024-02-05": 5}
        assert "2024-01-01" in grid[1]


class TestProductsByCategory:
    """Tests for products_by_category"""

    def test_grouping(self, products):
        groups = products_by_category(products)

        assert list(groups) == ["Dairy", "Produce", "Uncategorized", "Dry Goods"]
        assert ids(groups["Uncategorized"]) == [3]
