"""
Unit Tests - Ranking
"""
from decimal import Decimal

from src.analytics.models import Order, OrderItem
from src.analytics.ranking import recent_order_totals, recent_orders, top_customers, top_products
from src.analytics.revenue import product_totals


class TestTopProducts:
    """Tests for top_products"""

    def test_by_quantity(self, items, products):
        ranked = top_products(items, products)

        assert [(r.product.id, r.quantity) for r in ranked] == [(1, 8), (2, 4), (3, 4)]

    def test_limit(self, items, products):
        assert len(top_products(items, products, limit=2)) == 2
        assert top_products(items, products, limit=0) == []

    def test_excludes_unknown_products(self, items, products):
        assert 99 not in {r.product.id for r in top_products(items, products)}

    def test_consistent_with_product_totals(self, items, products):
        for limit in (1, 2, 3):
            by_units = sorted(product_totals(items, products), key=lambda t: t.units, reverse=True)[:limit]
            ranked = top_products(items, products, limit=limit)

            assert [(t.product.id, t.units) for t in by_units] == [(r.product.id, r.quantity) for r in ranked]

    def test_quantity_outranks_revenue(self, products):
        line_items = [
            OrderItem(id=1, order_id=1, product_id=2, quantity=1),  # 10.00
            OrderItem(id=2, order_id=1, product_id=3, quantity=3),  # 3.75
        ]
        assert [r.product.id for r in top_products(line_items, products)] == [3, 2]


class TestTopCustomers:
    """Tests for top_customers"""

    def test_by_revenue(self, orders, items, products, customers):
        ranked = top_customers(orders, items, products, customers)

        assert [r.customer.customer_name for r in ranked] == ["Corner Cafe", "Bakery Row"]
        assert [r.revenue for r in ranked] == [Decimal("32.50"), Decimal("30.00")]

    def test_limit(self, orders, items, products, customers):
        assert len(top_customers(orders, items, products, customers, limit=1)) == 1


class TestRecentOrders:
    """Tests for recent_orders"""

    def test_newest_first(self, orders):
        assert [o.id for o in recent_orders(orders)] == [4, 3, 2, 1]
        assert [o.id for o in recent_orders(orders, limit=2)] == [4, 3]


class TestRecentOrderTotals:
    """Tests for recent_order_totals"""

    def test_totals_per_order(self, orders, items, products, customers):
        recent = recent_order_totals(orders, items, products, customers, limit=3)

        assert [(r.order.id, r.revenue, r.units) for r in recent] == [
            (4, Decimal("30.00"), 3),
            (3, Decimal("7.50"), 5),
            (2, Decimal("5.00"), 2),
        ]
        assert [r.customer_name for r in recent] == ["Bakery Row", "Corner Cafe", "Corner Cafe"]

    def test_unknown_product_line_skipped(self, orders, items, products, customers):
        newest = recent_order_totals(orders, items, products, customers, limit=1)[0]

        # Item 7 references product 99 and contributes nothing
        assert newest.order.id == 4
        assert newest.revenue == Decimal("30.00")
        assert newest.units == 3

    def test_unknown_customer(self, orders, items, products):
        recent = recent_order_totals(orders, items, products)

        assert all(r.customer is None for r in recent)
        assert {r.customer_name for r in recent} == {"Unknown"}

    def test_order_without_resolved_lines(self, products):
        lone = Order(id=5, customer_id=1, order_date="2024-03-01")
        line_items = [OrderItem(id=1, order_id=5, product_id=99, quantity=2)]

        [recent] = recent_order_totals([lone], line_items, products)
        assert recent.revenue == 0
        assert recent.units == 0

    def test_empty(self, products):
        assert recent_order_totals([], [], products) == []
