"""
Test Suite Configuration

Shared snapshot:

    C1 orders O1 (2024-01-01), O2 (2024-01-11), O3 (2024-01-21)
    C2 orders O4 (2024-02-05)
    item 7 references an unknown product, item 8 an unknown order
"""
from datetime import date
from decimal import Decimal
from typing import List

import pytest

from src.analytics.models import Customer, Order, OrderItem, Product
from src.config import AnalyticsSettings, Settings


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )


@pytest.fixture
def analytics_settings() -> AnalyticsSettings:
    return AnalyticsSettings(
        pattern_window_size=3,
        top_products_limit=5,
        recent_orders_limit=5,
        active_customer_days=90,
    )


@pytest.fixture
def products() -> List[Product]:
    """Catalog; product 4 is never ordered"""
    return [
        Product(id=1, item_code="MLK-1", description="Whole Milk", category="Dairy",
                unit_price=Decimal("2.50"), units_per_case=12, case_price=Decimal("30.00")),
        Product(id=2, item_code="APL-1", description="Apples", category="Produce",
                unit_price=Decimal("10.00"), units_per_case=6, case_price=Decimal("60.00")),
        Product(id=3, item_code="BAG-1", description="Bagels", category=None,
                unit_price=Decimal("1.25")),
        Product(id=4, item_code="OAT-1", description="Oats", category="Dry Goods",
                unit_price=Decimal("5.00")),
    ]


@pytest.fixture
def customers() -> List[Customer]:
    return [
        Customer(id=1, customer_name="Corner Cafe", email="orders@cornercafe.test"),
        Customer(id=2, customer_name="Bakery Row", phone="555-0100"),
    ]


@pytest.fixture
def customer_orders() -> List[Order]:
    """Customer 1's orders, ascending"""
    return [
        Order(id=1, customer_id=1, order_date=date(2024, 1, 1)),
        Order(id=2, customer_id=1, order_date=date(2024, 1, 11)),
        Order(id=3, customer_id=1, order_date=date(2024, 1, 21)),
    ]


@pytest.fixture
def orders(customer_orders) -> List[Order]:
    return customer_orders + [Order(id=4, customer_id=2, order_date=date(2024, 2, 5))]


@pytest.fixture
def customer_items() -> List[OrderItem]:
    """Customer 1's items: 32.50 over 12 units"""
    return [
        OrderItem(id=1, order_id=1, product_id=1, quantity=4),
        OrderItem(id=2, order_id=1, product_id=2, quantity=1),
        OrderItem(id=3, order_id=2, product_id=1, quantity=2),
        OrderItem(id=4, order_id=3, product_id=1, quantity=1),
        OrderItem(id=5, order_id=3, product_id=3, quantity=4),
    ]


@pytest.fixture
def items(customer_items) -> List[OrderItem]:
    return customer_items + [
        OrderItem(id=6, order_id=4, product_id=2, quantity=3),
        OrderItem(id=7, order_id=4, product_id=99, quantity=5),
        OrderItem(id=8, order_id=99, product_id=1, quantity=1),
    ]
