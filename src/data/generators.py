"""
Synthetic Snapshot Generator

Generates a realistic, referentially consistent dashboard snapshot for
testing and development:
- Product catalog across categories
- Customers with contact details
- Orders per customer at a habitual interval, ascending by date
- Order items drawn mostly from each customer's regular products
"""

import random
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from faker import Faker

from src.analytics.models import Customer, Order, OrderItem, Product


# =============================================================================
# CONFIGURATION
# =============================================================================

CATEGORIES = [
    ("Produce", ["Apples", "Lettuce", "Tomatoes", "Onions", "Carrots"]),
    ("Dairy", ["Milk", "Butter", "Cheddar", "Yogurt", "Cream"]),
    ("Bakery", ["Bagels", "Baguettes", "Croissants", "Rolls", "Muffins"]),
    ("Dry Goods", ["Flour", "Rice", "Pasta", "Sugar", "Oats"]),
    ("Beverages", ["Coffee", "Tea", "Juice", "Soda", "Water"]),
]

ORDER_INTERVALS = [7, 10, 14, 21, 30]


@dataclass
class Snapshot:
    """Records as the data-access layer would supply them"""
    products: List[Product]
    customers: List[Customer]
    orders: List[Order]
    items: List[OrderItem]


class SnapshotGenerator:
    """
    Generate a seeded snapshot.

    The same seed always yields the same snapshot.
    """

    def __init__(self, seed: int = 42):
        self.random = random.Random(seed)
        self.fake = Faker()
        self.fake.seed_instance(seed)

    def generate_products(self, n: int = 20) -> List[Product]:
        """Generate n catalog products; about one in ten has no category"""
        products = []
        for i in range(1, n + 1):
            category, names = self.random.choice(CATEGORIES)
            units_per_case = self.random.choice([6, 12, 24])
            unit_price = Decimal(self.random.randint(99, 2499)) / 100

            products.append(Product(
                id=i,
                item_code=f"ITM-{i:04d}",
                description=f"{self.fake.word().title()} {self.random.choice(names)}",
                category=None if self.random.random() < 0.1 else category,
                unit_price=unit_price,
                units_per_case=units_per_case,
                case_price=unit_price * units_per_case,
            ))
        return products

    def generate_customers(self, n: int = 10) -> List[Customer]:
        """Generate n customers"""
        return [
            Customer(
                id=i,
                customer_name=self.fake.company(),
                email=self.fake.company_email(),
                phone=self.fake.phone_number() if self.random.random() > 0.2 else None,
            )
            for i in range(1, n + 1)
        ]

    def generate_orders(
        self,
        customers: List[Customer],
        products: List[Product],
        end_date: Optional[date] = None,
        max_orders: int = 8,
    ) -> Tuple[List[Order], List[OrderItem]]:
        """
        Generate orders and items for every customer.

        Each customer orders at a habitual interval with a few days of
        jitter and mostly repeats a small set of regular products.

        Returns:
            (orders ascending by date, items)
        """
        end_date = end_date or date.today()
        orders: List[Order] = []
        items: List[OrderItem] = []

        for customer in customers:
            n_orders = self.random.randint(0, max_orders)
            interval = self.random.choice(ORDER_INTERVALS)
            regulars = self.random.sample(products, k=min(3, len(products)))

            order_date = end_date - timedelta(days=interval * n_orders)
            for _ in range(n_orders):
                order_date += timedelta(days=max(1, interval + self.random.randint(-2, 2)))
                order = Order(
                    id=len(orders) + 1,
                    customer_id=customer.id,
                    order_date=min(order_date, end_date),
                )
                orders.append(order)

                lines = [p for p in regulars if self.random.random() < 0.8]
                if self.random.random() < 0.4:
                    lines.append(self.random.choice(products))
                for product in lines:
                    items.append(OrderItem(
                        id=len(items) + 1,
                        order_id=order.id,
                        product_id=product.id,
                        quantity=self.random.randint(1, 12),
                    ))

        orders.sort(key=lambda o: o.order_date)
        return orders, items

    def generate(
        self,
        n_products: int = 20,
        n_customers: int = 10,
        end_date: Optional[date] = None,
    ) -> Snapshot:
        """Generate a complete snapshot"""
        products = self.generate_products(n_products)
        customers = self.generate_customers(n_customers)
        orders, items = self.generate_orders(customers, products, end_date=end_date)
        return Snapshot(products=products, customers=customers, orders=orders, items=items)
