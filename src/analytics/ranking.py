"""
Ranking

Top products by units ordered, top customers by revenue and the newest
orders with their totals. All rankings
are stable: equal metrics keep their first-seen order.
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from src.analytics.aggregation import ZERO, RecordIndex, sort_by_metric
from src.analytics.models import (
    Customer,
    CustomerRevenue,
    Order,
    OrderItem,
    RankedProduct,
    RecentOrder,
    RecordId,
)
from src.analytics.revenue import Products, customer_revenue, index_products, line_amount, priced_lines


def top_products(items: Iterable[OrderItem], products: Products, limit: int = 5) -> List[RankedProduct]:
    """Products by total quantity ordered, descending"""
    catalog = index_products(products)
    quantities: Dict[RecordId, int] = {}
    for item, product in priced_lines(items, catalog):
        quantities[product.id] = quantities.get(product.id, 0) + item.quantity

    ranked = [RankedProduct(product=catalog.get(pid), quantity=qty) for pid, qty in quantities.items()]
    return sort_by_metric(ranked, lambda r: r.quantity, limit=limit)


def top_customers(
    orders: Iterable[Order],
    items: Iterable[OrderItem],
    products: Products,
    customers: Iterable[Customer] = (),
    limit: Optional[int] = None,
) -> List[CustomerRevenue]:
    """Customers by revenue, descending"""
    return sort_by_metric(
        customer_revenue(orders, items, products, customers),
        lambda c: c.revenue,
        limit=limit,
    )


def recent_orders(orders: Sequence[Order], limit: int = 5) -> List[Order]:
    """Newest orders first"""
    return sorted(orders, key=lambda o: o.order_date, reverse=True)[:limit]


def recent_order_totals(
    orders: Sequence[Order],
    items: Iterable[OrderItem],
    products: Products,
    customers: Iterable[Customer] = (),
    limit: int = 5,
) -> List[RecentOrder]:
    """
    Newest orders with their revenue, units and customer.

    Lines for unknown products are skipped; an order without resolved
    lines reports zero.
    """
    latest = recent_orders(orders, limit)
    latest_ids = {o.id for o in latest}
    customer_index = RecordIndex(customers)

    revenue: Dict[RecordId, Decimal] = {}
    units: Dict[RecordId, int] = {}
    own_items = (it for it in items if it.order_id in latest_ids)
    for item, product in priced_lines(own_items, index_products(products)):
        revenue[item.order_id] = revenue.get(item.order_id, ZERO) + line_amount(item, product)
        units[item.order_id] = units.get(item.order_id, 0) + item.quantity

    return [
        RecentOrder(
            order=order,
            customer=customer_index.get(order.customer_id),
            revenue=revenue.get(order.id, ZERO),
            units=units.get(order.id, 0),
        )
        for order in latest
    ]
