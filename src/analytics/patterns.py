"""
Buying-Pattern Classification

Partitions the product catalog by how often each product appears in a
customer's latest orders:

- always buys: in every order of the window
- sometimes buys: in some but not all
- stopped buying: in none

A product reaches "always buys" only when its count equals the full window
size. A customer with fewer orders than the window therefore never has
"always buys" products.
"""

from typing import Dict, Iterable, List, Sequence, Set

from src.analytics.aggregation import RecordIndex, group_by
from src.analytics.dates import format_date, sort_orders
from src.analytics.models import BuyingPatterns, Order, OrderItem, Product, RecordId


def classify_buying_patterns(
    orders: Sequence[Order],
    items: Iterable[OrderItem],
    products: Iterable[Product],
    window_size: int = 3,
) -> BuyingPatterns:
    if window_size < 1:
        raise ValueError("window_size must be at least 1")
    if not orders:
        return BuyingPatterns()

    window = sort_orders(orders)[-window_size:]
    window_ids = {o.id for o in window}

    # One increment per order, however many lines or units reference the product
    products_per_order: Dict[RecordId, Set[RecordId]] = {}
    for item in items:
        if item.order_id in window_ids:
            products_per_order.setdefault(item.order_id, set()).add(item.product_id)

    counts: Dict[RecordId, int] = {}
    for product_ids in products_per_order.values():
        for pid in product_ids:
            counts[pid] = counts.get(pid, 0) + 1

    patterns = BuyingPatterns()
    for product in products:
        count = counts.get(product.id, 0)
        if count == window_size:
            patterns.always_buys.append(product)
        elif count > 0:
            patterns.sometimes_buys.append(product)
        else:
            patterns.stopped_buying.append(product)
    return patterns


def purchase_history(
    orders: Iterable[Order],
    items: Iterable[OrderItem],
    products: Iterable[Product],
) -> Dict[RecordId, Dict[str, int]]:
    """
    Product id -> {order date -> quantity} grid.

    Every catalog product gets a row, possibly empty. When a product has
    several lines on the same date, the last one wins.
    """
    grid: Dict[RecordId, Dict[str, int]] = {p.id: {} for p in products}
    order_index = RecordIndex(orders)
    for item in items:
        order = order_index.get(item.order_id)
        if order is None:
            continue
        grid.setdefault(item.product_id, {})[format_date(order.order_date)] = item.quantity
    return grid


def products_by_category(products: Iterable[Product]) -> Dict[str, List[Product]]:
    """Catalog grouped by category, both in catalog order"""
    return group_by(products, lambda p: p.category)
