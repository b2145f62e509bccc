"""
Revenue Calculator

Per-order, per-customer, per-product and per-month revenue and unit totals
from order-item x product joins.

Line revenue is quantity x product unit price in Decimal. An item whose
product (or, where an order is needed, whose order) cannot be resolved
contributes nothing; it is skipped, never an error.
"""

from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

import structlog

from src.analytics.aggregation import ZERO, RecordIndex
from src.analytics.dates import month_key
from src.analytics.models import (
    Customer,
    CustomerRevenue,
    CustomerTotals,
    DraftOrderLine,
    DraftOrderTotals,
    Order,
    OrderItem,
    Product,
    ProductTotal,
    RecordId,
)
from src.analytics.patterns import products_by_category

logger = structlog.get_logger(__name__)

Products = Union[Sequence[Product], RecordIndex[Product]]


def index_products(products: Products) -> RecordIndex[Product]:
    """Reuse a prebuilt index or build one from a catalog sequence"""
    if isinstance(products, RecordIndex):
        return products
    return RecordIndex(products)


def line_amount(item: OrderItem, product: Product) -> Decimal:
    return product.unit_price * item.quantity


def priced_lines(
    items: Iterable[OrderItem],
    products: RecordIndex[Product],
) -> Iterator[Tuple[OrderItem, Product]]:
    """Yield (item, product) for every item whose product resolves"""
    skipped = 0
    for item in items:
        product = products.get(item.product_id)
        if product is None:
            skipped += 1
            continue
        yield item, product
    if skipped:
        logger.debug("Skipped order items with unknown product", skipped=skipped)


def ordered_lines(
    orders: Iterable[Order],
    items: Iterable[OrderItem],
    products: RecordIndex[Product],
) -> Iterator[Tuple[Order, OrderItem, Product]]:
    """Yield (order, item, product) for items whose order and product both resolve"""
    order_index = RecordIndex(orders)
    skipped = 0
    for item, product in priced_lines(items, products):
        order = order_index.get(item.order_id)
        if order is None:
            skipped += 1
            continue
        yield order, item, product
    if skipped:
        logger.debug("Skipped order items with unknown order", skipped=skipped)


def order_total(order_id: RecordId, items: Iterable[OrderItem], products: Products) -> Decimal:
    """Revenue of one order"""
    own_items = (it for it in items if it.order_id == order_id)
    return sum(
        (line_amount(it, p) for it, p in priced_lines(own_items, index_products(products))),
        ZERO,
    )


def customer_totals(
    orders: Sequence[Order],
    items: Iterable[OrderItem],
    products: Products,
) -> CustomerTotals:
    """
    Lifetime totals over all supplied items.

    The caller scopes orders and items to one customer (or passes everything
    for business-wide totals); no filtering happens here. order_count is
    len(orders) even when there are no items.
    """
    total_amount = ZERO
    total_units = 0
    for item, product in priced_lines(items, index_products(products)):
        total_amount += line_amount(item, product)
        total_units += item.quantity

    return CustomerTotals(
        total_amount=total_amount,
        total_units=total_units,
        order_count=len(orders),
    )


def product_totals(items: Iterable[OrderItem], products: Products) -> List[ProductTotal]:
    """
    Units and revenue per product, descending by revenue.

    Only products with at least one resolved item appear. Equal revenues
    keep the order in which the products first occur in items.
    """
    units: Dict[RecordId, int] = {}
    revenue: Dict[RecordId, Decimal] = {}
    catalog = index_products(products)

    for item, product in priced_lines(items, catalog):
        units[product.id] = units.get(product.id, 0) + item.quantity
        revenue[product.id] = revenue.get(product.id, ZERO) + line_amount(item, product)

    totals = [
        ProductTotal(product=catalog.get(pid), units=units[pid], revenue=revenue[pid])
        for pid in units
    ]
    return sorted(totals, key=lambda t: t.revenue, reverse=True)


def monthly_revenue(
    orders: Iterable[Order],
    items: Iterable[OrderItem],
    products: Products,
) -> Dict[str, Decimal]:
    """
    Revenue per YYYY-MM bucket of the owning order's date.

    Keys come back in ascending month order. Empty input gives {}.
    """
    buckets: Dict[str, Decimal] = {}
    for order, item, product in ordered_lines(orders, items, index_products(products)):
        key = month_key(order.order_date)
        buckets[key] = buckets.get(key, ZERO) + line_amount(item, product)
    return dict(sorted(buckets.items()))


def product_monthly_revenue(
    product_id: RecordId,
    orders: Iterable[Order],
    items: Iterable[OrderItem],
    products: Products,
) -> Dict[str, Decimal]:
    """Monthly revenue series of a single product"""
    own_items = [it for it in items if it.product_id == product_id]
    return monthly_revenue(orders, own_items, products)


def customer_revenue(
    orders: Iterable[Order],
    items: Iterable[OrderItem],
    products: Products,
    customers: Iterable[Customer] = (),
) -> List[CustomerRevenue]:
    """
    Revenue and units per owning customer, in first-seen order.

    Customers missing from `customers` are still reported, with
    customer=None.
    """
    customer_index = RecordIndex(customers)
    revenue: Dict[RecordId, Decimal] = {}
    units: Dict[RecordId, int] = {}

    for order, item, product in ordered_lines(orders, items, index_products(products)):
        cid = order.customer_id
        revenue[cid] = revenue.get(cid, ZERO) + line_amount(item, product)
        units[cid] = units.get(cid, 0) + item.quantity

    return [
        CustomerRevenue(
            customer_id=cid,
            customer=customer_index.get(cid),
            revenue=revenue[cid],
            units=units[cid],
        )
        for cid in revenue
    ]


def draft_order_totals(quantities: Mapping[RecordId, int], products: Products) -> DraftOrderTotals:
    """Units and amount of an order being entered, keyed by product id"""
    units = 0
    amount = ZERO
    for product in index_products(products):
        qty = quantities.get(product.id, 0)
        if qty <= 0:
            continue
        units += qty
        amount += product.unit_price * qty
    return DraftOrderTotals(units=units, amount=amount)


def draft_order_lines(
    quantities: Mapping[RecordId, int],
    products: Products,
) -> Dict[str, List[DraftOrderLine]]:
    """
    Order sheet rows for every catalog product, grouped by category.

    Products without a positive quantity get a zero row; quantities for
    unknown product ids are ignored.
    """
    sheet: Dict[str, List[DraftOrderLine]] = {}
    for category, members in products_by_category(index_products(products)).items():
        rows = []
        for product in members:
            qty = max(quantities.get(product.id, 0), 0)
            rows.append(DraftOrderLine(product=product, quantity=qty, amount=product.unit_price * qty))
        sheet[category] = rows
    return sheet
