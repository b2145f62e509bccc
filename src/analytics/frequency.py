"""
Order Frequency & Prediction

Average gap between a customer's orders, the expected date of the next one,
and recency figures used for the "active customers" count.

Every function here sorts its orders ascending by date itself, so callers
may pass orders in any order. None means "not enough history".
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence

from src.analytics.dates import add_days, days_between, format_date, months_between, sort_orders
from src.analytics.models import Customer, Order, RecordId


def order_gaps(orders: Iterable[Order]) -> List[int]:
    """Whole-day gaps between consecutive orders (ascending)"""
    ordered = sort_orders(orders)
    return [
        days_between(prev.order_date, curr.order_date)
        for prev, curr in zip(ordered, ordered[1:])
    ]


def order_frequency(orders: Sequence[Order]) -> Optional[int]:
    """
    Average days between orders, rounded half-up to a whole day.

    Returns None for fewer than two orders, and also when the average
    rounds to 0 (all orders on the same day): a zero gap carries no signal
    for prediction.
    """
    if len(orders) < 2:
        return None

    gaps = order_gaps(orders)
    average = Decimal(sum(gaps)) / Decimal(len(gaps))
    rounded = int(average.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return rounded or None


def next_order_prediction(orders: Sequence[Order]) -> Optional[str]:
    """Latest order date plus the average gap, as YYYY-MM-DD"""
    avg_gap = order_frequency(orders)
    if not avg_gap:
        return None

    last = sort_orders(orders)[-1]
    return format_date(add_days(last.order_date, avg_gap))


def last_order(orders: Iterable[Order]) -> Optional[Order]:
    ordered = sort_orders(orders)
    return ordered[-1] if ordered else None


def days_since_last_order(orders: Iterable[Order], today: date) -> Optional[int]:
    latest = last_order(orders)
    if latest is None:
        return None
    return (today - latest.order_date).days


def customer_tenure_months(orders: Iterable[Order], today: date) -> Optional[int]:
    """Calendar months since the first order; None without orders"""
    ordered = sort_orders(orders)
    if not ordered:
        return None
    return months_between(ordered[0].order_date, today)


def last_order_dates(orders: Iterable[Order]) -> Dict[RecordId, date]:
    """Latest order date per customer id"""
    latest: Dict[RecordId, date] = {}
    for order in orders:
        seen = latest.get(order.customer_id)
        if seen is None or order.order_date > seen:
            latest[order.customer_id] = order.order_date
    return latest


def active_customers(
    customers: Iterable[Customer],
    orders: Iterable[Order],
    today: date,
    window_days: int = 90,
) -> List[Customer]:
    """Customers whose latest order is at most window_days before today"""
    latest = last_order_dates(orders)
    return [
        c for c in customers
        if c.id in latest and (today - latest[c.id]).days <= window_days
    ]
