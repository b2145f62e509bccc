"""
Date Math

Day gaps, month buckets and the ISO string formats shared with the
presentation layer.
"""

from datetime import date, timedelta
from typing import Iterable, List

from src.analytics.models import Order


def days_between(d1: date, d2: date) -> int:
    """Whole days between two calendar dates, regardless of order"""
    return abs((d2 - d1).days)


def months_between(d1: date, d2: date) -> int:
    """Calendar months from d1 to d2; 0 when d2 is not in a later month"""
    months = (d2.year - d1.year) * 12 + (d2.month - d1.month)
    return max(months, 0)


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def month_key(d: date) -> str:
    """YYYY-MM bucket key"""
    return f"{d.year:04d}-{d.month:02d}"


def format_date(d: date) -> str:
    """YYYY-MM-DD"""
    return d.isoformat()


def sort_orders(orders: Iterable[Order]) -> List[Order]:
    """Orders ascending by date; same-day orders keep their input order"""
    return sorted(orders, key=lambda o: o.order_date)
