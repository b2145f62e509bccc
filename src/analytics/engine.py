"""
Analytics Engine

Composes the revenue, frequency, pattern and ranking computations into the
summaries shown on the customer analytics page and the business dashboard.

The engine holds only the catalog index and settings; every call works on
the snapshot it is given and leaves it untouched.
"""

from datetime import date
from typing import Iterable, Optional, Sequence

import structlog

from src.analytics.aggregation import RecordIndex
from src.analytics.dates import format_date
from src.analytics.frequency import (
    active_customers,
    customer_tenure_months,
    days_since_last_order,
    last_order,
    next_order_prediction,
    order_frequency,
)
from src.analytics.models import (
    Customer,
    CustomerInsights,
    DashboardSummary,
    Order,
    OrderItem,
    Product,
)
from src.analytics.patterns import classify_buying_patterns
from src.analytics.ranking import recent_order_totals, top_customers, top_products
from src.analytics.revenue import customer_totals, monthly_revenue, product_totals
from src.config import AnalyticsSettings, get_settings

logger = structlog.get_logger(__name__)


class AnalyticsEngine:
    """
    Customer analytics over one product catalog.

    Example:
        engine = AnalyticsEngine(products)
        insights = engine.customer_insights(customer, orders, items)
        insights.next_order_date  # "2024-01-31" or None
    """

    def __init__(
        self,
        products: Iterable[Product],
        settings: Optional[AnalyticsSettings] = None,
    ):
        self.products = list(products)
        self.catalog = RecordIndex(self.products)
        self.settings = settings or get_settings().analytics

    def customer_insights(
        self,
        customer: Customer,
        orders: Sequence[Order],
        items: Sequence[OrderItem],
        today: Optional[date] = None,
    ) -> CustomerInsights:
        """
        Insights for one customer.

        Orders and items are restricted to the customer here, so the full
        snapshot may be passed.
        """
        today = today or date.today()
        own_orders = [o for o in orders if o.customer_id == customer.id]
        own_ids = {o.id for o in own_orders}
        own_items = [it for it in items if it.order_id in own_ids]

        latest = last_order(own_orders)
        insights = CustomerInsights(
            customer=customer,
            totals=customer_totals(own_orders, own_items, self.catalog),
            order_frequency_days=order_frequency(own_orders),
            next_order_date=next_order_prediction(own_orders),
            last_order_date=format_date(latest.order_date) if latest else None,
            days_since_last_order=days_since_last_order(own_orders, today),
            tenure_months=customer_tenure_months(own_orders, today),
            top_products=top_products(own_items, self.catalog, self.settings.top_products_limit),
            monthly_revenue=monthly_revenue(own_orders, own_items, self.catalog),
            buying_patterns=classify_buying_patterns(
                own_orders, own_items, self.products, self.settings.pattern_window_size
            ),
        )

        logger.info(
            "Customer insights computed",
            customer_id=customer.id,
            orders=len(own_orders),
            items=len(own_items),
            order_frequency_days=insights.order_frequency_days,
            next_order_date=insights.next_order_date,
        )
        return insights

    def dashboard_summary(
        self,
        customers: Sequence[Customer],
        orders: Sequence[Order],
        items: Sequence[OrderItem],
        today: Optional[date] = None,
    ) -> DashboardSummary:
        """Business-wide figures over the whole snapshot"""
        today = today or date.today()

        summary = DashboardSummary(
            totals=customer_totals(orders, items, self.catalog),
            active_customers=active_customers(
                customers, orders, today, self.settings.active_customer_days
            ),
            customer_revenue=top_customers(orders, items, self.catalog, customers),
            monthly_revenue=monthly_revenue(orders, items, self.catalog),
            top_products=product_totals(items, self.catalog)[:self.settings.top_products_limit],
            recent_orders=recent_order_totals(
                orders, items, self.catalog, customers, self.settings.recent_orders_limit
            ),
        )

        logger.info(
            "Dashboard summary computed",
            customers=len(customers),
            orders=len(orders),
            items=len(items),
            active_customers=len(summary.active_customers),
            months=len(summary.monthly_revenue),
        )
        return summary
